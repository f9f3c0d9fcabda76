"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from airdrop_estimator.domain.models import PointBalance, Unit


class PointBalanceSchema(BaseModel):
    """Point quantity (or per-day rate) with its unit"""

    value: float = Field(0, ge=0, description="Amount expressed in `unit`")
    unit: Unit = Unit.POINTS

    def to_domain(self) -> PointBalance:
        return PointBalance(value=self.value, unit=self.unit)


class AllocationRequest(BaseModel):
    """Request body for POST /v1/allocation"""

    my_points: PointBalanceSchema
    total_points: PointBalanceSchema
    my_daily_points: PointBalanceSchema = Field(default_factory=PointBalanceSchema)
    total_daily_points: PointBalanceSchema = Field(default_factory=PointBalanceSchema)
    pool_percent: Optional[float] = Field(None, ge=0, le=100, description="Share of total supply in the pool")
    price_usd: Optional[float] = Field(None, ge=0, description="Overrides the cached feed price")
    remaining_days: Optional[int] = Field(None, ge=0, description="Overrides days until settlement")


class ProjectionDaySchema(BaseModel):
    day: int
    new_share_per_day: float
    cumulative_share: float


class AllocationResponse(BaseModel):
    """Response for POST /v1/allocation"""

    pool: float
    share_per_million: Optional[float] = None
    current_share: Optional[float] = None
    current_usd: Optional[float] = None
    projected_share: Optional[float] = None
    projected_usd: Optional[float] = None
    marginal_future_share: Optional[float] = None
    remaining_days: int
    price_usd: Optional[float] = None
    daily_projection: List[ProjectionDaySchema]


class ScoreRequest(BaseModel):
    """Request body for POST /v1/score"""

    config: Optional[Dict[str, Any]] = Field(None, description="Rule configuration, bundled default if omitted")
    inputs: Dict[str, Union[bool, float]] = Field(default_factory=dict)


class RuleDetailSchema(BaseModel):
    id: str
    label: str
    category: str
    raw: float
    effective: float
    score: float
    explain: str


class ScoreResponse(BaseModel):
    """Response for POST /v1/score"""

    version: str
    total: int
    by_category: Dict[str, float]
    details: List[RuleDetailSchema]
    multiplier: float


class PriceResponse(BaseModel):
    """Response for GET /v1/price and POST /v1/price/refresh"""

    token_id: str
    vs_currency: str
    price: Optional[float] = None
    fetched_at: Optional[datetime] = None
    error: Optional[str] = None

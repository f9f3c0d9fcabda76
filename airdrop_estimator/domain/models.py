"""Domain models - pure Python dataclasses representing allocation and scoring entities"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union


class Unit(Enum):
    """Point/rate unit with its absolute multiplier"""

    POINTS = "pts"
    MILLION = "M"
    BILLION = "B"
    TRILLION = "T"

    @property
    def multiplier(self) -> float:
        return _UNIT_MULTIPLIERS[self]


_UNIT_MULTIPLIERS = {
    Unit.POINTS: 1,
    Unit.MILLION: 1_000_000,
    Unit.BILLION: 1_000_000_000,
    Unit.TRILLION: 1_000_000_000_000,
}


@dataclass(frozen=True)
class PointBalance:
    """A point quantity (or per-day rate) expressed in a unit"""

    value: float
    unit: Unit = Unit.POINTS

    @property
    def absolute(self) -> float:
        return self.value * self.unit.multiplier


@dataclass(frozen=True)
class ProjectionDay:
    """One row of the amortized daily projection"""

    day: int
    new_share_per_day: float
    cumulative_share: float


@dataclass
class AllocationEstimate:
    """Output of an allocation estimate (None = not enough data yet)"""

    pool: float
    share_per_million: Optional[float]
    current_share: Optional[float]
    current_usd: Optional[float]
    projected_share: Optional[float]
    projected_usd: Optional[float]
    marginal_future_share: Optional[float]
    remaining_days: int
    daily_projection: List[ProjectionDay] = field(default_factory=list)


# Rule configuration


@dataclass(frozen=True)
class Tier:
    """Scoring band: (gt, lte] scored at score_per_unit"""

    score_per_unit: float
    lte: Optional[float] = None  # upper bound, None = unbounded
    gt: Optional[float] = None  # explicit lower bound, None = previous tier's upper bound


@dataclass(frozen=True)
class TimeWeightedRule:
    id: str
    category: str
    label: str
    input_key: str
    days_key: str
    rate: float
    cap: Optional[float] = None


@dataclass(frozen=True)
class TieredRule:
    id: str
    category: str
    label: str
    input_key: str
    tiers: Tuple[Tier, ...]
    cap: Optional[float] = None


@dataclass(frozen=True)
class SumRule:
    id: str
    category: str
    label: str
    input_key: str
    weight: float
    cap: Optional[float] = None


@dataclass(frozen=True)
class BooleanRule:
    id: str
    category: str
    label: str
    input_key: str
    score: float


@dataclass(frozen=True)
class MultiplierRule:
    id: str
    category: str
    label: str
    input_key: str
    base: float
    per_unit: float
    max: Optional[float] = None


Rule = Union[TimeWeightedRule, TieredRule, SumRule, BooleanRule, MultiplierRule]


@dataclass(frozen=True)
class Category:
    id: str
    label: str


@dataclass(frozen=True)
class ScoringConfig:
    """Versioned, validated rule set"""

    version: str
    rules: Tuple[Rule, ...]
    categories: Tuple[Category, ...] = ()


@dataclass
class RuleDetail:
    """Per-rule audit record"""

    id: str
    label: str
    category: str
    raw: float
    effective: float
    score: float
    explain: str


@dataclass
class ScoringResult:
    """Output of a scoring pass"""

    version: str
    total: int
    by_category: Dict[str, float]
    details: List[RuleDetail]
    multiplier: float

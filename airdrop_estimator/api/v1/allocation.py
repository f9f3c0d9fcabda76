"""POST /v1/allocation - reward pool share estimate endpoint"""

import time

from fastapi import APIRouter, Depends, Request

from airdrop_estimator.api.v1.schemas import AllocationRequest, AllocationResponse, ProjectionDaySchema
from airdrop_estimator.api.dependencies import get_price_feed, get_remaining_days, get_request_id
from airdrop_estimator.config import settings
from airdrop_estimator.domain.allocation import estimate_allocation
from airdrop_estimator.infrastructure.clients.price import PriceFeed
from airdrop_estimator.infrastructure.observability.metrics import record_estimate
from airdrop_estimator.infrastructure.observability.logging import log_estimate

router = APIRouter()


@router.post("/allocation", response_model=AllocationResponse)
def create_allocation_estimate(
    request_body: AllocationRequest,
    request: Request,
    price_feed: PriceFeed = Depends(get_price_feed),
    days_to_settlement: int = Depends(get_remaining_days),
):
    """
    Estimate the caller's share of the reward pool.

    Flow:
    1. Resolve pool percent, price and horizon (request values win over defaults)
    2. Compute current, projected and marginal shares
    3. Amortize the marginal share into a daily projection

    Missing data never fails the request: unknown values come back as null.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    pool_percent = (
        request_body.pool_percent
        if request_body.pool_percent is not None
        else settings.default_pool_percent
    )
    price = request_body.price_usd if request_body.price_usd is not None else price_feed.price
    days = request_body.remaining_days if request_body.remaining_days is not None else days_to_settlement

    estimate = estimate_allocation(
        actor=request_body.my_points.to_domain(),
        total=request_body.total_points.to_domain(),
        total_supply=settings.token_total_supply,
        pool_percent=pool_percent,
        remaining_days=days,
        actor_daily=request_body.my_daily_points.to_domain(),
        total_daily=request_body.total_daily_points.to_domain(),
        price=price,
    )

    duration_ms = (time.time() - start_time) * 1000
    record_estimate(estimate.current_share is not None)
    log_estimate(request_id, estimate.current_share, days, price is not None, duration_ms)

    return AllocationResponse(
        pool=estimate.pool,
        share_per_million=estimate.share_per_million,
        current_share=estimate.current_share,
        current_usd=estimate.current_usd,
        projected_share=estimate.projected_share,
        projected_usd=estimate.projected_usd,
        marginal_future_share=estimate.marginal_future_share,
        remaining_days=estimate.remaining_days,
        price_usd=price,
        daily_projection=[
            ProjectionDaySchema(
                day=row.day,
                new_share_per_day=row.new_share_per_day,
                cumulative_share=row.cumulative_share,
            )
            for row in estimate.daily_projection
        ],
    )

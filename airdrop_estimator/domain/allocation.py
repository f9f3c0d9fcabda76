"""Allocation calculator - points-proportional share of a fixed reward pool"""

from collections.abc import Sequence
from typing import List, Optional

from airdrop_estimator.domain.models import AllocationEstimate, PointBalance, ProjectionDay


def compute_pool(total_supply: float, pool_percent: float) -> float:
    """Reward pool carved out of the total token supply"""
    return total_supply * pool_percent / 100


def compute_share_per_million(total_abs: float, pool: float) -> Optional[float]:
    """Pool tokens allocated to every 1M points (None until the network total is known)"""
    if not total_abs:
        return None
    return (pool / total_abs) * 1_000_000


def compute_current_share(actor_abs: float, total_abs: float, pool: float) -> Optional[float]:
    """
    Actor's proportional share of the pool today.

    Returns None (not 0) when either balance is zero: that means the estimate
    cannot be made yet, which is different from a legitimate zero share.
    """
    if not actor_abs or not total_abs:
        return None
    return (actor_abs / total_abs) * pool


def compute_usd_value(share: Optional[float], price: Optional[float]) -> Optional[float]:
    """USD value of a share; withheld when either side is unknown"""
    if share is None or price is None:
        return None
    return share * price


def compute_projected_share(
    actor_abs: float,
    total_abs: float,
    actor_daily_rate: float,
    total_daily_rate: float,
    remaining_days: int,
    pool: float,
) -> float:
    """Share at settlement when both the actor and the network keep accruing at their daily rates"""
    final_actor = actor_abs + actor_daily_rate * remaining_days
    final_total = total_abs + total_daily_rate * remaining_days
    if final_total <= 0:
        return 0
    return (final_actor / final_total) * pool


def compute_marginal_future_share(
    actor_abs: float,
    total_abs: float,
    actor_daily_rate: float,
    total_daily_rate: float,
    remaining_days: int,
    pool: float,
) -> float:
    """
    Extra share earned only by the actor's own continued accrual.

    Compares the full projection against a counterfactual where the actor
    stops accruing but the network still grows at total_daily_rate. The
    subtraction is an approximation of that counterfactual, and it is floored
    at 0 because a negative "bonus from my own growth" is not meaningful.
    """
    with_all = compute_projected_share(
        actor_abs, total_abs, actor_daily_rate, total_daily_rate, remaining_days, pool
    )

    frozen_total = total_abs + total_daily_rate * remaining_days
    without_actor_growth = (actor_abs / frozen_total) * pool if frozen_total > 0 else 0

    return max(0, with_all - without_actor_growth)


class DailyProjection(Sequence):
    """
    Linear amortization of the marginal future share over the remaining days.

    Rows are computed on access, so the sequence is lazy and can be iterated
    any number of times. Day numbering starts at 1.
    """

    def __init__(self, start_share: float, marginal_future_share: float, remaining_days: int):
        self.start_share = start_share
        self.remaining_days = remaining_days
        self.per_day = marginal_future_share / remaining_days if remaining_days else 0.0

    def __len__(self) -> int:
        return self.remaining_days

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError("projection day out of range")

        day = index + 1
        return ProjectionDay(
            day=day,
            new_share_per_day=self.per_day,
            cumulative_share=self.start_share + self.per_day * day,
        )


def build_daily_projection(
    start_share: Optional[float],
    marginal_future_share: Optional[float],
    remaining_days: int,
) -> Sequence[ProjectionDay]:
    """Daily projection rows, empty when there is nothing to project"""
    if start_share is None or marginal_future_share is None or remaining_days <= 0:
        return DailyProjection(0.0, 0.0, 0)
    return DailyProjection(start_share, marginal_future_share, remaining_days)


def estimate_allocation(
    actor: PointBalance,
    total: PointBalance,
    total_supply: float,
    pool_percent: float,
    remaining_days: int,
    actor_daily: PointBalance | None = None,
    total_daily: PointBalance | None = None,
    price: Optional[float] = None,
) -> AllocationEstimate:
    """
    Main entry point: full estimate for one actor, today and at settlement.

    Projection fields stay None while the current share cannot be computed,
    so a caller can render a single "insufficient data" state.
    """
    pool = compute_pool(total_supply, pool_percent)
    actor_abs = actor.absolute
    total_abs = total.absolute
    actor_rate = actor_daily.absolute if actor_daily else 0.0
    total_rate = total_daily.absolute if total_daily else 0.0

    current_share = compute_current_share(actor_abs, total_abs, pool)

    projected_share: Optional[float] = None
    marginal: Optional[float] = None
    daily: List[ProjectionDay] = []
    if current_share is not None:
        projected_share = compute_projected_share(
            actor_abs, total_abs, actor_rate, total_rate, remaining_days, pool
        )
        marginal = compute_marginal_future_share(
            actor_abs, total_abs, actor_rate, total_rate, remaining_days, pool
        )
        daily = list(build_daily_projection(current_share, marginal, remaining_days))

    return AllocationEstimate(
        pool=pool,
        share_per_million=compute_share_per_million(total_abs, pool),
        current_share=current_share,
        current_usd=compute_usd_value(current_share, price),
        projected_share=projected_share,
        projected_usd=compute_usd_value(projected_share, price),
        marginal_future_share=marginal,
        remaining_days=remaining_days,
        daily_projection=daily,
    )

"""Date manipulation utilities"""

import math
from datetime import date, datetime, time


def start_of_day(moment: datetime) -> datetime:
    """Midnight of the given moment's day (keeps tzinfo)"""
    return datetime.combine(moment.date(), time.min, tzinfo=moment.tzinfo)


def remaining_days(settlement: date | datetime, now: datetime | None = None) -> int:
    """
    Whole days left until the settlement instant, counted from the start of today.

    A plain date settles at its midnight. Partial days round up, past
    settlements clamp to 0.
    """
    if now is None:
        # match the settlement's timezone so aware and naive never mix
        tz = settlement.tzinfo if isinstance(settlement, datetime) else None
        now = datetime.now(tz)

    if not isinstance(settlement, datetime):
        settlement = datetime.combine(settlement, time.min, tzinfo=now.tzinfo)

    diff = settlement - start_of_day(now)
    return max(0, math.ceil(diff.total_seconds() / 86400))

"""
Trading calendar queries over a sorted list of indexed dates.

The calendar is whatever the data says it is: a date is a trading day when the
snapshot carries an underlying price for it. No exchange holiday rules are applied.
"""

from bisect import bisect_left, bisect_right
from datetime import date
from typing import List, Optional, Sequence


def trading_days_between(days: Sequence[date], start: date, end_inclusive: date) -> List[date]:
    """
    Slice of `days` within [start, end_inclusive].

    Args:
        days: Ascending, de-duplicated trading dates
        start: First date of the window
        end_inclusive: Last date of the window

    Returns:
        Ascending list, empty when start > end_inclusive

    Example:
        >>> d = [date(2025, 1, 2), date(2025, 1, 3), date(2025, 1, 6)]
        >>> trading_days_between(d, date(2025, 1, 3), date(2025, 1, 6))
        [datetime.date(2025, 1, 3), datetime.date(2025, 1, 6)]
    """
    if start > end_inclusive:
        return []
    lo = bisect_left(days, start)
    hi = bisect_right(days, end_inclusive)
    return list(days[lo:hi])


def prev_trading_day(days: Sequence[date], before: date) -> Optional[date]:
    """Latest date in `days` strictly earlier than `before`"""
    i = bisect_left(days, before)
    return days[i - 1] if i > 0 else None

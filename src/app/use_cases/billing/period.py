"""Billing period helpers"""

import calendar
from datetime import date
from typing import Optional, Tuple
from libs.result import Error


def period_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last day of a billing month"""
    _, last_day = calendar.monthrange(year, month)
    return date(year, month, 1), date(year, month, last_day)


def previous_period(today: date) -> Tuple[int, int]:
    """(year, month) of the month before ``today``"""
    if today.month == 1:
        return today.year - 1, 12
    return today.year, today.month - 1


def validate_period(year: int, month: int) -> Optional[Error]:
    """Return a VALIDATION_ERROR for an impossible period, None otherwise"""
    if not 1 <= month <= 12 or not 1 <= year <= 9999:
        return Error(
            code="VALIDATION_ERROR",
            message=f"Invalid billing period {year}-{month}",
            reason="month must be 1-12 and year 1-9999",
        )
    return None

"""
Core utility functions for the insurance agent dashboard.

Date arithmetic and amount coercion helpers used by the rules engine.
None of these raise on bad input: unparseable dates come back as None
and unparseable amounts as Decimal('0').
"""

import math
from datetime import date, datetime, time, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

SECONDS_PER_DAY = 86400

CENTS = Decimal('0.01')


def to_datetime(value) -> Optional[datetime]:
    """
    Coerce a date-like value into a timezone-aware datetime.

    Accepts:
        - datetime (naive values are treated as UTC)
        - date (midnight UTC)
        - ISO-8601 string, e.g. '2024-01-01' or '2024-01-01T08:30:00+03:00'

    Returns:
        Aware datetime, or None if the value cannot be parsed.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = isoparse(text)
        except (ValueError, OverflowError):
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def add_years(value, years: int) -> Optional[datetime]:
    """
    Shift a date by a whole number of years.

    Uses relativedelta, which clamps to the last valid day of the month:
    Feb 29 shifted into a non-leap year becomes Feb 28.

    Args:
        value: Anything accepted by to_datetime().
        years: Number of years to add (may be negative).

    Returns:
        Aware datetime, or None if value is unparseable.
    """
    parsed = to_datetime(value)
    if parsed is None:
        return None
    try:
        return parsed + relativedelta(years=years)
    except (ValueError, OverflowError):
        return None


def days_between(start, end) -> Optional[int]:
    """
    Signed number of whole days from start to end, rounded up.

    ceil((end - start) / 1 day). Returns None if either side is
    unparseable.

    Examples:
        days_between('2024-01-01', '2024-01-31') → 30
        days_between('2024-01-01T12:00', '2024-01-02') → 1
        days_between('2024-01-31', '2024-01-01') → -30
    """
    a = to_datetime(start)
    b = to_datetime(end)
    if a is None or b is None:
        return None
    return math.ceil((b - a).total_seconds() / SECONDS_PER_DAY)


def to_amount(value) -> Decimal:
    """
    Coerce a monetary value into Decimal, defaulting to 0.

    Missing, blank, non-numeric and non-finite values all become 0.
    """
    if value is None or isinstance(value, bool):
        return Decimal('0')
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return Decimal('0')
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal('0')
    if not amount.is_finite():
        return Decimal('0')
    return amount


def to_money(value) -> Optional[Decimal]:
    """
    to_amount() rounded half-up to cents.

    Returns None when the amount is too large to round at the default
    Decimal precision.
    """
    try:
        return to_amount(value).quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return None

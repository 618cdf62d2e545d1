"""Cell formatters shared by every sheet builder.

All three are total: ``None`` maps to an empty string and malformed input
never raises.
"""

import math
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Union

from src.core.config import settings
from src.shared.utils.money import parse_amount, round_money

DateLike = Union[date, datetime, str]
AmountLike = Union[Decimal, float, int, str]

_SECONDS_PER_DAY = 24 * 60 * 60


def _parse_iso(text: str) -> datetime | None:
    """Parse an ISO date or datetime string. Trailing 'Z' means UTC."""
    text = text.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _to_utc_datetime(value: DateLike) -> datetime | None:
    """Normalize to an aware UTC datetime. Date-only values mean UTC midnight."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    else:
        parsed = _parse_iso(str(value))
        if parsed is None:
            return None
    try:
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        # offset pushes the instant outside datetime's year range
        return None


def format_date(value: DateLike | None) -> DateLike:
    """
    Render a date-like value as YYYY-MM-DD.

    Examples:
        >>> format_date(None)
        ''
        >>> format_date("2026-03-04T23:30:00+00:00")
        '2026-03-04'
        >>> format_date("next tuesday")
        'next tuesday'
    """
    if value is None or value == "":
        return ""
    if isinstance(value, datetime):
        parsed = _to_utc_datetime(value) if value.tzinfo is not None else value
        return value if parsed is None else parsed.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    parsed = _to_utc_datetime(value)
    if parsed is None:
        return value
    return parsed.date().isoformat()


def format_currency(amount: AmountLike | None, symbol: str | None = None) -> str:
    """
    Render an amount with the currency glyph, thousands separators and 2 decimals.

    Examples:
        >>> format_currency(1234.5)
        '₱1,234.50'
        >>> format_currency(None)
        ''
    """
    if amount is None:
        return ""
    glyph = settings.currency_symbol if symbol is None else symbol
    value = parse_amount(amount)
    if value is None:
        return str(amount)
    try:
        rounded = round_money(value)
    except InvalidOperation:
        return str(amount)
    return f"{glyph}{rounded:,.2f}"


def days_remaining(expiry: DateLike | None, now: datetime | None = None) -> int | str:
    """
    Whole days until expiry, rounded up. Negative once expired (not clamped).

    Returns '' when expiry is absent or unparseable.
    """
    if expiry is None or expiry == "":
        return ""
    expiry_at = _to_utc_datetime(expiry)
    if expiry_at is None:
        return ""
    current = now or datetime.now(timezone.utc)
    if current.tzinfo is None:
        current = current.replace(tzinfo=timezone.utc)
    return math.ceil((expiry_at - current).total_seconds() / _SECONDS_PER_DAY)

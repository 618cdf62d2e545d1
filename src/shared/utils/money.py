from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

MoneyLike = Union[Decimal, float, int, str]

ZERO = Decimal("0.00")


def parse_amount(value: MoneyLike | None) -> Decimal | None:
    """
    Read a stored amount as Decimal. None for missing, malformed or non-finite input.

    Examples:
        >>> parse_amount("1500.5")
        Decimal('1500.5')
        >>> parse_amount("abc") is None
        True
    """
    if value is None:
        return None
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


def round_money(value: MoneyLike) -> Decimal:
    """
    Round monetary value to 2 decimal places using ROUND_HALF_UP.

    Halves round away from zero for negative amounts too. Raises
    InvalidOperation when the rounded value needs more digits than the
    decimal context allows.

    Examples:
        >>> round_money(10.125)
        Decimal('10.13')
        >>> round_money("-10.125")
        Decimal('-10.13')
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def sum_money(values: Iterable[MoneyLike | None]) -> Decimal:
    """Sum amounts, skipping missing or malformed ones. Rounded to cents when representable."""
    total = ZERO
    for value in values:
        amount = parse_amount(value)
        if amount is not None:
            total += amount
    try:
        return round_money(total)
    except InvalidOperation:
        return total

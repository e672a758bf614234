from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from ..core.constants import MONEY_QUANTUM
from ..core.exceptions import ValidationError


def to_money(value: Any) -> Decimal:
    """Quantize a number to two decimal places.

    Floats go through ``str`` first so binary noise never reaches the total.
    """
    if isinstance(value, float):
        value = str(value)
    return Decimal(value).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def parse_money(value: Any, field_name: str) -> Decimal:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_name} is required")
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        money = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number")
    if not money.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    if money != money.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP):
        raise ValidationError(f"{field_name} must have at most 2 decimal places")
    return to_money(money)


def format_money(value: Decimal) -> str:
    return str(to_money(value))

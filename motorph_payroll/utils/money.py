# motorph_payroll/utils/money.py

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any, Optional

from motorph_payroll.exceptions import ValidationError

CENTAVO = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value: Any, field_name: str = "value") -> Decimal:
    """Converts ints, floats and numeric strings to Decimal (floats go through str to avoid binary noise)."""
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} must be a number, got {value!r}")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValidationError(f"{field_name} must be a number, got {value!r}") from e
    if not result.is_finite():
        raise ValidationError(f"{field_name} must be a finite number, got {value!r}")
    return result


def to_optional_decimal(value: Any, field_name: str = "value") -> Optional[Decimal]:
    return None if value is None else to_decimal(value, field_name)


def quantize_money(value: Decimal) -> Decimal:
    return value.quantize(CENTAVO, rounding=ROUND_HALF_UP)


def format_peso(value: Decimal) -> str:
    return f"₱{quantize_money(value):,.2f}"

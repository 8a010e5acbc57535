from decimal import Decimal
from typing import Any, Callable, List, Optional

from utils.exceptions import ValidationException
from utils.math.financial_calculator import FinancialCalculator


def validate_decimal(value: Any, min_value: Optional[Decimal] = None,
                     max_value: Optional[Decimal] = None, field_name: str = "Value") -> Decimal:
    """
    Validate and convert a value to Decimal.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive)
        field_name: Name of field for error messages

    Returns:
        Decimal: Validated value

    Raises:
        DataFormatException: If the value is not numeric
        ValidationException: If the value is out of range
    """
    decimal_value = FinancialCalculator.to_decimal(value)
    if min_value is not None and decimal_value < min_value:
        raise ValidationException(f"{field_name} must be greater than or equal to {min_value}")
    if max_value is not None and decimal_value > max_value:
        raise ValidationException(f"{field_name} must be less than or equal to {max_value}")
    return decimal_value

def validate_money(value: Any, field_name: str = "Amount") -> Decimal:
    """Validate a non-negative money value."""
    return validate_decimal(value, min_value=Decimal("0"), field_name=field_name)

def validate_vat_rate(value: Any) -> Decimal:
    """Validate a VAT rate given as a fraction between 0 and 1."""
    return validate_decimal(value, min_value=Decimal("0"), max_value=Decimal("1"), field_name="VAT rate")

def validate_percentage(value: Any, field_name: str = "Discount percentage") -> Decimal:
    """Validate a percentage between 0 and 100 inclusive."""
    return validate_decimal(value, min_value=Decimal("0"), max_value=Decimal("100"), field_name=field_name)

def validate_quantity(value: Any) -> int:
    """
    Validate a quantity value.
    Must be a positive whole number; integral Decimals and floats are accepted.
    """
    decimal_value = validate_decimal(value, min_value=Decimal("1"), field_name="Quantity")
    if decimal_value != decimal_value.to_integral_value():
        raise ValidationException("Quantity must be a whole number")
    return int(decimal_value)

def validate_list(value: Any, item_validator: Callable[[Any], Any],
                  min_length: int = 0, max_length: Optional[int] = None) -> List[Any]:
    if not isinstance(value, (list, tuple)):
        raise ValidationException("Value must be a list")
    if len(value) < min_length:
        raise ValidationException(f"List must have at least {min_length} items")
    if max_length is not None and len(value) > max_length:
        raise ValidationException(f"List can have at most {max_length} items")
    return [item_validator(item) for item in value]

from decimal import Decimal, InvalidOperation, ROUND_HALF_DOWN, ROUND_HALF_UP
from typing import Union

from utils.exceptions import DataFormatException

Number = Union[int, float, Decimal, str]


class FinancialCalculator:
    """
    Centralized calculator for the pricing arithmetic of a sale so that
    rounding stays consistent between the pipeline and the calculator facade.
    """

    # matching models.enums.VAT_PRECISION
    VAT_PRECISION = 4
    PERCENT_BASE = Decimal("100")
    ZERO = Decimal("0")

    @staticmethod
    def _to_decimal(value: Number) -> Decimal:
        if isinstance(value, bool):
            raise DataFormatException(f"Invalid numeric value: {value!r}")
        if isinstance(value, Decimal):
            result = value
        else:
            try:
                if isinstance(value, float):
                    result = Decimal(str(value))  # Convert float to string first to avoid precision issues
                else:
                    result = Decimal(value)
            except (InvalidOperation, TypeError, ValueError):
                raise DataFormatException(f"Invalid numeric value: {value!r}")
        if not result.is_finite():
            raise DataFormatException(f"Invalid numeric value: {value!r}")
        return result

    @staticmethod
    def to_decimal(value: Number) -> Decimal:
        """Convert an int, float, str or Decimal into an exact Decimal."""
        return FinancialCalculator._to_decimal(value)

    @staticmethod
    def round_half_up(value: Decimal, places: int = VAT_PRECISION) -> Decimal:
        """
        Round to a fixed number of decimal places, ties toward positive infinity.
        0.00005 -> 0.0001 and -0.00005 -> 0.0000 at 4 places.
        """
        value = FinancialCalculator._to_decimal(value)
        exponent = Decimal(1).scaleb(-places)
        rounding = ROUND_HALF_DOWN if value < 0 else ROUND_HALF_UP
        return value.quantize(exponent, rounding=rounding)

    @staticmethod
    def calculate_line_price(unit_price: Number, quantity: int) -> Decimal:
        """
        Calculate the price of a line item.
        Formula: unit_price * quantity, unrounded.
        """
        return FinancialCalculator._to_decimal(unit_price) * FinancialCalculator._to_decimal(quantity)

    @staticmethod
    def calculate_line_vat(unit_price: Number, vat_rate: Number, quantity: int) -> Decimal:
        """
        Calculate the VAT of a line item.
        Formula: unit_price * vat_rate * quantity, unrounded.
        """
        price = FinancialCalculator._to_decimal(unit_price)
        rate = FinancialCalculator._to_decimal(vat_rate)
        return price * rate * FinancialCalculator._to_decimal(quantity)

    @staticmethod
    def calculate_vat_percentage(total_vat: Decimal, total_price: Decimal,
                                 places: int = VAT_PRECISION) -> Decimal:
        """
        Blended VAT rate of a sale: total_vat / total_price, rounded.

        A zero total price has no meaningful rate; the result is then 0
        instead of a division error.
        """
        if total_price == 0:
            return FinancialCalculator.round_half_up(FinancialCalculator.ZERO, places)
        return FinancialCalculator.round_half_up(total_vat / total_price, places)

    @staticmethod
    def calculate_discounted_price(total_price: Decimal, discount_percentage: Decimal) -> Decimal:
        """
        Apply a percentage reduction to a total.
        Formula: total_price * (1 - discount_percentage / 100), unrounded.
        """
        price = FinancialCalculator._to_decimal(total_price)
        percentage = FinancialCalculator._to_decimal(discount_percentage)
        return price * (1 - percentage / FinancialCalculator.PERCENT_BASE)

    @staticmethod
    def calculate_change(amount_paid: Decimal, amount_due: Decimal) -> Decimal:
        """Change owed to the customer; negative when the customer underpaid."""
        return FinancialCalculator._to_decimal(amount_paid) - FinancialCalculator._to_decimal(amount_due)

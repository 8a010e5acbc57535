from dataclasses import dataclass
from decimal import Decimal
from collections.abc import Mapping, Sequence
from typing import Any, Dict

from models.enums import ValidationMode
from utils.decorators import validate_input
from utils.exceptions import DataFormatException, ValidationException
from utils.math.financial_calculator import FinancialCalculator
from utils.system.logger import logger
from utils.validation.validators import validate_money, validate_quantity, validate_vat_rate


@dataclass(frozen=True)
class LineItem:
    """One product entry of a sale.

    The plain constructor only coerces types; use ``LineItem.create`` with
    ``ValidationMode.STRICT`` to reject negative prices, VAT rates outside
    [0, 1] and non-positive quantities.
    """

    unit_price: Decimal
    vat_rate: Decimal  # fraction, 0.12 for 12%
    quantity: int

    def __post_init__(self):
        object.__setattr__(self, "unit_price", FinancialCalculator.to_decimal(self.unit_price))
        object.__setattr__(self, "vat_rate", FinancialCalculator.to_decimal(self.vat_rate))
        object.__setattr__(self, "quantity", self.normalize_quantity(self.quantity))

    @staticmethod
    def normalize_quantity(quantity: Any) -> int:
        """Coerce a quantity to int without range checks."""
        value = FinancialCalculator.to_decimal(quantity)
        if value != value.to_integral_value():
            raise DataFormatException(f"Quantity must be a whole number: {quantity!r}")
        return int(value)

    @classmethod
    @validate_input()
    def create(cls, unit_price: Any, vat_rate: Any, quantity: Any,
               mode: ValidationMode = ValidationMode.PERMISSIVE) -> "LineItem":
        if ValidationMode(mode) is ValidationMode.STRICT:
            unit_price = validate_money(unit_price, "Unit price")
            vat_rate = validate_vat_rate(vat_rate)
            quantity = validate_quantity(quantity)
        return cls(unit_price=unit_price, vat_rate=vat_rate, quantity=quantity)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any],
                  mode: ValidationMode = ValidationMode.PERMISSIVE) -> "LineItem":
        try:
            unit_price = data["unit_price"] if "unit_price" in data else data["price"]
            vat_rate = data["vat_rate"] if "vat_rate" in data else data["vat"]
            quantity = data["quantity"]
        except KeyError as e:
            logger.error("Error creating LineItem from mapping", extra={"row": dict(data)})
            raise ValidationException(f"Missing line item field: {e.args[0]}")
        return cls.create(unit_price, vat_rate, quantity, mode=mode)

    @classmethod
    def coerce(cls, item: Any, mode: ValidationMode = ValidationMode.PERMISSIVE) -> "LineItem":
        """Build a LineItem from a LineItem, a mapping or a (price, vat, quantity) sequence."""
        if isinstance(item, LineItem):
            if ValidationMode(mode) is ValidationMode.STRICT:
                return cls.create(item.unit_price, item.vat_rate, item.quantity, mode=mode)
            return item
        if isinstance(item, Mapping):
            return cls.from_dict(item, mode=mode)
        if isinstance(item, Sequence) and not isinstance(item, (str, bytes)) and len(item) == 3:
            return cls.create(*item, mode=mode)
        raise DataFormatException(f"Unsupported line item: {item!r}")

    def line_price(self) -> Decimal:
        return FinancialCalculator.calculate_line_price(self.unit_price, self.quantity)

    def line_vat(self) -> Decimal:
        return FinancialCalculator.calculate_line_vat(self.unit_price, self.vat_rate, self.quantity)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unit_price": str(self.unit_price),
            "vat_rate": str(self.vat_rate),
            "quantity": self.quantity,
            "line_price": str(self.line_price()),
        }

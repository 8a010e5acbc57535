from decimal import Decimal
from typing import Any, Iterable, Optional

from config import Config
from models.enums import MAX_DISCOUNT_PERCENTAGE, VAT_PRECISION, ValidationMode
from models.line_item import LineItem
from models.sale_totals import SaleTotals
from services import pricing
from services.pricing import ItemInput
from utils.decorators import validate_input
from utils.system.logger import log_method, logger
from utils.validation.validators import validate_list, validate_money, validate_percentage


class SaleCalculator:
    """Running totals of one in-progress sale.

    Expected call order: ``compute_totals``, optionally ``set_discount`` and
    ``compute_discounted_price``, then ``register_amount_paid`` and
    ``compute_change``. The order is a precondition, not checked at runtime.

    In ``ValidationMode.STRICT`` the inputs of each operation are range
    checked and a ``ValidationException`` leaves the state unchanged. The
    default ``PERMISSIVE`` mode accepts negative or out-of-range values and
    lets the arithmetic follow.
    """

    def __init__(self, mode: Optional[ValidationMode] = None, places: Optional[int] = None):
        if mode is None:
            mode = Config.get("validation_mode", ValidationMode.PERMISSIVE.value)
        if places is None:
            places = Config.get("rounding_places", VAT_PRECISION)
        self._mode = ValidationMode(mode)
        self._places = places
        self._totals = SaleTotals()

    @classmethod
    def clone(cls, source: "SaleCalculator") -> "SaleCalculator":
        """Independent copy of ``source``; later operations on either do not affect the other."""
        duplicate = cls(mode=source._mode, places=source._places)
        # SaleTotals and Decimal are immutable, so the snapshot can be shared
        duplicate._totals = source._totals
        return duplicate

    def __copy__(self) -> "SaleCalculator":
        return SaleCalculator.clone(self)

    def __deepcopy__(self, memo) -> "SaleCalculator":
        return SaleCalculator.clone(self)

    @property
    def strict(self) -> bool:
        return self._mode is ValidationMode.STRICT

    def _line_item(self, item: ItemInput) -> LineItem:
        return LineItem.coerce(item, mode=self._mode)

    @log_method()
    @validate_input()
    def compute_totals(self, items: Iterable[ItemInput]) -> Decimal:
        """Replace total price, total VAT and VAT percentage from ``items``; returns the total price."""
        line_items = validate_list(list(items), self._line_item)
        self._totals = pricing.compute_totals(line_items, self._totals, self._places)
        logger.debug(
            "Sale totals computed",
            extra={
                "items": len(line_items),
                "total_price": self._totals.total_price,
                "total_vat": self._totals.total_vat,
                "total_vat_percentage": self._totals.total_vat_percentage,
            },
        )
        return self._totals.total_price

    @log_method()
    @validate_input()
    def set_discount(self, percentage: Any) -> None:
        if self.strict:
            percentage = validate_percentage(percentage)
        self._totals = pricing.apply_discount(self._totals, percentage)

    @log_method()
    def compute_discounted_price(self) -> Decimal:
        self._totals = pricing.compute_discounted_price(self._totals)
        if self._totals.discount_percentage > MAX_DISCOUNT_PERCENTAGE:
            logger.warning(
                "Discount above 100% gives a negative price",
                extra={"discount_percentage": self._totals.discount_percentage},
            )
        return self._totals.discounted_price

    @log_method()
    @validate_input()
    def register_amount_paid(self, amount: Any) -> None:
        if self.strict:
            amount = validate_money(amount, "Amount paid")
        self._totals = pricing.register_amount_paid(self._totals, amount)

    @log_method()
    def compute_change(self) -> None:
        self._totals = pricing.compute_change(self._totals)
        if self._totals.change < 0:
            logger.info(
                "Amount paid does not cover the sale",
                extra={"amount_due": self._totals.amount_due, "change": self._totals.change},
            )

    def snapshot(self) -> SaleTotals:
        """Current totals as an immutable value, e.g. for a receipt."""
        return self._totals

    @property
    def totals(self) -> SaleTotals:
        return self._totals

    @property
    def validation_mode(self) -> ValidationMode:
        return self._mode

    @property
    def total_price(self) -> Decimal:
        return self._totals.total_price

    @property
    def total_vat(self) -> Decimal:
        return self._totals.total_vat

    @property
    def total_vat_percentage(self) -> Decimal:
        return self._totals.total_vat_percentage

    @property
    def discount_percentage(self) -> Decimal:
        return self._totals.discount_percentage

    @property
    def discounted_price(self) -> Decimal:
        """Discounted price, or 0 while none has been computed (see ``discount_applied``)."""
        if self._totals.discounted_price is None:
            return Decimal("0")
        return self._totals.discounted_price

    @property
    def discount_applied(self) -> bool:
        return self._totals.discount_applied

    @property
    def amount_paid(self) -> Decimal:
        return self._totals.amount_paid

    @property
    def change(self) -> Decimal:
        return self._totals.change

    def __repr__(self) -> str:
        return f"SaleCalculator(mode={self._mode.value}, totals={self._totals})"

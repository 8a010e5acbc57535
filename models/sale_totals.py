from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional

ZERO = Decimal("0")


@dataclass(frozen=True)
class SaleTotals:
    """Immutable snapshot of the running totals of one sale.

    ``discounted_price`` is ``None`` until a discounted price has been
    computed. That is distinct from a computed 0% discount, and decides
    what ``change`` is measured against.
    """

    total_price: Decimal = ZERO
    total_vat: Decimal = ZERO
    total_vat_percentage: Decimal = ZERO
    discount_percentage: Decimal = ZERO
    discounted_price: Optional[Decimal] = None
    amount_paid: Decimal = ZERO
    change: Decimal = ZERO

    @property
    def discount_applied(self) -> bool:
        return self.discounted_price is not None

    @property
    def amount_due(self) -> Decimal:
        """Price the customer owes: the discounted price once computed, else the total."""
        if self.discounted_price is None:
            return self.total_price
        return self.discounted_price

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_price": str(self.total_price),
            "total_vat": str(self.total_vat),
            "total_vat_percentage": str(self.total_vat_percentage),
            "discount_percentage": str(self.discount_percentage),
            "discounted_price": None if self.discounted_price is None else str(self.discounted_price),
            "discount_applied": self.discount_applied,
            "amount_paid": str(self.amount_paid),
            "change": str(self.change),
        }

    def __str__(self) -> str:
        return (
            f"SaleTotals(total_price={self.total_price}, total_vat={self.total_vat}, "
            f"total_vat_percentage={self.total_vat_percentage}, "
            f"discount_percentage={self.discount_percentage}, "
            f"discounted_price={self.discounted_price}, amount_paid={self.amount_paid}, "
            f"change={self.change})"
        )

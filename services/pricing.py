"""Pure pricing pipeline for a single sale.

Every function takes a ``SaleTotals`` and returns a new one; nothing is
mutated in place. The expected order is::

    compute_totals -> [apply_discount -> compute_discounted_price]
                   -> register_amount_paid -> compute_change

Ordering is the caller's contract and is not checked here.
"""

from dataclasses import replace
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from models.enums import VAT_PRECISION
from models.line_item import LineItem
from models.sale_totals import SaleTotals
from utils.math.financial_calculator import FinancialCalculator

ItemInput = Union[LineItem, Mapping[str, Any], Sequence[Any]]


def compute_totals(items: Iterable[ItemInput], totals: Optional[SaleTotals] = None,
                   places: int = VAT_PRECISION) -> SaleTotals:
    """Accumulate price and VAT over ``items`` and store the sale totals.

    ``total_price`` keeps full precision; ``total_vat`` and
    ``total_vat_percentage`` are rounded half-up to ``places`` decimals. The
    percentage divides the unrounded VAT sum, and is 0 for a zero total price.
    Only these three fields are replaced.
    """
    if totals is None:
        totals = SaleTotals()
    price = Decimal("0")
    vat = Decimal("0")

    for item in items:
        line = LineItem.coerce(item)
        price += line.line_price()
        vat += line.line_vat()

    return replace(
        totals,
        total_price=price,
        total_vat=FinancialCalculator.round_half_up(vat, places),
        total_vat_percentage=FinancialCalculator.calculate_vat_percentage(vat, price, places),
    )


def apply_discount(totals: SaleTotals, percentage: Any) -> SaleTotals:
    return replace(totals, discount_percentage=FinancialCalculator.to_decimal(percentage))


def compute_discounted_price(totals: SaleTotals) -> SaleTotals:
    """Price after the stored discount; percentages above 100 or below 0 are taken as given."""
    discounted = FinancialCalculator.calculate_discounted_price(
        totals.total_price, totals.discount_percentage
    )
    return replace(totals, discounted_price=discounted)


def register_amount_paid(totals: SaleTotals, amount: Any) -> SaleTotals:
    return replace(totals, amount_paid=FinancialCalculator.to_decimal(amount))


def compute_change(totals: SaleTotals) -> SaleTotals:
    """Change against the discounted price if one was computed, else the total price."""
    return replace(
        totals,
        change=FinancialCalculator.calculate_change(totals.amount_paid, totals.amount_due),
    )


def price_sale(items: Iterable[ItemInput], discount: Optional[Any] = None,
               amount_paid: Optional[Any] = None, places: int = VAT_PRECISION) -> SaleTotals:
    """Run the whole pipeline for one sale.

    The discount steps only run when ``discount`` is given, and change is
    only computed when ``amount_paid`` is given.
    """
    totals = compute_totals(items, places=places)
    if discount is not None:
        totals = compute_discounted_price(apply_discount(totals, discount))
    if amount_paid is not None:
        totals = compute_change(register_amount_paid(totals, amount_paid))
    return totals

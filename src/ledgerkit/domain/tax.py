"""Indian GST (Goods and Services Tax) calculations.

Pure arithmetic with no ledger state. Intra-state supplies split the rate
evenly into central (CGST) and state (SGST) tax; inter-state supplies carry
the whole rate as integrated tax (IGST).
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional

from ledgerkit.domain.entities import ZERO
from ledgerkit.domain.errors import TaxError

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class GstRate:
    """GST rate percentages, e.g. total_rate=18 for 18%."""

    total_rate: Decimal
    cgst_rate: Decimal
    sgst_rate: Decimal
    igst_rate: Decimal

    @classmethod
    def intra_state(cls, total_rate: Decimal) -> "GstRate":
        half = total_rate / 2
        return cls(total_rate=total_rate, cgst_rate=half, sgst_rate=half, igst_rate=ZERO)

    @classmethod
    def inter_state(cls, total_rate: Decimal) -> "GstRate":
        return cls(total_rate=total_rate, cgst_rate=ZERO, sgst_rate=ZERO, igst_rate=total_rate)

    def validate(self) -> None:
        """Check that the components form a valid rate.

        Raises:
            TaxError: If components do not add up to the total, CGST and SGST
                differ, or IGST is mixed with CGST/SGST
        """
        components = self.cgst_rate + self.sgst_rate + self.igst_rate
        if components != self.total_rate:
            raise TaxError(
                f"GST components don't add up to total rate: {components} != {self.total_rate}"
            )

        if self.igst_rate == ZERO and self.cgst_rate != self.sgst_rate:
            raise TaxError("CGST and SGST rates must be equal for intra-state transactions")

        if self.igst_rate > ZERO and (self.cgst_rate > ZERO or self.sgst_rate > ZERO):
            raise TaxError("Only IGST should be applicable for inter-state transactions")


@dataclass(frozen=True)
class GstCalculation:
    """Tax breakdown for a single base amount."""

    base_amount: Decimal
    gst_rate: GstRate
    cgst_amount: Decimal
    sgst_amount: Decimal
    igst_amount: Decimal
    total_gst_amount: Decimal
    total_amount: Decimal

    @classmethod
    def calculate(cls, base_amount: Decimal, gst_rate: GstRate) -> "GstCalculation":
        """Compute tax on a pre-tax amount."""
        gst_rate.validate()

        cgst = base_amount * gst_rate.cgst_rate / HUNDRED
        sgst = base_amount * gst_rate.sgst_rate / HUNDRED
        igst = base_amount * gst_rate.igst_rate / HUNDRED
        total_gst = cgst + sgst + igst

        return cls(
            base_amount=base_amount,
            gst_rate=gst_rate,
            cgst_amount=cgst,
            sgst_amount=sgst,
            igst_amount=igst,
            total_gst_amount=total_gst,
            total_amount=base_amount + total_gst,
        )

    @classmethod
    def reverse_calculate(cls, total_amount: Decimal, gst_rate: GstRate) -> "GstCalculation":
        """Recover the pre-tax amount from a tax-inclusive total."""
        gst_rate.validate()
        base_amount = total_amount * HUNDRED / (HUNDRED + gst_rate.total_rate)
        return cls.calculate(base_amount, gst_rate)


class GstCategory(Enum):
    """Standard GST slabs."""

    ESSENTIAL = "essential"
    REDUCED = "reduced"
    STANDARD = "standard"
    HIGHER = "higher"
    LUXURY = "luxury"

    @property
    def rate(self) -> Decimal:
        return _CATEGORY_RATES[self]

    def intra_state_rate(self) -> GstRate:
        return GstRate.intra_state(self.rate)

    def inter_state_rate(self) -> GstRate:
        return GstRate.inter_state(self.rate)


_CATEGORY_RATES = {
    GstCategory.ESSENTIAL: Decimal("0"),
    GstCategory.REDUCED: Decimal("5"),
    GstCategory.STANDARD: Decimal("12"),
    GstCategory.HIGHER: Decimal("18"),
    GstCategory.LUXURY: Decimal("28"),
}


class GstCalculator:
    """GST lookups by category or product code."""

    def __init__(self, default_is_inter_state: bool = False):
        self.default_is_inter_state = default_is_inter_state
        self.custom_rates: dict[str, GstRate] = {}

    def _category_rate(self, category: GstCategory, is_inter_state: Optional[bool]) -> GstRate:
        if is_inter_state is None:
            is_inter_state = self.default_is_inter_state
        return category.inter_state_rate() if is_inter_state else category.intra_state_rate()

    def set_custom_rate(self, product_code: str, gst_rate: GstRate) -> None:
        """Register a product-specific rate.

        Raises:
            TaxError: If the rate structure is invalid
        """
        gst_rate.validate()
        self.custom_rates[product_code] = gst_rate

    def calculate_by_category(
        self,
        base_amount: Decimal,
        category: GstCategory,
        is_inter_state: Optional[bool] = None,
    ) -> GstCalculation:
        return GstCalculation.calculate(base_amount, self._category_rate(category, is_inter_state))

    def calculate_by_product(self, base_amount: Decimal, product_code: str) -> GstCalculation:
        """Compute tax using a registered product rate.

        Raises:
            TaxError: If no rate is registered for the product code
        """
        gst_rate = self.custom_rates.get(product_code)
        if gst_rate is None:
            raise TaxError(f"Product not found: {product_code}")
        return GstCalculation.calculate(base_amount, gst_rate)

    def calculate_with_rate(self, base_amount: Decimal, gst_rate: GstRate) -> GstCalculation:
        return GstCalculation.calculate(base_amount, gst_rate)

    def reverse_calculate_by_category(
        self,
        total_amount: Decimal,
        category: GstCategory,
        is_inter_state: Optional[bool] = None,
    ) -> GstCalculation:
        return GstCalculation.reverse_calculate(
            total_amount, self._category_rate(category, is_inter_state)
        )


@dataclass(frozen=True)
class GstLineItem:
    """Invoice line with its tax computed."""

    description: str
    quantity: Decimal
    unit_price: Decimal
    gst_calculation: GstCalculation

    @classmethod
    def create(
        cls, description: str, quantity: Decimal, unit_price: Decimal, gst_rate: GstRate
    ) -> "GstLineItem":
        return cls(
            description=description,
            quantity=quantity,
            unit_price=unit_price,
            gst_calculation=GstCalculation.calculate(quantity * unit_price, gst_rate),
        )

    @property
    def line_total_before_gst(self) -> Decimal:
        return self.gst_calculation.base_amount

    @property
    def line_total_with_gst(self) -> Decimal:
        return self.gst_calculation.total_amount


@dataclass
class GstInvoice:
    """Invoice totals aggregated over its line items."""

    line_items: list[GstLineItem] = field(default_factory=list)
    total_before_gst: Decimal = ZERO
    total_cgst: Decimal = ZERO
    total_sgst: Decimal = ZERO
    total_igst: Decimal = ZERO
    total_gst: Decimal = ZERO
    grand_total: Decimal = ZERO

    def __post_init__(self):
        self.recalculate_totals()

    def add_line_item(self, line_item: GstLineItem) -> None:
        self.line_items.append(line_item)
        self.recalculate_totals()

    def recalculate_totals(self) -> None:
        calcs = [item.gst_calculation for item in self.line_items]
        self.total_before_gst = sum((c.base_amount for c in calcs), ZERO)
        self.total_cgst = sum((c.cgst_amount for c in calcs), ZERO)
        self.total_sgst = sum((c.sgst_amount for c in calcs), ZERO)
        self.total_igst = sum((c.igst_amount for c in calcs), ZERO)
        self.total_gst = self.total_cgst + self.total_sgst + self.total_igst
        self.grand_total = self.total_before_gst + self.total_gst

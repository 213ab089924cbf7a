"""ConferenceLine — the running count of one product on one document.

There is at most one ConferenceLine per (document, product).  Every scan
of the product adds to ``counted_quantity``; a scan never lowers it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum

from receiving.domain.model.receipt_document import ExpectedLine
from receiving.domain.model.value_objects import Quantity


class LineStatus(Enum):
    MATCHED = "MATCHED"
    DIVERGENT = "DIVERGENT"


@dataclass
class ConferenceLine:
    """Counted result for one expected product.

    ``status`` is derived from the quantities, so it is correct after
    every submission and not only at finalization.
    """

    document_id: int
    product_id: str
    expected_quantity: int
    counted_quantity: int = 0
    barcode_read: str = ""
    arrival_date: date | None = None
    expiry_date: date | None = None
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def open(document_id: int, expected: ExpectedLine) -> ConferenceLine:
        """Start an empty line for the first scan of an expected product.

        The expected quantity is copied here and never re-read from the
        document afterwards.
        """
        return ConferenceLine(
            document_id=document_id,
            product_id=expected.product_id,
            expected_quantity=expected.expected_quantity.value,
        )

    # --- Mutation -------------------------------------------------------------

    def record(
        self,
        quantity: Quantity,
        barcode: str,
        arrival_date: date | None = None,
        expiry_date: date | None = None,
    ) -> None:
        """Accumulate a counted quantity from one scan.

        Dates are only overwritten when the operator supplied them.
        """
        self.counted_quantity += quantity.value
        self.barcode_read = barcode
        if arrival_date is not None:
            self.arrival_date = arrival_date
        if expiry_date is not None:
            self.expiry_date = expiry_date
        self.updated_at = datetime.now(timezone.utc)

    # --- Computed properties --------------------------------------------------

    @property
    def status(self) -> LineStatus:
        if self.counted_quantity == self.expected_quantity:
            return LineStatus.MATCHED
        return LineStatus.DIVERGENT

    @property
    def difference(self) -> int:
        """Counted minus expected; negative means short, positive means over."""
        return self.counted_quantity - self.expected_quantity

    @property
    def is_counted(self) -> bool:
        return self.counted_quantity > 0

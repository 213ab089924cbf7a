"""StockBalance — on-hand quantity per product.

Only the finalization of a receipt conference adds to a balance here;
sales and manual write-offs are handled by other parts of the system.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from receiving.domain.exceptions import ValidationError


@dataclass
class StockBalance:
    """Aggregate root for a product's stock.

    Besides the balance it remembers the last receipt applied to it
    (date and quantity), shown on stock reports.
    """

    product_id: str
    quantity: int = 0
    last_receipt_date: date | None = None
    last_receipt_quantity: int = 0

    def receive(self, quantity: int, received_on: date) -> None:
        """Add physically counted units from a finalized receipt."""
        if quantity <= 0:
            raise ValidationError("Received quantity must be positive")
        self.quantity += quantity
        self.last_receipt_date = received_on
        self.last_receipt_quantity = quantity

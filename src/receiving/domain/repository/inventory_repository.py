"""Abstract repository for StockBalance aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from receiving.domain.model.inventory import StockBalance


class InventoryRepository(ABC):

    @abstractmethod
    def get_by_product_id(self, product_id: str) -> StockBalance | None:
        """Return the stock record for a product, or None."""

    @abstractmethod
    def list_all(self) -> list[StockBalance]:
        """Return every stock record."""

    @abstractmethod
    def add_stock(self, product_id: str, delta: int, received_on: date) -> None:
        """Add *delta* units to a single product's balance."""

    @abstractmethod
    def add_stock_atomically(
        self,
        deltas: dict[str, int],
        received_on: date,
        receipt_key: str,
    ) -> bool:
        """Apply all *deltas* as one unit, or none of them.

        *receipt_key* identifies the receipt being applied.  A key that
        was already applied is a no-op and returns False; otherwise the
        deltas are applied and True is returned.  Raises StockUpdateError
        when the update cannot be applied, leaving every balance as it was.
        """

    @abstractmethod
    def has_receipt(self, receipt_key: str) -> bool:
        """Return True once the receipt *receipt_key* has been applied."""

    def get_stock(self, product_id: str) -> int:
        balance = self.get_by_product_id(product_id)
        return balance.quantity if balance is not None else 0

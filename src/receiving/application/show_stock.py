"""Application service: Show Stock use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from receiving.domain.repository.inventory_repository import InventoryRepository


@dataclass(frozen=True)
class StockLineDTO:
    product_id: str
    quantity: int
    last_receipt_date: str | None
    last_receipt_quantity: int


class ShowStockHandler:

    def __init__(self, inventory_repo: InventoryRepository) -> None:
        self._inventory_repo = inventory_repo

    def handle(self) -> list[StockLineDTO]:
        balances = self._inventory_repo.list_all()
        return [
            StockLineDTO(
                product_id=b.product_id,
                quantity=b.quantity,
                last_receipt_date=(
                    b.last_receipt_date.isoformat() if b.last_receipt_date else None
                ),
                last_receipt_quantity=b.last_receipt_quantity,
            )
            for b in sorted(balances, key=lambda b: b.product_id)
        ]

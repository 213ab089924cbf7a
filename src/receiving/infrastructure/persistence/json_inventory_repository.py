"""JSON-file-backed implementation of InventoryRepository.

The whole file is rewritten through a temporary file and a rename, so a
multi-product receipt either lands completely or not at all.  The file
also keeps the keys of receipts already applied.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from filelock import FileLock

from receiving.domain.exceptions import StockUpdateError, ValidationError
from receiving.domain.model.inventory import StockBalance
from receiving.domain.repository.inventory_repository import InventoryRepository
from receiving.infrastructure.persistence.file_locks import lock_path
from receiving.infrastructure.persistence.json_file import (
    ensure_file,
    read_json,
    write_json,
)

logger = logging.getLogger(__name__)

_EMPTY = {"balances": [], "applied_receipts": []}


class JsonInventoryRepository(InventoryRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._write_lock = FileLock(lock_path(file_path))
        ensure_file(self._file_path, _EMPTY)

    # --- InventoryRepository interface ----------------------------------------

    def get_by_product_id(self, product_id: str) -> StockBalance | None:
        balances, _ = self._load()
        return balances.get(product_id)

    def list_all(self) -> list[StockBalance]:
        balances, _ = self._load()
        return list(balances.values())

    def add_stock(self, product_id: str, delta: int, received_on: date) -> None:
        with self._write_lock:
            balances, applied = self._load()
            self._apply(balances, {product_id: delta}, received_on)
            self._persist(balances, applied)

    def add_stock_atomically(
        self,
        deltas: dict[str, int],
        received_on: date,
        receipt_key: str,
    ) -> bool:
        with self._write_lock:
            balances, applied = self._load()
            if receipt_key in applied:
                logger.info("Receipt %s already applied, skipping", receipt_key)
                return False
            self._apply(balances, deltas, received_on)
            applied.append(receipt_key)
            self._persist(balances, applied)
            return True

    def has_receipt(self, receipt_key: str) -> bool:
        _, applied = self._load()
        return receipt_key in applied

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _apply(
        balances: dict[str, StockBalance],
        deltas: dict[str, int],
        received_on: date,
    ) -> None:
        """Apply deltas to the in-memory copy only."""
        for product_id, delta in deltas.items():
            balance = balances.setdefault(product_id, StockBalance(product_id=product_id))
            try:
                balance.receive(delta, received_on)
            except ValidationError as exc:
                raise StockUpdateError(f"Product '{product_id}': {exc}") from exc

    def _load(self) -> tuple[dict[str, StockBalance], list[str]]:
        try:
            raw = read_json(self._file_path)
        except (OSError, ValueError) as exc:
            raise StockUpdateError(f"Cannot read {self._file_path}: {exc}") from exc
        balances = {
            item["product_id"]: self._to_domain(item) for item in raw["balances"]
        }
        return balances, list(raw.get("applied_receipts", []))

    def _persist(self, balances: dict[str, StockBalance], applied: list[str]) -> None:
        payload = {
            "balances": [self._to_raw(b) for b in balances.values()],
            "applied_receipts": applied,
        }
        try:
            write_json(self._file_path, payload)
        except OSError as exc:
            raise StockUpdateError(f"Cannot write {self._file_path}: {exc}") from exc

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(balance: StockBalance) -> dict:
        return {
            "product_id": balance.product_id,
            "quantity": balance.quantity,
            "last_receipt_date": (
                balance.last_receipt_date.isoformat() if balance.last_receipt_date else None
            ),
            "last_receipt_quantity": balance.last_receipt_quantity,
        }

    @staticmethod
    def _to_domain(raw: dict) -> StockBalance:
        last = raw.get("last_receipt_date")
        return StockBalance(
            product_id=raw["product_id"],
            quantity=raw["quantity"],
            last_receipt_date=date.fromisoformat(last) if last else None,
            last_receipt_quantity=raw.get("last_receipt_quantity", 0),
        )

"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from pathlib import Path

from receiving.domain.model.product import Product
from receiving.domain.repository.product_repository import ProductRepository
from receiving.infrastructure.persistence.json_file import ensure_file, read_json


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        ensure_file(self._file_path, [])

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def get_by_barcode(self, barcode: str) -> Product | None:
        for product in self._load().values():
            if product.barcode and product.barcode == barcode:
                return product
        return None

    def get_by_code(self, code: str) -> Product | None:
        for product in self._load().values():
            if product.code == code:
                return product
        return None

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        return {
            item["id"]: Product(
                id=item["id"],
                code=item["code"],
                description=item["description"],
                barcode=item.get("barcode") or None,
                unit=item.get("unit", "UN"),
            )
            for item in read_json(self._file_path)
        }

"""Abstract repository for Product lookups.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from receiving.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_barcode(self, barcode: str) -> Product | None:
        """Return the product whose canonical barcode equals *barcode*."""

    @abstractmethod
    def get_by_code(self, code: str) -> Product | None:
        """Return the product whose internal code equals *code*."""

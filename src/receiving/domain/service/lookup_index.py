"""Domain service: Lookup Index.

Resolves a scanned barcode to a product and its expected line on a
specific receipt document.  Read-only: calling it any number of times
changes nothing.

Resolution order:
  1. exact match on the product's canonical barcode;
  2. fallback on the product's internal code, for suppliers whose
     barcode was never registered in the catalog.

The two failure cases are kept apart so the caller can tell the
operator either "unknown barcode" or "not on this document".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from receiving.domain.exceptions import EntityNotFoundError
from receiving.domain.model.product import Product
from receiving.domain.model.receipt_document import ExpectedLine
from receiving.domain.repository.document_repository import DocumentRepository
from receiving.domain.repository.product_repository import ProductRepository


class NotFoundReason(Enum):
    UNKNOWN_BARCODE = "UNKNOWN_BARCODE"
    NOT_ON_DOCUMENT = "NOT_ON_DOCUMENT"


@dataclass(frozen=True)
class Resolved:
    product: Product
    expected_line: ExpectedLine


@dataclass(frozen=True)
class NotFound:
    reason: NotFoundReason
    barcode: str
    product: Product | None = None  # set for NOT_ON_DOCUMENT


class LookupIndex:

    def __init__(
        self,
        product_repo: ProductRepository,
        document_repo: DocumentRepository,
    ) -> None:
        self._product_repo = product_repo
        self._document_repo = document_repo

    def resolve(self, barcode: str, document_id: int) -> Resolved | NotFound:
        """Match *barcode* against the catalog and the document's lines.

        Raises EntityNotFoundError for an unknown document and
        InvalidStateTransition when the document is not IN_PROGRESS.
        """
        document = self._document_repo.get_by_id(document_id)
        if document is None:
            raise EntityNotFoundError(f"Document #{document_id} not found")
        document.ensure_in_progress("look up barcodes")

        scanned = barcode.strip()
        product = self.find_product(scanned)
        if product is None:
            return NotFound(NotFoundReason.UNKNOWN_BARCODE, scanned)

        expected = document.expected_line_for(product.id)
        if expected is None:
            return NotFound(NotFoundReason.NOT_ON_DOCUMENT, scanned, product)

        return Resolved(product=product, expected_line=expected)

    def find_product(self, scanned: str) -> Product | None:
        if not scanned:
            return None
        product = self._product_repo.get_by_barcode(scanned)
        if product is None:
            product = self._product_repo.get_by_code(scanned)
        return product

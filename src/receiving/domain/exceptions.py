"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Infrastructure failures of the stores are raised as StockUpdateError and
translated by the domain before they reach a caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from receiving.domain.model.receipt_document import ExpectedLine


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidQuantity(ValidationError):
    """A counted quantity was not a positive integer."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InvalidStateTransition(DomainException):
    """The document's current status forbids the requested operation."""


class ProductNotOnDocument(DomainException):
    """A scanned barcode could not be matched to a line of the document."""

    def __init__(self, barcode: str, document_id: int, message: str) -> None:
        super().__init__(message)
        self.barcode = barcode
        self.document_id = document_id


class UnknownBarcodeError(ProductNotOnDocument):
    """No product in the catalog carries the scanned barcode or code."""

    def __init__(self, barcode: str, document_id: int) -> None:
        super().__init__(
            barcode, document_id, f"Unknown barcode '{barcode}'"
        )


class NotOnDocumentError(ProductNotOnDocument):
    """The product exists but was not part of this receipt document."""

    def __init__(self, barcode: str, document_id: int, product_id: str) -> None:
        super().__init__(
            barcode,
            document_id,
            f"Product '{product_id}' (barcode '{barcode}') "
            f"is not on document #{document_id}",
        )
        self.product_id = product_id


class IncompleteConference(DomainException):
    """Finalization was requested while expected lines are still uncounted."""

    def __init__(self, document_id: int, missing: list[ExpectedLine]) -> None:
        names = ", ".join(line.product_id for line in missing)
        super().__init__(
            f"Document #{document_id} has {len(missing)} uncounted "
            f"product(s): {names}"
        )
        self.document_id = document_id
        self.missing = list(missing)


class CommitFailed(DomainException):
    """Stock could not be applied; the document is left resumable."""


class StockUpdateError(Exception):
    """Raised by an inventory store when a stock update cannot be applied.

    Not a DomainException: stores raise it, the finalization committer
    translates it into CommitFailed.
    """

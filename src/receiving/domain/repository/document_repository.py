"""Abstract repository for ReceiptDocument aggregate.

Documents are created by the upstream receiving process; the conference
reads them and only ever changes their status.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from receiving.domain.model.receipt_document import (
    DocumentStatus,
    ExpectedLine,
    ReceiptDocument,
)


class DocumentRepository(ABC):

    @abstractmethod
    def get_by_id(self, document_id: int) -> ReceiptDocument | None:
        """Return a document by its ID, or None if not found."""

    @abstractmethod
    def list_expected_lines(self, document_id: int) -> list[ExpectedLine]:
        """Return the expected lines of a document, in document order."""

    @abstractmethod
    def list_by_status(self, statuses: Iterable[DocumentStatus]) -> list[ReceiptDocument]:
        """Return every document whose status is one of *statuses*."""

    @abstractmethod
    def set_status(self, document_id: int, status: DocumentStatus) -> None:
        """Persist a new status for an existing document."""

    @abstractmethod
    def save(self, document: ReceiptDocument) -> None:
        """Persist a new document as handed over by the receiving process."""

"""Application service: List Pending Documents use case (query)."""

from __future__ import annotations

from receiving.application.dto import DocumentDTO
from receiving.application.mapping import document_to_dto
from receiving.domain.model.receipt_document import DocumentStatus
from receiving.domain.repository.document_repository import DocumentRepository


class ListPendingDocumentsHandler:

    def __init__(self, document_repo: DocumentRepository) -> None:
        self._document_repo = document_repo

    def handle(self) -> list[DocumentDTO]:
        """Documents still awaiting conference, oldest first.

        IN_PROGRESS documents are included so an interrupted conference
        can be resumed.
        """
        documents = self._document_repo.list_by_status(
            [DocumentStatus.PENDING, DocumentStatus.IN_PROGRESS]
        )
        documents.sort(key=lambda d: (d.created_at, d.id))
        return [document_to_dto(d) for d in documents]

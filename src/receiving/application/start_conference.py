"""Application service: Start Conference use case.

Opens the conference of a PENDING document, or resumes one that was
left IN_PROGRESS by an interrupted session.
"""

from __future__ import annotations

from receiving.application.dto import DocumentDTO
from receiving.application.mapping import document_to_dto
from receiving.domain.service.reconciliation_engine import ReconciliationEngine


class StartConferenceHandler:

    def __init__(self, engine: ReconciliationEngine) -> None:
        self._engine = engine

    def handle(self, document_id: int) -> DocumentDTO:
        document = self._engine.start_conference(document_id)
        return document_to_dto(document)

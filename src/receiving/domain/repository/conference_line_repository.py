"""Abstract repository for ConferenceLine records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from receiving.domain.model.conference_line import ConferenceLine


class ConferenceLineRepository(ABC):

    @abstractmethod
    def get(self, document_id: int, product_id: str) -> ConferenceLine | None:
        """Return the line for (document, product), or None if never scanned."""

    @abstractmethod
    def list_for_document(self, document_id: int) -> list[ConferenceLine]:
        """Return every line counted so far for a document."""

    @abstractmethod
    def save(self, line: ConferenceLine) -> None:
        """Insert or replace the line for its (document, product) pair."""

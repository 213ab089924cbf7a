"""Application service: Show Conference use case (query).

Lists every expected product of a document next to what has been
counted so far, so the operator sees what is still missing.
"""

from __future__ import annotations

from receiving.application.dto import ConferenceDTO, ConferenceRowDTO
from receiving.application.mapping import document_to_dto
from receiving.domain.exceptions import EntityNotFoundError
from receiving.domain.repository.conference_line_repository import (
    ConferenceLineRepository,
)
from receiving.domain.repository.document_repository import DocumentRepository
from receiving.domain.repository.product_repository import ProductRepository

NOT_COUNTED = "NOT_COUNTED"


class ShowConferenceHandler:

    def __init__(
        self,
        document_repo: DocumentRepository,
        line_repo: ConferenceLineRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._document_repo = document_repo
        self._line_repo = line_repo
        self._product_repo = product_repo

    def handle(self, document_id: int) -> ConferenceDTO:
        document = self._document_repo.get_by_id(document_id)
        if document is None:
            raise EntityNotFoundError(f"Document #{document_id} not found")

        lines = {
            line.product_id: line
            for line in self._line_repo.list_for_document(document_id)
        }

        rows: list[ConferenceRowDTO] = []
        for expected in self._document_repo.list_expected_lines(document_id):
            product = self._product_repo.get_by_id(expected.product_id)
            line = lines.get(expected.product_id)
            counted = line.counted_quantity if line is not None else 0
            rows.append(
                ConferenceRowDTO(
                    product_id=expected.product_id,
                    description=product.description if product else "",
                    expected_quantity=expected.expected_quantity.value,
                    counted_quantity=counted,
                    status=line.status.value if line is not None and counted else NOT_COUNTED,
                )
            )

        return ConferenceDTO(document=document_to_dto(document), rows=rows)

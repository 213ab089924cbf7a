"""Application service: Submit Line use case.

One scan at the dock: barcode, counted quantity and the optional
arrival and expiry dates typed by the operator.
"""

from __future__ import annotations

from datetime import date

from receiving.application.dto import ConferenceLineDTO
from receiving.application.mapping import line_to_dto
from receiving.domain.service.reconciliation_engine import ReconciliationEngine


class SubmitLineHandler:

    def __init__(self, engine: ReconciliationEngine) -> None:
        self._engine = engine

    def handle(
        self,
        document_id: int,
        barcode: str,
        quantity: int,
        arrival_date: date | None = None,
        expiry_date: date | None = None,
    ) -> ConferenceLineDTO:
        """Record the scan and return the product's cumulative line."""
        line = self._engine.submit_line(
            document_id,
            barcode,
            quantity,
            arrival_date=arrival_date,
            expiry_date=expiry_date,
        )
        return line_to_dto(line)

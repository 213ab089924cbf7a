"""Application service: Finalize Conference use case.

Delegates to the reconciliation engine, which checks that every
expected product was counted, commits the counted stock and freezes the
document.  Returns the summary shown to the operator.
"""

from __future__ import annotations

from receiving.application.dto import DivergenceDTO, SummaryDTO
from receiving.domain.model.summary import FinalizationSummary
from receiving.domain.service.reconciliation_engine import ReconciliationEngine


class FinalizeConferenceHandler:

    def __init__(self, engine: ReconciliationEngine) -> None:
        self._engine = engine

    def handle(self, document_id: int) -> SummaryDTO:
        summary = self._engine.finalize(document_id)
        return self._to_dto(summary)

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_dto(summary: FinalizationSummary) -> SummaryDTO:
        return SummaryDTO(
            document_id=summary.document_id,
            status=summary.outcome.value,
            matched=summary.matched,
            divergent=summary.divergent,
            total=summary.total,
            divergences=[
                DivergenceDTO(
                    product_id=d.product_id,
                    expected_quantity=d.expected_quantity,
                    counted_quantity=d.counted_quantity,
                    difference=d.difference,
                    value=str(d.value),
                    note=d.note,
                )
                for d in summary.divergences
            ],
            expected_value=str(summary.expected_value),
            counted_value=str(summary.counted_value),
        )

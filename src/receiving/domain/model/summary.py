"""Finalization summary — derived once per successful finalize.

Not persisted: the document's terminal status is the durable record.
"""

from __future__ import annotations

from dataclasses import dataclass

from receiving.domain.model.conference_line import ConferenceLine, LineStatus
from receiving.domain.model.receipt_document import DocumentStatus, ReceiptDocument
from receiving.domain.model.value_objects import Money


@dataclass(frozen=True)
class DivergenceRecord:
    product_id: str
    expected_quantity: int
    counted_quantity: int
    value: Money  # |counted - expected| x unit cost
    note: str

    @property
    def difference(self) -> int:
        return self.counted_quantity - self.expected_quantity


@dataclass(frozen=True)
class FinalizationSummary:
    document_id: int
    matched: int
    divergent: int
    total: int
    divergences: tuple[DivergenceRecord, ...]
    expected_value: Money
    counted_value: Money

    @property
    def has_divergence(self) -> bool:
        return self.divergent > 0

    @property
    def outcome(self) -> DocumentStatus:
        """The terminal status the document takes for this summary."""
        if self.has_divergence:
            return DocumentStatus.COMPLETED_WITH_DIVERGENCE
        return DocumentStatus.COMPLETED

    @staticmethod
    def build(
        document: ReceiptDocument, lines: list[ConferenceLine]
    ) -> FinalizationSummary:
        """Assemble the summary from the document and its counted lines.

        Every line must belong to an expected product of the document.
        """
        divergences: list[DivergenceRecord] = []
        matched = 0
        counted_value = Money.zero(document.expected_value.currency)

        for line in lines:
            expected = document.expected_line_for(line.product_id)
            if expected is None:
                raise ValueError(
                    f"Line for product '{line.product_id}' does not belong "
                    f"to document #{document.id}"
                )
            counted_value = counted_value + expected.unit_cost * line.counted_quantity

            if line.status == LineStatus.MATCHED:
                matched += 1
                continue

            divergences.append(
                DivergenceRecord(
                    product_id=line.product_id,
                    expected_quantity=line.expected_quantity,
                    counted_quantity=line.counted_quantity,
                    value=expected.unit_cost * abs(line.difference),
                    note=divergence_note(line),
                )
            )

        return FinalizationSummary(
            document_id=document.id,
            matched=matched,
            divergent=len(divergences),
            total=len(lines),
            divergences=tuple(divergences),
            expected_value=document.expected_value,
            counted_value=counted_value,
        )


def divergence_note(line: ConferenceLine) -> str:
    """Human-readable description of a line's divergence."""
    diff = line.difference
    direction = "short" if diff < 0 else "over"
    return (
        f"Expected {line.expected_quantity}, counted {line.counted_quantity} "
        f"({direction} by {abs(diff)})"
    )

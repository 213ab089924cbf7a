"""ReceiptDocument aggregate — the document being conferenced.

A receipt document (typically backed by a supplier invoice) lists the
merchandise expected at the dock.  Its status moves strictly forward:

    PENDING -> IN_PROGRESS -> COMPLETED | COMPLETED_WITH_DIVERGENCE

Terminal states are never left.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from receiving.domain.exceptions import InvalidStateTransition, ValidationError
from receiving.domain.model.value_objects import Money, Quantity


class DocumentStatus(Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    COMPLETED_WITH_DIVERGENCE = "COMPLETED_WITH_DIVERGENCE"

    @property
    def is_terminal(self) -> bool:
        return self in (
            DocumentStatus.COMPLETED,
            DocumentStatus.COMPLETED_WITH_DIVERGENCE,
        )


@dataclass(frozen=True)
class ExpectedLine:
    """A product the document says should arrive, with quantity and cost."""

    product_id: str
    expected_quantity: Quantity
    unit_cost: Money

    @property
    def expected_value(self) -> Money:
        return self.unit_cost * self.expected_quantity.value


@dataclass
class ReceiptDocument:
    """Aggregate root for a receipt awaiting (or under) conference.

    Expected lines are fixed by the upstream receiving process; the
    conference never edits them.  Use ``ReceiptDocument.create()`` for
    new documents; ``__init__`` is kept simple so repositories can
    reconstitute persisted documents without re-validating.
    """

    id: int
    reference: str
    lines: tuple[ExpectedLine, ...]
    supplier: str = ""
    note: str = ""
    status: DocumentStatus = DocumentStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        document_id: int,
        reference: str,
        lines: list[ExpectedLine],
        supplier: str = "",
        note: str = "",
    ) -> ReceiptDocument:
        """Create a new PENDING document, enforcing all invariants."""
        if not reference or not reference.strip():
            raise ValidationError("Document reference is required")
        if not lines:
            raise ValidationError("Document must contain at least one expected line")

        seen: set[str] = set()
        for line in lines:
            if line.product_id in seen:
                raise ValidationError(
                    f"Product '{line.product_id}' appears twice on document {reference}"
                )
            seen.add(line.product_id)

        return ReceiptDocument(
            id=document_id,
            reference=reference.strip(),
            lines=tuple(lines),
            supplier=supplier.strip(),
            note=note.strip(),
        )

    # --- State transitions ----------------------------------------------------

    def start_conference(self) -> bool:
        """Transition PENDING -> IN_PROGRESS.

        Re-entrant: an IN_PROGRESS document is resumed as is.  Returns
        True when the status actually changed.
        """
        if self.status == DocumentStatus.IN_PROGRESS:
            return False
        if self.status != DocumentStatus.PENDING:
            raise InvalidStateTransition(
                f"Cannot start conference of document #{self.id} "
                f"— current status is {self.status.value}"
            )
        self.status = DocumentStatus.IN_PROGRESS
        return True

    def complete(self, with_divergence: bool) -> None:
        """Transition IN_PROGRESS -> COMPLETED[_WITH_DIVERGENCE]."""
        self.ensure_in_progress("finalize")
        self.status = (
            DocumentStatus.COMPLETED_WITH_DIVERGENCE
            if with_divergence
            else DocumentStatus.COMPLETED
        )

    def ensure_in_progress(self, operation: str) -> None:
        if self.status != DocumentStatus.IN_PROGRESS:
            raise InvalidStateTransition(
                f"Cannot {operation} on document #{self.id} "
                f"— current status is {self.status.value}, expected IN_PROGRESS"
            )

    # --- Queries --------------------------------------------------------------

    def expected_line_for(self, product_id: str) -> ExpectedLine | None:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    @property
    def expected_value(self) -> Money:
        if not self.lines:
            return Money.zero()
        total = Money.zero(self.lines[0].unit_cost.currency)
        for line in self.lines:
            total = total + line.expected_value
        return total

"""Domain service: Reconciliation Engine.

Owns the conference workflow of a receipt document:

    start_conference  PENDING -> IN_PROGRESS (re-entrant)
    submit_line       accumulate a scanned count on its ConferenceLine
    finalize          check completeness, commit stock, freeze the document

Every call holds the document's lock for its own duration only, so two
operators may work on the same document without losing counts while
different documents proceed in parallel.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from receiving.domain.exceptions import (
    CommitFailed,
    EntityNotFoundError,
    IncompleteConference,
    InvalidStateTransition,
    NotOnDocumentError,
    UnknownBarcodeError,
)
from receiving.domain.model.conference_line import ConferenceLine
from receiving.domain.model.receipt_document import ReceiptDocument
from receiving.domain.model.summary import FinalizationSummary
from receiving.domain.model.value_objects import Quantity
from receiving.domain.repository.conference_line_repository import (
    ConferenceLineRepository,
)
from receiving.domain.repository.document_repository import DocumentRepository
from receiving.domain.service.document_locks import DocumentLocks
from receiving.domain.service.finalization_committer import FinalizationCommitter
from receiving.domain.service.lookup_index import (
    LookupIndex,
    NotFound,
    NotFoundReason,
)

logger = logging.getLogger(__name__)


class ReconciliationEngine:

    def __init__(
        self,
        document_repo: DocumentRepository,
        line_repo: ConferenceLineRepository,
        lookup_index: LookupIndex,
        committer: FinalizationCommitter,
        locks: DocumentLocks | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._document_repo = document_repo
        self._line_repo = line_repo
        self._lookup_index = lookup_index
        self._committer = committer
        self._locks = locks or DocumentLocks()
        self._today = today

    # --- Operations -----------------------------------------------------------

    def start_conference(self, document_id: int) -> ReceiptDocument:
        """Open (or resume) the conference of a document.

        Resuming leaves every ConferenceLine already counted in place.
        """
        with self._locks.hold(document_id):
            document = self._load(document_id)
            if document.start_conference():
                self._document_repo.set_status(document_id, document.status)
                logger.info("Conference of document #%s started", document_id)
            else:
                logger.info("Conference of document #%s resumed", document_id)
            return document

    def submit_line(
        self,
        document_id: int,
        barcode: str,
        counted_quantity: int,
        arrival_date: date | None = None,
        expiry_date: date | None = None,
    ) -> ConferenceLine:
        """Record one scan and return the product's updated line.

        Scanning the same product again adds to its count; partial
        deliveries of one item are counted in several passes.
        """
        with self._locks.hold(document_id):
            document = self._load(document_id)
            document.ensure_in_progress("submit lines")
            if self._committer.is_committed(document_id):
                raise InvalidStateTransition(
                    f"Stock of document #{document_id} is already committed; "
                    "finalize it again to complete the conference"
                )
            quantity = Quantity(counted_quantity)

            resolution = self._lookup_index.resolve(barcode, document_id)
            if isinstance(resolution, NotFound):
                logger.warning(
                    "Rejected scan '%s' on document #%s: %s",
                    resolution.barcode,
                    document_id,
                    resolution.reason.value,
                )
                if resolution.reason == NotFoundReason.UNKNOWN_BARCODE:
                    raise UnknownBarcodeError(resolution.barcode, document_id)
                raise NotOnDocumentError(
                    resolution.barcode, document_id, resolution.product.id
                )

            product = resolution.product
            line = self._line_repo.get(document_id, product.id)
            if line is None:
                line = ConferenceLine.open(document_id, resolution.expected_line)

            # First scan without a date means the goods arrived today.
            if arrival_date is None and line.arrival_date is None:
                arrival_date = self._today()

            line.record(
                quantity,
                barcode=barcode.strip(),
                arrival_date=arrival_date,
                expiry_date=expiry_date,
            )
            self._line_repo.save(line)

            logger.debug(
                "Document #%s product %s: +%d -> %d/%d (%s)",
                document_id,
                product.id,
                quantity.value,
                line.counted_quantity,
                line.expected_quantity,
                line.status.value,
            )
            return line

    def finalize(self, document_id: int) -> FinalizationSummary:
        """Close the conference and apply the counted stock.

        Nothing is changed when a product is still uncounted or when the
        stock commit fails; the document then stays IN_PROGRESS.  When the
        stock is in but the status cannot be saved, the document stays
        IN_PROGRESS and refuses new counts until a retried finalize
        completes it.
        """
        with self._locks.hold(document_id):
            document = self._load(document_id)
            document.ensure_in_progress("finalize")

            counted = {
                line.product_id: line
                for line in self._line_repo.list_for_document(document_id)
                if line.is_counted
            }
            missing = [e for e in document.lines if e.product_id not in counted]
            if missing:
                raise IncompleteConference(document_id, missing)

            lines = [counted[e.product_id] for e in document.lines]
            summary = FinalizationSummary.build(document, lines)

            self._committer.commit(document_id, lines, received_on=self._today())

            document.complete(with_divergence=summary.has_divergence)
            try:
                self._document_repo.set_status(document_id, document.status)
            except Exception as exc:
                # Stock is in and the counts are frozen by its receipt key.
                logger.error(
                    "Stock committed but status of document #%s not saved: %s",
                    document_id,
                    exc,
                )
                raise CommitFailed(
                    f"Finalization of document #{document_id} failed, please retry"
                ) from exc

            logger.info(
                "Document #%s finalized as %s (%d matched, %d divergent)",
                document_id,
                document.status.value,
                summary.matched,
                summary.divergent,
            )
            return summary

    # --- Internal helpers -----------------------------------------------------

    def _load(self, document_id: int) -> ReceiptDocument:
        document = self._document_repo.get_by_id(document_id)
        if document is None:
            raise EntityNotFoundError(f"Document #{document_id} not found")
        return document

"""Domain service: Finalization Committer.

Applies the counted quantities of a finalized conference to stock.
The physically counted amount is what enters stock, whether or not it
matches the document.

All deltas of one finalization go to the inventory store in a single
atomic call; a failure there leaves every balance untouched and is
reported as CommitFailed.  The document id doubles as the receipt key,
so re-applying an already committed receipt is a no-op, and a document
whose receipt is in takes no further counts.
"""

from __future__ import annotations

import logging
from datetime import date

from receiving.domain.exceptions import CommitFailed, StockUpdateError
from receiving.domain.model.conference_line import ConferenceLine
from receiving.domain.repository.inventory_repository import InventoryRepository

logger = logging.getLogger(__name__)


def receipt_key(document_id: int) -> str:
    return f"receipt-{document_id}"


class FinalizationCommitter:

    def __init__(self, inventory_repo: InventoryRepository) -> None:
        self._inventory_repo = inventory_repo

    def is_committed(self, document_id: int) -> bool:
        """True once the stock of *document_id* has been applied."""
        return self._inventory_repo.has_receipt(receipt_key(document_id))

    def commit(
        self,
        document_id: int,
        lines: list[ConferenceLine],
        received_on: date,
    ) -> bool:
        """Add every line's counted quantity to its product's stock.

        Returns False when this receipt had already been applied.
        """
        deltas: dict[str, int] = {}
        for line in lines:
            if line.document_id != document_id:
                raise ValueError(
                    f"Line for product '{line.product_id}' belongs to "
                    f"document #{line.document_id}, not #{document_id}"
                )
            if line.counted_quantity <= 0:
                continue
            deltas[line.product_id] = deltas.get(line.product_id, 0) + line.counted_quantity

        key = receipt_key(document_id)
        try:
            applied = self._inventory_repo.add_stock_atomically(
                deltas, received_on=received_on, receipt_key=key
            )
        except StockUpdateError as exc:
            logger.warning("Stock commit failed for document #%s: %s", document_id, exc)
            raise CommitFailed(
                f"Finalization of document #{document_id} failed, please retry "
                f"({exc})"
            ) from exc

        if applied:
            logger.info(
                "Committed stock for document #%s: %d product(s), %d unit(s)",
                document_id,
                len(deltas),
                sum(deltas.values()),
            )
        else:
            logger.info("Stock for document #%s was already committed", document_id)
        return applied

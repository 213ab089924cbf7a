"""JSON-file-backed implementation of DocumentRepository."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from filelock import FileLock

from receiving.domain.exceptions import EntityNotFoundError
from receiving.domain.model.receipt_document import (
    DocumentStatus,
    ExpectedLine,
    ReceiptDocument,
)
from receiving.domain.model.value_objects import Money, Quantity
from receiving.domain.repository.document_repository import DocumentRepository
from receiving.infrastructure.persistence.file_locks import lock_path
from receiving.infrastructure.persistence.json_file import (
    ensure_file,
    read_json,
    write_json,
)


class JsonDocumentRepository(DocumentRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._write_lock = FileLock(lock_path(file_path))
        ensure_file(self._file_path, [])

    # --- DocumentRepository interface -----------------------------------------

    def get_by_id(self, document_id: int) -> ReceiptDocument | None:
        for raw in read_json(self._file_path):
            if raw["id"] == document_id:
                return self._to_domain(raw)
        return None

    def list_expected_lines(self, document_id: int) -> list[ExpectedLine]:
        document = self.get_by_id(document_id)
        if document is None:
            raise EntityNotFoundError(f"Document #{document_id} not found")
        return list(document.lines)

    def list_by_status(self, statuses: Iterable[DocumentStatus]) -> list[ReceiptDocument]:
        wanted = {s.value for s in statuses}
        return [
            self._to_domain(raw)
            for raw in read_json(self._file_path)
            if raw["status"] in wanted
        ]

    def set_status(self, document_id: int, status: DocumentStatus) -> None:
        with self._write_lock:
            records = read_json(self._file_path)
            for raw in records:
                if raw["id"] == document_id:
                    raw["status"] = status.value
                    break
            else:
                raise EntityNotFoundError(f"Document #{document_id} not found")
            write_json(self._file_path, records)

    def save(self, document: ReceiptDocument) -> None:
        with self._write_lock:
            records = read_json(self._file_path)
            for i, raw in enumerate(records):
                if raw["id"] == document.id:
                    records[i] = self._to_raw(document)
                    break
            else:
                records.append(self._to_raw(document))
            write_json(self._file_path, records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(document: ReceiptDocument) -> dict:
        return {
            "id": document.id,
            "reference": document.reference,
            "supplier": document.supplier,
            "note": document.note,
            "status": document.status.value,
            "created_at": document.created_at.isoformat(),
            "lines": [
                {
                    "product_id": line.product_id,
                    "expected_quantity": line.expected_quantity.value,
                    "unit_cost": str(line.unit_cost.amount),
                    "currency": line.unit_cost.currency,
                }
                for line in document.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> ReceiptDocument:
        lines = tuple(
            ExpectedLine(
                product_id=i["product_id"],
                expected_quantity=Quantity(i["expected_quantity"]),
                unit_cost=Money(Decimal(i["unit_cost"]), i.get("currency", "BRL")),
            )
            for i in raw["lines"]
        )
        return ReceiptDocument(
            id=raw["id"],
            reference=raw["reference"],
            lines=lines,
            supplier=raw.get("supplier", ""),
            note=raw.get("note", ""),
            status=DocumentStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )

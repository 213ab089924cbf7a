"""JSON-file-backed implementation of ConferenceLineRepository."""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

from filelock import FileLock

from receiving.domain.model.conference_line import ConferenceLine
from receiving.domain.repository.conference_line_repository import (
    ConferenceLineRepository,
)
from receiving.infrastructure.persistence.file_locks import lock_path
from receiving.infrastructure.persistence.json_file import (
    ensure_file,
    read_json,
    write_json,
)


class JsonConferenceLineRepository(ConferenceLineRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._write_lock = FileLock(lock_path(file_path))
        ensure_file(self._file_path, [])

    # --- ConferenceLineRepository interface -----------------------------------

    def get(self, document_id: int, product_id: str) -> ConferenceLine | None:
        for raw in read_json(self._file_path):
            if raw["document_id"] == document_id and raw["product_id"] == product_id:
                return self._to_domain(raw)
        return None

    def list_for_document(self, document_id: int) -> list[ConferenceLine]:
        return [
            self._to_domain(raw)
            for raw in read_json(self._file_path)
            if raw["document_id"] == document_id
        ]

    def save(self, line: ConferenceLine) -> None:
        with self._write_lock:
            records = read_json(self._file_path)
            for i, raw in enumerate(records):
                if raw["document_id"] == line.document_id and raw["product_id"] == line.product_id:
                    records[i] = self._to_raw(line)
                    break
            else:
                records.append(self._to_raw(line))
            write_json(self._file_path, records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(line: ConferenceLine) -> dict:
        return {
            "document_id": line.document_id,
            "product_id": line.product_id,
            "expected_quantity": line.expected_quantity,
            "counted_quantity": line.counted_quantity,
            "status": line.status.value,  # informational; recomputed on load
            "barcode_read": line.barcode_read,
            "arrival_date": line.arrival_date.isoformat() if line.arrival_date else None,
            "expiry_date": line.expiry_date.isoformat() if line.expiry_date else None,
            "updated_at": line.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> ConferenceLine:
        arrival = raw.get("arrival_date")
        expiry = raw.get("expiry_date")
        return ConferenceLine(
            document_id=raw["document_id"],
            product_id=raw["product_id"],
            expected_quantity=raw["expected_quantity"],
            counted_quantity=raw["counted_quantity"],
            barcode_read=raw.get("barcode_read", ""),
            arrival_date=date.fromisoformat(arrival) if arrival else None,
            expiry_date=date.fromisoformat(expiry) if expiry else None,
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )

"""Domain -> DTO mapping shared by several use cases."""

from __future__ import annotations

from receiving.application.dto import ConferenceLineDTO, DocumentDTO
from receiving.domain.model.conference_line import ConferenceLine
from receiving.domain.model.receipt_document import ReceiptDocument


def document_to_dto(document: ReceiptDocument) -> DocumentDTO:
    return DocumentDTO(
        id=document.id,
        reference=document.reference,
        supplier=document.supplier,
        status=document.status.value,
        line_count=len(document.lines),
        expected_value=str(document.expected_value),
        created_at=document.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )


def line_to_dto(line: ConferenceLine) -> ConferenceLineDTO:
    return ConferenceLineDTO(
        document_id=line.document_id,
        product_id=line.product_id,
        expected_quantity=line.expected_quantity,
        counted_quantity=line.counted_quantity,
        status=line.status.value,
        barcode_read=line.barcode_read,
        arrival_date=line.arrival_date.isoformat() if line.arrival_date else None,
        expiry_date=line.expiry_date.isoformat() if line.expiry_date else None,
    )

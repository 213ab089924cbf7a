"""Application service: Resolve Barcode use case (query).

Lets the operator check a barcode against the document before typing
the counted quantity.
"""

from __future__ import annotations

from receiving.application.dto import ResolutionDTO
from receiving.domain.service.lookup_index import LookupIndex, NotFound


class ResolveBarcodeHandler:

    def __init__(self, lookup_index: LookupIndex) -> None:
        self._lookup_index = lookup_index

    def handle(self, document_id: int, barcode: str) -> ResolutionDTO:
        result = self._lookup_index.resolve(barcode, document_id)

        if isinstance(result, NotFound):
            return ResolutionDTO(
                barcode=result.barcode,
                found=False,
                reason=result.reason.value,
                product_id=result.product.id if result.product else None,
                description=result.product.description if result.product else None,
            )

        return ResolutionDTO(
            barcode=barcode.strip(),
            found=True,
            product_id=result.product.id,
            description=result.product.description,
            expected_quantity=result.expected_line.expected_quantity.value,
        )

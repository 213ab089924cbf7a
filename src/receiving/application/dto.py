"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DocumentDTO:
    """Output: a receipt document header."""

    id: int
    reference: str
    supplier: str
    status: str
    line_count: int
    expected_value: str
    created_at: str


@dataclass(frozen=True)
class ConferenceLineDTO:
    """Output: the counted state of one product after a scan."""

    document_id: int
    product_id: str
    expected_quantity: int
    counted_quantity: int
    status: str
    barcode_read: str
    arrival_date: str | None
    expiry_date: str | None


@dataclass(frozen=True)
class ConferenceRowDTO:
    """Output: one expected product as shown on the conference screen."""

    product_id: str
    description: str
    expected_quantity: int
    counted_quantity: int
    status: str  # MATCHED, DIVERGENT or NOT_COUNTED


@dataclass(frozen=True)
class ConferenceDTO:
    document: DocumentDTO
    rows: list[ConferenceRowDTO]

    @property
    def missing(self) -> list[ConferenceRowDTO]:
        return [row for row in self.rows if row.counted_quantity == 0]


@dataclass(frozen=True)
class ResolutionDTO:
    """Output: the result of looking a barcode up on a document."""

    barcode: str
    found: bool
    reason: str | None = None  # UNKNOWN_BARCODE or NOT_ON_DOCUMENT
    product_id: str | None = None
    description: str | None = None
    expected_quantity: int | None = None


@dataclass(frozen=True)
class DivergenceDTO:
    product_id: str
    expected_quantity: int
    counted_quantity: int
    difference: int
    value: str
    note: str


@dataclass(frozen=True)
class SummaryDTO:
    """Output: the outcome of a successful finalization."""

    document_id: int
    status: str
    matched: int
    divergent: int
    total: int
    divergences: list[DivergenceDTO]
    expected_value: str
    counted_value: str

"""Product as seen by the receiving conference.

The catalog itself is maintained elsewhere; this module only needs the
identifiers an operator can scan at the dock.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Product:
    """A catalog product.

    ``barcode`` is the canonical (usually EAN) barcode and may be missing
    when the supplier barcode was never registered. ``code`` is the
    internal product code, printed on shelf labels and accepted as a
    fallback identifier by the lookup index.
    """

    id: str
    code: str
    description: str
    barcode: str | None = None
    unit: str = "UN"

"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import os
from pathlib import Path

from receiving.domain.service.finalization_committer import FinalizationCommitter
from receiving.domain.service.lookup_index import LookupIndex
from receiving.domain.service.reconciliation_engine import ReconciliationEngine
from receiving.infrastructure.persistence.file_locks import FileDocumentLocks
from receiving.infrastructure.persistence.json_conference_line_repository import (
    JsonConferenceLineRepository,
)
from receiving.infrastructure.persistence.json_document_repository import (
    JsonDocumentRepository,
)
from receiving.infrastructure.persistence.json_inventory_repository import (
    JsonInventoryRepository,
)
from receiving.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)

DATA_DIR_ENV = "RECEIVING_DATA_DIR"

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def data_dir(override: str | Path | None = None) -> Path:
    """Resolve the data directory: explicit override, environment, default."""
    if override:
        return Path(override)
    env = os.environ.get(DATA_DIR_ENV)
    if env:
        return Path(env)
    return _DEFAULT_DATA_DIR


def document_repository(root: Path) -> JsonDocumentRepository:
    return JsonDocumentRepository(root / "documents.json")


def conference_line_repository(root: Path) -> JsonConferenceLineRepository:
    return JsonConferenceLineRepository(root / "conference_lines.json")


def product_repository(root: Path) -> JsonProductRepository:
    return JsonProductRepository(root / "products.json")


def inventory_repository(root: Path) -> JsonInventoryRepository:
    return JsonInventoryRepository(root / "inventory.json")


def lookup_index(root: Path) -> LookupIndex:
    return LookupIndex(product_repository(root), document_repository(root))


def reconciliation_engine(root: Path) -> ReconciliationEngine:
    documents = document_repository(root)
    return ReconciliationEngine(
        document_repo=documents,
        line_repo=conference_line_repository(root),
        lookup_index=LookupIndex(product_repository(root), documents),
        committer=FinalizationCommitter(inventory_repository(root)),
        locks=FileDocumentLocks(root),
    )

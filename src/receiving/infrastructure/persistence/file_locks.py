"""Per-document locks shared by every process using one data directory.

Each CLI invocation builds its own engine, so the in-process registry
alone cannot keep two operators apart.  The lock file of a document is
held on top of the in-process lock for the duration of the call.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock

from receiving.domain.service.document_locks import DocumentLocks


def lock_path(file_path: Path) -> Path:
    return file_path.with_name(f".{file_path.name}.lock")


class FileDocumentLocks(DocumentLocks):

    def __init__(self, root: Path) -> None:
        super().__init__()
        self._root = root
        self._root.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def hold(self, document_id: int) -> Iterator[None]:
        with super().hold(document_id):
            with FileLock(self._root / f".document-{document_id}.lock"):
                yield

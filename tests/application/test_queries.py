"""Tests for the read-only use cases."""

from datetime import datetime, timezone

import pytest

from receiving.application.list_pending import ListPendingDocumentsHandler
from receiving.application.resolve_barcode import ResolveBarcodeHandler
from receiving.application.show_conference import ShowConferenceHandler
from receiving.application.show_stock import ShowStockHandler
from receiving.domain.exceptions import EntityNotFoundError, InvalidStateTransition
from receiving.domain.model.receipt_document import DocumentStatus
from tests.builders import TODAY, build_env, make_document


class TestListPendingDocuments:

    def test_lists_pending_and_in_progress_oldest_first(self):
        newer = make_document(1)
        newer.created_at = datetime(2024, 3, 10, tzinfo=timezone.utc)
        older = make_document(2, status=DocumentStatus.IN_PROGRESS)
        older.created_at = datetime(2024, 3, 1, tzinfo=timezone.utc)
        done = make_document(3, status=DocumentStatus.COMPLETED)
        env = build_env([newer, older, done])

        dtos = ListPendingDocumentsHandler(env.documents).handle()

        assert [d.id for d in dtos] == [2, 1]
        assert [d.status for d in dtos] == ["IN_PROGRESS", "PENDING"]

    def test_empty(self):
        env = build_env([make_document(status=DocumentStatus.COMPLETED_WITH_DIVERGENCE)])
        assert ListPendingDocumentsHandler(env.documents).handle() == []


class TestResolveBarcode:

    def test_found(self):
        env = build_env()
        env.engine.start_conference(1)

        dto = ResolveBarcodeHandler(env.lookup).handle(1, "7891000100103")

        assert dto.found
        assert dto.product_id == "A"
        assert dto.description == "Rice 5kg"
        assert dto.expected_quantity == 10

    def test_unknown_barcode(self):
        env = build_env()
        env.engine.start_conference(1)

        dto = ResolveBarcodeHandler(env.lookup).handle(1, "999")

        assert not dto.found
        assert dto.reason == "UNKNOWN_BARCODE"
        assert dto.product_id is None

    def test_not_on_document(self):
        env = build_env()
        env.engine.start_conference(1)

        dto = ResolveBarcodeHandler(env.lookup).handle(1, "7891000300307")

        assert not dto.found
        assert dto.reason == "NOT_ON_DOCUMENT"
        assert dto.product_id == "C"
        assert dto.description == "Coffee 500g"

    def test_requires_started_conference(self):
        env = build_env()
        with pytest.raises(InvalidStateTransition):
            ResolveBarcodeHandler(env.lookup).handle(1, "7891000100103")


class TestShowConference:

    def test_rows_with_counts_and_missing(self):
        env = build_env()
        env.engine.start_conference(1)
        env.engine.submit_line(1, "1002", 3)
        handler = ShowConferenceHandler(env.documents, env.lines, env.products)

        dto = handler.handle(1)

        assert dto.document.status == "IN_PROGRESS"
        assert [(r.product_id, r.counted_quantity, r.status) for r in dto.rows] == [
            ("A", 0, "NOT_COUNTED"),
            ("B", 3, "DIVERGENT"),
        ]
        assert [r.product_id for r in dto.missing] == ["A"]
        assert dto.rows[1].description == "Black beans 1kg"

    def test_unknown_document(self):
        env = build_env()
        handler = ShowConferenceHandler(env.documents, env.lines, env.products)
        with pytest.raises(EntityNotFoundError):
            handler.handle(5)


class TestShowStock:

    def test_after_finalize(self):
        env = build_env()
        env.engine.start_conference(1)
        env.engine.submit_line(1, "1001", 10)
        env.engine.submit_line(1, "1002", 5)
        env.engine.finalize(1)

        lines = ShowStockHandler(env.inventory).handle()

        assert [(l.product_id, l.quantity) for l in lines] == [("A", 14), ("B", 5)]
        assert lines[0].last_receipt_date == TODAY.isoformat()
        assert lines[0].last_receipt_quantity == 10

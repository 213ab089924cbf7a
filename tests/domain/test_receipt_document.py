"""Unit tests for the ReceiptDocument aggregate and its state machine."""

import pytest

from receiving.domain.exceptions import InvalidStateTransition, ValidationError
from receiving.domain.model.receipt_document import DocumentStatus, ReceiptDocument
from receiving.domain.model.value_objects import Money
from tests.builders import expected, make_document


class TestDocumentCreation:

    def test_happy_path(self):
        doc = ReceiptDocument.create(1, " NFE-1 ", [expected("A", 10)], supplier="Acme")
        assert doc.reference == "NFE-1"
        assert doc.status == DocumentStatus.PENDING
        assert len(doc.lines) == 1

    def test_reference_required(self):
        with pytest.raises(ValidationError, match="reference is required"):
            ReceiptDocument.create(1, "  ", [expected("A", 10)])

    def test_no_lines_rejected(self):
        with pytest.raises(ValidationError, match="at least one expected line"):
            ReceiptDocument.create(1, "NFE-1", [])

    def test_duplicate_product_rejected(self):
        with pytest.raises(ValidationError, match="appears twice"):
            ReceiptDocument.create(1, "NFE-1", [expected("A", 1), expected("A", 2)])

    def test_lines_are_immutable_tuple(self):
        doc = make_document()
        assert isinstance(doc.lines, tuple)


class TestStartConference:

    def test_pending_moves_to_in_progress(self):
        doc = make_document()
        assert doc.start_conference() is True
        assert doc.status == DocumentStatus.IN_PROGRESS

    def test_in_progress_is_reentrant(self):
        doc = make_document(status=DocumentStatus.IN_PROGRESS)
        assert doc.start_conference() is False
        assert doc.status == DocumentStatus.IN_PROGRESS

    @pytest.mark.parametrize(
        "status",
        [DocumentStatus.COMPLETED, DocumentStatus.COMPLETED_WITH_DIVERGENCE],
    )
    def test_terminal_document_cannot_restart(self, status):
        doc = make_document(status=status)
        with pytest.raises(InvalidStateTransition, match=status.value):
            doc.start_conference()
        assert doc.status == status


class TestComplete:

    def test_complete_without_divergence(self):
        doc = make_document(status=DocumentStatus.IN_PROGRESS)
        doc.complete(with_divergence=False)
        assert doc.status == DocumentStatus.COMPLETED

    def test_complete_with_divergence(self):
        doc = make_document(status=DocumentStatus.IN_PROGRESS)
        doc.complete(with_divergence=True)
        assert doc.status == DocumentStatus.COMPLETED_WITH_DIVERGENCE

    def test_pending_cannot_complete(self):
        doc = make_document()
        with pytest.raises(InvalidStateTransition, match="expected IN_PROGRESS"):
            doc.complete(with_divergence=False)

    def test_terminal_states_never_switch(self):
        doc = make_document(status=DocumentStatus.COMPLETED)
        with pytest.raises(InvalidStateTransition):
            doc.complete(with_divergence=True)
        assert doc.status == DocumentStatus.COMPLETED


class TestDocumentQueries:

    def test_expected_line_for(self):
        doc = make_document()
        assert doc.expected_line_for("B").expected_quantity.value == 5
        assert doc.expected_line_for("Z") is None

    def test_expected_value(self):
        # 10 x 20.00 + 5 x 8.50
        assert make_document().expected_value == Money.of("242.50")

    def test_terminal_flag(self):
        assert DocumentStatus.COMPLETED.is_terminal
        assert DocumentStatus.COMPLETED_WITH_DIVERGENCE.is_terminal
        assert not DocumentStatus.PENDING.is_terminal
        assert not DocumentStatus.IN_PROGRESS.is_terminal

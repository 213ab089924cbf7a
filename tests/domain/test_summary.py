"""Unit tests for FinalizationSummary assembly."""

import pytest

from receiving.domain.model.conference_line import ConferenceLine
from receiving.domain.model.receipt_document import DocumentStatus
from receiving.domain.model.summary import FinalizationSummary
from receiving.domain.model.value_objects import Money, Quantity
from tests.builders import make_document


def _counted(document, product_id: str, qty: int) -> ConferenceLine:
    line = ConferenceLine.open(document.id, document.expected_line_for(product_id))
    line.record(Quantity(qty), product_id)
    return line


class TestBuild:

    def test_counts(self):
        doc = make_document()
        summary = FinalizationSummary.build(doc, [_counted(doc, "A", 10), _counted(doc, "B", 3)])
        assert (summary.matched, summary.divergent, summary.total) == (1, 1, 2)
        assert summary.outcome == DocumentStatus.COMPLETED_WITH_DIVERGENCE

    def test_all_matched(self):
        doc = make_document()
        summary = FinalizationSummary.build(doc, [_counted(doc, "A", 10), _counted(doc, "B", 5)])
        assert summary.divergences == ()
        assert not summary.has_divergence
        assert summary.outcome == DocumentStatus.COMPLETED

    def test_divergence_record(self):
        doc = make_document()
        summary = FinalizationSummary.build(doc, [_counted(doc, "A", 10), _counted(doc, "B", 3)])
        (record,) = summary.divergences
        assert record.product_id == "B"
        assert record.expected_quantity == 5
        assert record.counted_quantity == 3
        assert record.difference == -2
        assert record.value == Money.of("17.00")
        assert record.note == "Expected 5, counted 3 (short by 2)"

    def test_overage_note(self):
        doc = make_document()
        summary = FinalizationSummary.build(doc, [_counted(doc, "A", 12), _counted(doc, "B", 5)])
        assert summary.divergences[0].note == "Expected 10, counted 12 (over by 2)"

    def test_values(self):
        doc = make_document()
        summary = FinalizationSummary.build(doc, [_counted(doc, "A", 10), _counted(doc, "B", 3)])
        assert summary.expected_value == Money.of("242.50")
        assert summary.counted_value == Money.of("225.50")

    def test_foreign_line_rejected(self):
        doc = make_document()
        stray = ConferenceLine(document_id=doc.id, product_id="Z", expected_quantity=1, counted_quantity=1)
        with pytest.raises(ValueError, match="does not belong"):
            FinalizationSummary.build(doc, [stray])

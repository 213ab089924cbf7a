"""End-to-end tests of the command line over a temporary data directory."""

import json

import pytest
from click.testing import CliRunner

from receiving.infrastructure.bootstrap import DATA_DIR_ENV, data_dir
from receiving.infrastructure.cli.main import cli
from receiving.infrastructure.persistence.json_document_repository import (
    JsonDocumentRepository,
)
from tests.builders import make_document


@pytest.fixture
def data_path(tmp_path):
    (tmp_path / "products.json").write_text(json.dumps([
        {"id": "A", "code": "1001", "description": "Rice 5kg", "barcode": "7891000100103"},
        {"id": "B", "code": "1002", "description": "Black beans 1kg", "barcode": "7891000200205"},
        {"id": "C", "code": "1003", "description": "Coffee 500g", "barcode": "7891000300307"},
    ]))
    JsonDocumentRepository(tmp_path / "documents.json").save(make_document(1))
    return tmp_path


def _run(data_path, *args):
    return CliRunner().invoke(cli, ["--data-dir", str(data_path), *args])


class TestConferenceCommands:

    def test_full_conference(self, data_path):
        assert "(start)" in _run(data_path, "conference", "pending").output

        result = _run(data_path, "conference", "start", "--document", "1")
        assert result.exit_code == 0, result.output
        assert "in conference" in result.output

        result = _run(data_path, "conference", "scan", "--document", "1",
                      "--barcode", "7891000100103", "--quantity", "10",
                      "--expiry", "2025-01-31")
        assert result.exit_code == 0, result.output
        assert "counted 10 of 10  [MATCHED]" in result.output

        result = _run(data_path, "conference", "scan", "--document", "1",
                      "--barcode", "1002", "--quantity", "3")
        assert "[DIVERGENT]" in result.output

        result = _run(data_path, "conference", "finalize", "--document", "1")
        assert result.exit_code == 0, result.output
        assert "COMPLETED_WITH_DIVERGENCE" in result.output
        assert "short by 2" in result.output

        result = _run(data_path, "stock", "show")
        assert "A" in result.output
        inventory = json.loads((data_path / "inventory.json").read_text())
        stock = {b["product_id"]: b["quantity"] for b in inventory["balances"]}
        assert stock == {"A": 10, "B": 3}

    def test_pending_shows_resume_hint(self, data_path):
        _run(data_path, "conference", "start", "--document", "1")
        assert "(resume)" in _run(data_path, "conference", "pending").output

    def test_resolve_messages(self, data_path):
        _run(data_path, "conference", "start", "--document", "1")

        ok = _run(data_path, "conference", "resolve", "--document", "1", "--barcode", "1001")
        assert ok.exit_code == 0
        assert "expected 10" in ok.output

        unknown = _run(data_path, "conference", "resolve", "--document", "1", "--barcode", "42")
        assert unknown.exit_code == 1
        assert "Unknown barcode" in unknown.output

        off_doc = _run(data_path, "conference", "resolve", "--document", "1", "--barcode", "1003")
        assert off_doc.exit_code == 1
        assert "not on this document" in off_doc.output

    def test_scan_errors_are_reported(self, data_path):
        _run(data_path, "conference", "start", "--document", "1")
        result = _run(data_path, "conference", "scan", "--document", "1",
                      "--barcode", "1001", "--quantity", "0")
        assert result.exit_code == 1
        assert "must be positive" in result.output

    def test_finalize_lists_missing_products(self, data_path):
        _run(data_path, "conference", "start", "--document", "1")
        _run(data_path, "conference", "scan", "--document", "1", "--barcode", "1001", "--quantity", "10")

        result = _run(data_path, "conference", "finalize", "--document", "1")

        assert result.exit_code == 1
        assert "Missing:" in result.output
        assert "B (expected 5)" in result.output

    def test_show(self, data_path):
        _run(data_path, "conference", "start", "--document", "1")
        _run(data_path, "conference", "scan", "--document", "1", "--barcode", "1002", "--quantity", "5")

        result = _run(data_path, "conference", "show", "--document", "1")

        assert result.exit_code == 0
        assert "NOT_COUNTED" in result.output
        assert "1 product(s) not counted yet." in result.output


class TestDataDir:

    def test_override_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv(DATA_DIR_ENV, "/somewhere/else")
        assert data_dir(tmp_path) == tmp_path

    def test_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path))
        assert data_dir() == tmp_path

    def test_default(self, monkeypatch):
        monkeypatch.delenv(DATA_DIR_ENV, raising=False)
        assert data_dir().name == "data"

"""Tests for validation report rendering."""

import json

import pytest
from rich.console import Console

from sanity.engine import SanityInfo
from sanity.report import ReportFormat, render, to_markdown, to_table
from sanity.rules import FailureKind


@pytest.fixture
def failing_info():
    info = SanityInfo()
    info.record("order.items.1.sku", FailureKind.REGEX)
    info.record("id", FailureKind.NOT_NULL)
    return info


@pytest.fixture
def console():
    return Console(record=True, width=120, color_system=None)


class TestToTable:
    """Test rich table rendering."""

    def test_rows_sorted_by_path(self, failing_info):
        table = to_table(failing_info)
        assert table.row_count == 2
        assert list(table.columns[0].cells) == ["id", "order.items.1.sku"]


class TestToMarkdown:
    """Test Markdown rendering."""

    def test_invalid_report(self, failing_info):
        text = to_markdown(failing_info)
        assert text.startswith("# Validation Report")
        assert "**Status:** invalid" in text
        assert "- **id** not_null: blank value sent to field marked as notnull" in text

    def test_valid_report(self):
        text = to_markdown(SanityInfo())
        assert "**Status:** valid" in text
        assert "## Failures" not in text


class TestRender:
    """Test report printing."""

    def test_json(self, failing_info, console):
        render(failing_info, "json", console=console)
        data = json.loads(console.export_text())
        assert data["valid"] is False
        assert data["errors"]["id"] == "not_null"

    def test_table(self, failing_info, console):
        render(failing_info, ReportFormat.TABLE, console=console)
        text = console.export_text()
        assert "Validation Status: INVALID" in text
        assert "order.items.1.sku" in text
        assert "does not match pattern" in text

    def test_table_valid(self, console):
        render(SanityInfo(), console=console)
        text = console.export_text()
        assert "Validation Status: VALID" in text
        assert "No failures found!" in text

    def test_markdown(self, failing_info, console):
        render(failing_info, "markdown", console=console)
        assert "# Validation Report" in console.export_text()

    def test_unknown_format(self, failing_info, console):
        with pytest.raises(ValueError):
            render(failing_info, "html", console=console)

"""Tests for the human readable diff report."""

from __future__ import annotations

import pytest

from prompt_history.core.exceptions import InvalidArgument
from prompt_history.modules.text_diff import DiffObject, calculate, format_diff


def test_modified_report():
    report = format_diff(calculate("line1\nline2\nline3", "line1\nlineX\nline3"))

    assert report == "\n".join(
        [
            "=== DIFF REPORT ===",
            "",
            "MODIFIED:",
            "  Line 1:",
            "    - line2",
            "    + lineX",
            "",
            "STATS:",
            "  Total changes: 1",
            "  Lines modified: 1",
            "  Lines added: 0",
            "  Lines removed: 0",
        ]
    )


def test_sections_in_fixed_order():
    diff = {
        "added": [{"newIndex": 3, "content": "new"}],
        "removed": [{"oldIndex": 0, "content": "gone"}],
        "modified": [{"oldIndex": 2, "newIndex": 1, "oldContent": "x", "newContent": "y"}],
    }
    report = format_diff(diff)

    assert report.index("MODIFIED:") < report.index("REMOVED:") < report.index("ADDED:")
    assert "  Line 0: gone" in report
    assert "  Line 3: new" in report
    assert "  Total changes: 3" in report


def test_empty_diff_has_only_stats():
    report = format_diff(DiffObject.empty())

    assert "MODIFIED:" not in report
    assert "REMOVED:" not in report
    assert "ADDED:" not in report
    assert report.endswith("  Lines removed: 0")


def test_malformed_diff_is_rejected():
    with pytest.raises(InvalidArgument):
        format_diff({"added": []})

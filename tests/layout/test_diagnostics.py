"""
Unit tests for layout diagnostics.
"""

import logging

from notes_pager.layout import IssueType, LayoutDiagnostics


class TestLayoutDiagnostics:

    def test_add_when_called_then_issue_recorded(self):
        diagnostics = LayoutDiagnostics()

        issue = diagnostics.add(
            IssueType.OVERSIZED_LEAF, "too big", page_index=2, tag="pre", source_index=1
        )

        assert diagnostics.issues == [issue]
        assert diagnostics.messages == ["too big"]
        assert len(diagnostics) == 1

    def test_add_when_called_then_logs_warning(self, caplog):
        diagnostics = LayoutDiagnostics()

        with caplog.at_level(logging.WARNING, logger="notes_pager.layout.diagnostics"):
            diagnostics.add(IssueType.DEPTH_EXHAUSTED, "depth reached")

        assert "depth reached" in caplog.text
        assert "depth_exhausted" in caplog.text

    def test_count_when_filtered_then_counts_one_type(self):
        diagnostics = LayoutDiagnostics()
        diagnostics.add(IssueType.OVERSIZED_LEAF, "a")
        diagnostics.add(IssueType.OVERSIZED_LIST_ITEM, "b")
        diagnostics.add(IssueType.OVERSIZED_LEAF, "c")

        assert diagnostics.count() == 3
        assert diagnostics.count(IssueType.OVERSIZED_LEAF) == 2

    def test_to_dict_when_issues_then_grouped_by_type(self):
        diagnostics = LayoutDiagnostics()
        diagnostics.add(IssueType.OVERSIZED_LEAF, "a", page_index=0)
        diagnostics.add(IssueType.OVERSIZED_LEAF, "b")

        data = diagnostics.to_dict()

        assert data["total"] == 2
        assert data["by_type"] == {"oversized_leaf": 2}
        assert data["issues"][0] == {"issue_type": "oversized_leaf", "message": "a", "page_index": 0}
        assert "page_index" not in data["issues"][1]

    def test_issues_when_returned_then_copy(self):
        diagnostics = LayoutDiagnostics()
        diagnostics.add(IssueType.OVERSIZED_LEAF, "a")

        diagnostics.issues.clear()

        assert len(diagnostics) == 1

    def test_clear_when_called_then_empty(self):
        diagnostics = LayoutDiagnostics()
        diagnostics.add(IssueType.OVERSIZED_LEAF, "a")

        diagnostics.clear()

        assert diagnostics.count() == 0

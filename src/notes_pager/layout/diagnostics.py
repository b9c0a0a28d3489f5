"""
Module: layout.diagnostics

Captures soft failures during pagination (content placed despite
overflowing, depth guard trips) so callers can report them.

Nothing here raises: an issue is recorded, logged as a warning, and
pagination carries on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class IssueType(str, Enum):
    """Kind of soft failure."""
    OVERSIZED_LEAF = "oversized_leaf"
    OVERSIZED_LIST_ITEM = "oversized_list_item"
    DEPTH_EXHAUSTED = "depth_exhausted"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class LayoutIssue:
    """
    A single layout issue.

    Fields:
    - page_index: Page the content ended up on (None if not yet known)
    - tag: Tag of the offending node ("#text" for text, list tag for lists)
    - source_index: Source document the content came from, if known
    """
    issue_type: IssueType
    message: str
    page_index: Optional[int] = None
    tag: Optional[str] = None
    source_index: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "issue_type": self.issue_type.value,
            "message": self.message,
        }
        if self.page_index is not None:
            d["page_index"] = self.page_index
        if self.tag:
            d["tag"] = self.tag
        if self.source_index is not None:
            d["source_index"] = self.source_index
        return d


class LayoutDiagnostics:
    """
    Collector for layout issues.

    One collector may be shared across several documents (the source
    loader keeps one per session).
    """

    def __init__(self):
        self._issues: List[LayoutIssue] = []

    def add(
        self,
        issue_type: IssueType,
        message: str,
        *,
        page_index: Optional[int] = None,
        tag: Optional[str] = None,
        source_index: Optional[int] = None,
    ) -> LayoutIssue:
        """Record an issue and log it."""
        issue = LayoutIssue(
            issue_type=issue_type,
            message=message,
            page_index=page_index,
            tag=tag,
            source_index=source_index,
        )
        self._issues.append(issue)
        logger.warning(f"[{issue_type}] {message}")
        return issue

    @property
    def issues(self) -> List[LayoutIssue]:
        return list(self._issues)

    @property
    def messages(self) -> List[str]:
        return [issue.message for issue in self._issues]

    def count(self, issue_type: Optional[IssueType] = None) -> int:
        """Number of issues, optionally of one type."""
        if issue_type is None:
            return len(self._issues)
        return sum(1 for issue in self._issues if issue.issue_type == issue_type)

    def to_dict(self) -> Dict[str, Any]:
        by_type: Dict[str, int] = {}
        for issue in self._issues:
            by_type[issue.issue_type.value] = by_type.get(issue.issue_type.value, 0) + 1
        return {
            "total": len(self._issues),
            "by_type": by_type,
            "issues": [issue.to_dict() for issue in self._issues],
        }

    def clear(self) -> None:
        self._issues.clear()

    def __len__(self) -> int:
        return len(self._issues)

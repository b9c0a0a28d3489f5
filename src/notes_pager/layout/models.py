"""
Module: layout.models

Purpose:
    Data models for pagination output.
    Immutable dataclasses representing finished pages and results.

Key Classes:
    - Page: One sealed page of content fragments
    - LayoutResult: Pages produced for one document, with diagnostics

Dependencies:
    - dataclasses (std)
    - core.models: ContentNode

Used By:
    - layout.fitting: PageBuilder.seal() creates Pages
    - layout.paginator: Creates LayoutResults
    - output.surface: Appends Pages
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from notes_pager.core.models import ContentNode, text_of

from .diagnostics import LayoutIssue


@dataclass(frozen=True)
class Page:
    """
    A sealed page (immutable).

    Attributes:
        index: Page number (0-indexed, global across documents)
        nodes: Top-level content fragments in order
        forced: True if the page holds a single unit placed despite
            exceeding capacity
        source_index: Source document the content came from

    Example:
        >>> page = Page(index=0, nodes=(Text("Hello"),))
        >>> page.text_content
        'Hello'
    """

    index: int
    nodes: tuple[ContentNode, ...]
    forced: bool = False
    source_index: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        """Check if page has no content."""
        return len(self.nodes) == 0

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def text_content(self) -> str:
        return text_of(self.nodes)

    def to_html(self) -> str:
        inner = "".join(node.to_html() for node in self.nodes)
        return f'<div class="page" data-index="{self.index}">{inner}</div>'


@dataclass(frozen=True)
class LayoutResult:
    """
    Pagination output for one document.

    Attributes:
        pages: Tuple of Pages in order
        warnings: Messages of issues raised while paginating this document
        issues: Structured issues (same order as warnings)

    Example:
        >>> result = LayoutResult(pages=(page1, page2))
        >>> result.page_count
        2
    """

    pages: tuple[Page, ...]
    warnings: list[str] = field(default_factory=list)
    issues: list[LayoutIssue] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        """Number of pages in layout."""
        return len(self.pages)

    @property
    def text_content(self) -> str:
        return "".join(page.text_content for page in self.pages)

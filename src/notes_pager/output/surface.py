"""
Module: output.surface

Purpose:
    Presentation surface receiving finished pages. Append-only: pages are
    never modified or read back once appended.

Key Classes:
    - PageSurface: Abstract surface interface
    - PageStack: In-memory surface stacking pages vertically

Dependencies:
    - layout.models: Page

Used By:
    - loading.loader: SourceLoader appends pages and reads the extent
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Sequence

from notes_pager.layout.models import Page

logger = logging.getLogger(__name__)


class PageSurface(ABC):
    """Append-only target for pages."""

    @property
    @abstractmethod
    def page_count(self) -> int:
        """Number of pages appended so far."""

    @property
    @abstractmethod
    def content_extent(self) -> float:
        """Total rendered extent of all appended pages in pixels."""

    @abstractmethod
    def append_pages(self, pages: Sequence[Page]) -> None:
        """
        Append pages in order.

        Raises:
            ValueError: If page indices do not continue the surface
        """


class PageStack(PageSurface):
    """
    In-memory surface with pages stacked vertically.

    Attributes:
        page_height: Rendered height of one page in pixels
        page_gap: Vertical gap after each page in pixels

    Example:
        >>> stack = PageStack(page_height=1123, page_gap=16)
        >>> stack.append_pages(result.pages)
        >>> stack.content_extent
        2278
    """

    def __init__(self, page_height: float, page_gap: float = 0):
        if page_height <= 0:
            raise ValueError(f"page_height must be positive: {page_height}")
        if page_gap < 0:
            raise ValueError(f"page_gap must be non-negative: {page_gap}")
        self.page_height = page_height
        self.page_gap = page_gap
        self._pages: List[Page] = []

    @property
    def pages(self) -> tuple[Page, ...]:
        return tuple(self._pages)

    @property
    def page_count(self) -> int:
        return len(self._pages)

    @property
    def content_extent(self) -> float:
        return self.page_count * (self.page_height + self.page_gap)

    @property
    def text_content(self) -> str:
        return "".join(page.text_content for page in self._pages)

    def append_pages(self, pages: Sequence[Page]) -> None:
        expected = self.page_count
        for offset, page in enumerate(pages):
            if page.index != expected + offset:
                raise ValueError(
                    f"Page index {page.index} does not continue the surface "
                    f"(expected {expected + offset})"
                )
        self._pages.extend(pages)
        logger.debug(f"Appended {len(pages)} pages (total {self.page_count})")

    def to_html(self) -> str:
        return "\n".join(page.to_html() for page in self._pages)

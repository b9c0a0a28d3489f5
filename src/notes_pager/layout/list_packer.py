"""
Module: layout.list_packer

Purpose:
    Fit the items of a top-level list across pages without ever splitting
    or duplicating an item.

Key Classes:
    - ListPacker: Item-by-item packer producing sealed pages

Algorithm:
    For each item in order:
    1. Append it to the current page's list container and ask the oracle
    2. If it fits, continue with the next item
    3. If it overflows, take it back out; seal the page if the container
       holds items; open a new page and container and retry the item there
    4. An item that overflows an empty page is placed alone anyway and the
       page is sealed as forced

Dependencies:
    - layout.fitting: PageBuilder
    - layout.diagnostics: Oversized item issues

Used By:
    - layout.paginator: Document Pager
"""

from __future__ import annotations

import logging
from typing import List, Optional

from notes_pager.core.models import ContentNode, ListNode

from .diagnostics import IssueType, LayoutDiagnostics
from .fitting import PageBuilder
from .measure import MeasurementOracle
from .models import Page

logger = logging.getLogger(__name__)


class ListPacker:
    """
    Packs list items onto fresh pages.

    Every item appears whole, exactly once, in exactly one page's
    container; item order is kept within and across containers.
    """

    def __init__(
        self,
        oracle: MeasurementOracle,
        diagnostics: Optional[LayoutDiagnostics] = None,
    ):
        self._oracle = oracle
        self._diagnostics = diagnostics if diagnostics is not None else LayoutDiagnostics()

    def pack(
        self,
        node: ListNode,
        start_index: int = 0,
        *,
        source_index: Optional[int] = None,
    ) -> List[Page]:
        """
        Pack node's items onto pages starting at start_index.

        Args:
            node: List to pack
            start_index: Index of the first page produced
            source_index: Source document, recorded on pages and issues

        Returns:
            Sealed pages in order (empty for an empty list)
        """
        pages: List[Page] = []
        page = PageBuilder(self._oracle)
        items: List[ContentNode] = []

        def seal_current(forced: bool = False) -> None:
            nonlocal page, items
            page.commit(node.with_items(items))
            pages.append(page.seal(start_index + len(pages), forced=forced, source_index=source_index))
            page = PageBuilder(self._oracle)
            items = []

        for position, item in enumerate(node.items):
            if page.fits(node.with_items([*items, item])):
                items.append(item)
                continue

            if items:
                seal_current()
                if page.fits(node.with_items([item])):
                    items.append(item)
                    continue

            # A lone item overflowing an empty page
            items.append(item)
            self._diagnostics.add(
                IssueType.OVERSIZED_LIST_ITEM,
                f"List item {position + 1} of <{node.tag}> exceeds page capacity on its own; "
                f"placed on page {start_index + len(pages)} anyway",
                page_index=start_index + len(pages),
                tag=node.tag,
                source_index=source_index,
            )
            seal_current(forced=True)

        if items:
            seal_current()

        logger.debug(f"Packed {len(node.items)} <{node.tag}> items onto {len(pages)} pages")
        return pages

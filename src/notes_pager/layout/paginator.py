"""
Module: layout.paginator

Purpose:
    Drive one document's content tree through the fitting engine and the
    list packer, producing an ordered sequence of pages.

Key Functions:
    - paginate(): Main pagination function

Algorithm:
    Greedy first-fit, one open page at a time:
    1. A top-level list seals the open page (if it has content), is packed
       onto its own pages, and a fresh page is opened after it
    2. Any other node is fitted onto the open page; whatever does not fit
       is carried to a fresh page and fitted again
    3. When nothing of a node fits even an empty page, its leading unit is
       placed alone on that page anyway (never dropped) and one diagnostic
       is recorded for it
    4. The last page is sealed only if it has content

Dependencies:
    - layout.fitting: FittingEngine, PageBuilder
    - layout.list_packer: ListPacker
    - layout.measure: MeasurementOracle

Used By:
    - loading.loader: SourceLoader
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from notes_pager.core.models import ContentNode, Element, ListNode

from .config import LayoutConfig
from .diagnostics import IssueType, LayoutDiagnostics
from .fitting import FittingEngine, PageBuilder, node_tag
from .list_packer import ListPacker
from .measure import MeasurementOracle
from .models import LayoutResult, Page
from .splitter import is_splittable

logger = logging.getLogger(__name__)


def paginate(
    nodes: Sequence[ContentNode],
    oracle: MeasurementOracle,
    config: LayoutConfig,
    *,
    start_index: int = 0,
    source_index: Optional[int] = None,
    diagnostics: Optional[LayoutDiagnostics] = None,
) -> LayoutResult:
    """
    Arrange a document's top-level nodes onto pages.

    Args:
        nodes: Top-level content of one source document
        oracle: Measurement oracle deciding overflow
        config: Layout configuration
        start_index: Index of the first page produced
        source_index: Source document number (recorded on pages/issues)
        diagnostics: Collector to record issues into (shared across
            documents by the loader); a fresh one is used if omitted

    Returns:
        LayoutResult with pages in order and this document's warnings

    Example:
        >>> result = paginate([Element("p", children=(Text("Hi."),))], oracle, config)
        >>> result.page_count
        1
    """
    if diagnostics is None:
        diagnostics = LayoutDiagnostics()
    issues_before = len(diagnostics)

    engine = FittingEngine(oracle, config)
    packer = ListPacker(oracle, diagnostics)

    pages: List[Page] = []
    page = PageBuilder(oracle)

    def next_index() -> int:
        return start_index + len(pages)

    def seal(forced: bool = False) -> None:
        nonlocal page
        pages.append(page.seal(next_index(), forced=forced, source_index=source_index))
        page = PageBuilder(oracle)

    for node in nodes:
        if isinstance(node, ListNode):
            if not page.is_empty:
                seal()
            pages.extend(packer.pack(node, next_index(), source_index=source_index))
            continue

        remaining: Optional[ContentNode] = node
        while remaining is not None:
            result = engine.fit(remaining, page)
            if result.placed is not None:
                page.commit(result.placed)
            remaining = result.remainder
            if remaining is None:
                break

            if not page.is_empty:
                # Carry the remainder over to a fresh page
                seal()
                logger.debug(f"Carrying <{node_tag(remaining)}> over to page {next_index()}")
                continue

            head, remaining = engine.split_head(remaining)
            page.commit(head)
            issue_type, tag = _forced_issue(head, result.depth_exhausted, config)
            if issue_type is IssueType.DEPTH_EXHAUSTED:
                message = f"Split depth limit reached in <{tag}>; placed on page {next_index()} whole"
            else:
                message = (
                    f"<{tag}> exceeds page capacity on its own; "
                    f"placed on page {next_index()} anyway"
                )
            diagnostics.add(
                issue_type,
                message,
                page_index=next_index(),
                tag=tag,
                source_index=source_index,
            )
            seal(forced=True)

    if not page.is_empty:
        seal()

    issues = diagnostics.issues[issues_before:]
    logger.info(f"Paginated {len(nodes)} nodes onto {len(pages)} pages")

    return LayoutResult(
        pages=tuple(pages),
        warnings=[issue.message for issue in issues],
        issues=issues,
    )


def _forced_issue(
    head: ContentNode,
    depth_exhausted: bool,
    config: LayoutConfig,
) -> Tuple[IssueType, str]:
    """Issue type and tag for a unit placed despite overflowing."""
    if depth_exhausted:
        return IssueType.DEPTH_EXHAUSTED, node_tag(head)

    # Follow the chain of ancestor shells down to the forced unit
    node = head
    while isinstance(node, Element) and len(node.children) == 1 and is_splittable(node, config):
        node = node.children[0]
    if isinstance(node, ListNode):
        return IssueType.OVERSIZED_LIST_ITEM, node.tag
    return IssueType.OVERSIZED_LEAF, node_tag(node)

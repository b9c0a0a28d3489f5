"""
Module: layout.fitting

Purpose:
    Place one content node onto an open page, splitting it when it
    overflows and reporting what could not be placed.

Key Classes:
    - PageBuilder: Open page with stage/commit/seal steps
    - FitResult: Outcome of a placement attempt (placed / partial / unplaced)
    - FittingEngine: Recursive place-or-split algorithm

Algorithm:
    1. Stage the node on the page and ask the oracle
    2. If it fits, it is fully placed
    3. Otherwise split it (layout.splitter) and fit the fragments in order
       against the same page; the first fragment that does not fully fit
       ends the loop and, with every later fragment, forms the remainder
    4. Past max_split_depth nothing is split further; the result is flagged
       so the caller can report it if the node ends up force-placed

    Nested fragments are staged through a frame: a function wrapping a
    fragment in the already-placed siblings and ancestor shells, so the
    oracle always sees the complete candidate page.

Dependencies:
    - layout.measure: MeasurementOracle
    - layout.splitter: split_node()

Used By:
    - layout.paginator: Document Pager
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from notes_pager.core.models import ContentNode, ListNode, Text

from .config import LayoutConfig
from .measure import MeasurementOracle
from .models import Page
from .splitter import is_splittable, split_node

logger = logging.getLogger(__name__)

# Maps a fragment to the top-level node it would add to the page
Frame = Callable[[ContentNode], ContentNode]


def _identity(node: ContentNode) -> ContentNode:
    return node


class PageBuilder:
    """
    Page under construction.

    Placement is a two-phase commit: ``fits()`` stages a candidate and asks
    the oracle without changing the page, ``commit()`` places it. ``seal()``
    turns the page into an immutable Page; a sealed builder accepts no
    further content.
    """

    def __init__(self, oracle: MeasurementOracle):
        self._oracle = oracle
        self._nodes: List[ContentNode] = []
        self._sealed = False

    @property
    def nodes(self) -> Tuple[ContentNode, ...]:
        return tuple(self._nodes)

    @property
    def is_empty(self) -> bool:
        return not self._nodes

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    def fits(self, node: ContentNode) -> bool:
        """Check whether node appended to this page stays within capacity."""
        return not self._oracle.exceeds_capacity([*self._nodes, node])

    def commit(self, node: ContentNode) -> None:
        """Append node to the page."""
        if self._sealed:
            raise RuntimeError("Cannot add content to a sealed page")
        self._nodes.append(node)

    def seal(
        self,
        index: int,
        *,
        forced: bool = False,
        source_index: Optional[int] = None,
    ) -> Page:
        """Finalize the page."""
        if self._sealed:
            raise RuntimeError("Page already sealed")
        self._sealed = True
        logger.debug(f"Sealed page {index} with {len(self._nodes)} nodes")
        return Page(
            index=index,
            nodes=tuple(self._nodes),
            forced=forced,
            source_index=source_index,
        )


class FitStatus(str, Enum):
    """Outcome of a placement attempt."""
    PLACED = "placed"
    PARTIAL = "partial"
    UNPLACED = "unplaced"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FitResult:
    """
    Outcome of fitting a node onto a page.

    Attributes:
        placed: The part that fits (None if nothing fits)
        remainder: The unplaced tail, same variant as the input
            (None if fully placed)
        depth_exhausted: The depth guard stopped splitting part of the
            remainder

    Example:
        >>> FitResult.partial(Text("One. "), Text("Two.")).status
        <FitStatus.PARTIAL: 'partial'>
    """

    placed: Optional[ContentNode]
    remainder: Optional[ContentNode]
    depth_exhausted: bool = False

    def __post_init__(self) -> None:
        if self.placed is None and self.remainder is None:
            raise ValueError("FitResult needs placed content or a remainder")

    @classmethod
    def fully(cls, node: ContentNode) -> FitResult:
        return cls(placed=node, remainder=None)

    @classmethod
    def partial(
        cls, placed: ContentNode, remainder: ContentNode, depth_exhausted: bool = False
    ) -> FitResult:
        return cls(placed=placed, remainder=remainder, depth_exhausted=depth_exhausted)

    @classmethod
    def unplaced(cls, node: ContentNode, depth_exhausted: bool = False) -> FitResult:
        return cls(placed=None, remainder=node, depth_exhausted=depth_exhausted)

    @property
    def status(self) -> FitStatus:
        if self.remainder is None:
            return FitStatus.PLACED
        if self.placed is None:
            return FitStatus.UNPLACED
        return FitStatus.PARTIAL

    @property
    def is_complete(self) -> bool:
        return self.remainder is None


class FittingEngine:
    """
    Recursive place-or-split engine for one page at a time.

    The engine only stages and reports; committing the placed part,
    sealing pages and retrying remainders is the caller's job.

    Example:
        >>> engine = FittingEngine(oracle, LayoutConfig())
        >>> page = PageBuilder(oracle)
        >>> result = engine.fit(Element("p", children=(Text("One. Two."),)), page)
        >>> result.status
        <FitStatus.PLACED: 'placed'>
    """

    def __init__(self, oracle: MeasurementOracle, config: LayoutConfig):
        self._oracle = oracle
        self._config = config

    def fit(self, node: ContentNode, page: PageBuilder) -> FitResult:
        """
        Fit node onto page without committing anything.

        Args:
            node: Top-level node to place
            page: Open page

        Returns:
            FitResult; ``placed`` is a single top-level node ready to commit
        """
        return self._fit(node, page, _identity, 0)

    def split_head(
        self,
        node: ContentNode,
        depth: int = 0,
    ) -> Tuple[ContentNode, Optional[ContentNode]]:
        """
        Separate the smallest leading unit of node for force-placement.

        Descends into the first child of splittable elements and takes the
        first item of lists. Text, leaf/atomic elements and anything past
        the depth guard are taken whole.

        Returns:
            (head, tail); tail is None when head is the whole node
        """
        if isinstance(node, ListNode):
            if len(node.items) <= 1:
                return node, None
            return node.with_items(node.items[:1]), node.with_items(node.items[1:])
        if (
            isinstance(node, Text)
            or not is_splittable(node, self._config)
            or depth >= self._config.max_split_depth
        ):
            return node, None

        head_child, tail_child = self.split_head(node.children[0], depth + 1)
        rest = ([tail_child] if tail_child is not None else []) + list(node.children[1:])
        head = node.with_children([head_child])
        tail = node.with_children(rest) if rest else None
        return head, tail

    # ─────────────────────────────────────────────────────────────────────
    # Recursion
    # ─────────────────────────────────────────────────────────────────────

    def _fit(
        self,
        node: ContentNode,
        page: PageBuilder,
        frame: Frame,
        depth: int,
    ) -> FitResult:
        if page.fits(frame(node)):
            return FitResult.fully(node)

        if isinstance(node, ListNode):
            return self._fit_items(node, page, frame)

        if depth >= self._config.max_split_depth:
            exhausted = is_splittable(node, self._config)
            if exhausted:
                logger.debug(f"Split depth {depth} reached for <{node_tag(node)}>")
            return FitResult.unplaced(node, depth_exhausted=exhausted)

        parts = split_node(node, self._config)
        if parts is None:
            return FitResult.unplaced(node)

        if isinstance(node, Text):
            join = _join_text
        else:
            join = node.with_children
        return self._fit_parts(node, parts, join, page, frame, depth)

    def _fit_parts(
        self,
        node: ContentNode,
        parts: Sequence[ContentNode],
        join: Callable[[Sequence[ContentNode]], ContentNode],
        page: PageBuilder,
        frame: Frame,
        depth: int,
    ) -> FitResult:
        placed: List[ContentNode] = []
        for i, part in enumerate(parts):
            def child_frame(fragment: ContentNode, _placed=tuple(placed)) -> ContentNode:
                return frame(join((*_placed, fragment)))

            result = self._fit(part, page, child_frame, depth + 1)
            if result.placed is not None:
                placed.append(result.placed)
            if result.remainder is not None:
                rest = [result.remainder, *parts[i + 1:]]
                if not placed:
                    return FitResult.unplaced(node, result.depth_exhausted)
                return FitResult.partial(join(placed), join(rest), result.depth_exhausted)
        return FitResult.fully(join(placed))

    def _fit_items(self, node: ListNode, page: PageBuilder, frame: Frame) -> FitResult:
        """Lists nested in other content split between items only."""
        placed: List[ContentNode] = []
        for item in node.items:
            if not page.fits(frame(node.with_items([*placed, item]))):
                break
            placed.append(item)
        if not placed:
            return FitResult.unplaced(node)
        if len(placed) == len(node.items):
            return FitResult.fully(node)
        return FitResult.partial(node.with_items(placed), node.with_items(node.items[len(placed):]))


def _join_text(parts: Sequence[ContentNode]) -> Text:
    return Text("".join(part.text_content for part in parts))


def node_tag(node: ContentNode) -> str:
    """Tag used in diagnostics ("#text" for text runs)."""
    if isinstance(node, Text):
        return "#text"
    return node.tag

"""
Module: layout.measure

Purpose:
    Measurement oracle used by the pagination engine: decides whether a
    candidate page's content exceeds the page capacity.

Key Classes:
    - MeasurementOracle: Abstract oracle interface
    - PillowOracle: Oracle laying text out with a Pillow font

Notes:
    The engine never adds sizes itself. Rendering overhead (block spacing,
    wrapping) makes the metric non-additive, so every decision goes
    through the oracle with the whole candidate page.

Dependencies:
    - PIL: Font metrics for text width
    - layout.config: LayoutConfig

Used By:
    - layout.fitting: PageBuilder.fits()
    - layout.list_packer, layout.paginator, loading.loader
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import Dict, List, Sequence

from PIL import ImageFont

from notes_pager.core.models import ContentNode, Element, ListNode, Text

from .config import LayoutConfig

logger = logging.getLogger(__name__)

# Tags laid out as their own vertical block
BLOCK_TAGS = frozenset({
    "p", "div", "section", "article", "blockquote", "pre", "table",
    "h1", "h2", "h3", "h4", "h5", "h6", "li", "hr", "img", "figure",
    "ul", "ol", "dl", "dt", "dd", "details", "summary",
})

# Heading line height relative to body text
HEADING_SCALE = {"h1": 2.0, "h2": 1.6, "h3": 1.3, "h4": 1.15, "h5": 1.0, "h6": 1.0}


class MeasurementOracle(ABC):
    """
    Reports whether a candidate page exceeds capacity.

    Implementations must be deterministic for a fixed candidate and cheap
    enough to be called once per placement attempt.
    """

    @abstractmethod
    def exceeds_capacity(self, nodes: Sequence[ContentNode]) -> bool:
        """
        Check a candidate page.

        Args:
            nodes: The page's ordered top-level content

        Returns:
            True if the content would overflow the page
        """


class PillowOracle(MeasurementOracle):
    """
    Oracle measuring content height with Pillow text metrics.

    Text is word-wrapped at the available width, ``pre`` blocks keep their
    line breaks, leaf elements use their ``height`` attribute (or
    ``leaf_height``), list items are indented, and blocks are separated by
    ``block_spacing``.

    Example:
        >>> oracle = PillowOracle(LayoutConfig())
        >>> oracle.exceeds_capacity([Element("p", children=(Text("Hi"),))])
        False
    """

    def __init__(self, config: LayoutConfig):
        self._config = config
        self._font = _load_font(config.font_size)
        self._line_height = max(1, round(config.font_size * config.line_spacing))
        self._widths: Dict[str, float] = {}

    @property
    def capacity(self) -> float:
        return self._config.capacity

    @property
    def line_height(self) -> int:
        return self._line_height

    def exceeds_capacity(self, nodes: Sequence[ContentNode]) -> bool:
        return self.measure(nodes) > self._config.capacity

    def measure(self, nodes: Sequence[ContentNode]) -> float:
        """Total height of nodes laid out as consecutive blocks."""
        return self._stack(nodes, self._config.available_width)

    # ─────────────────────────────────────────────────────────────────────
    # Layout
    # ─────────────────────────────────────────────────────────────────────

    def _stack(self, nodes: Sequence[ContentNode], width: float) -> float:
        """Height of nodes stacked vertically; inline runs share a block."""
        heights: List[float] = []
        inline_run: List[ContentNode] = []

        def flush() -> None:
            if inline_run:
                text = "".join(node.text_content for node in inline_run)
                if text.strip():
                    heights.append(self._count_lines(text, width) * self._line_height)
                inline_run.clear()

        for node in nodes:
            if _is_block(node):
                flush()
                heights.append(self._block_height(node, width))
            else:
                inline_run.append(node)
        flush()

        if not heights:
            return 0.0
        return sum(heights) + self._config.block_spacing * (len(heights) - 1)

    def _block_height(self, node: ContentNode, width: float) -> float:
        config = self._config
        if isinstance(node, ListNode):
            return self._stack(node.items, max(1.0, width - config.list_indent))
        if isinstance(node, Text):
            return self._count_lines(node.value, width) * self._line_height

        if node.is_leaf:
            return _leaf_height(node, config.leaf_height)
        if node.tag == "pre":
            lines = node.text_content.rstrip("\n").split("\n")
            return len(lines) * self._line_height
        if any(_is_block(child) for child in node.children):
            return self._stack(node.children, width)

        scale = HEADING_SCALE.get(node.tag, 1.0)
        lines = self._count_lines(node.text_content, width / scale)
        return lines * self._line_height * scale

    def _count_lines(self, text: str, width: float) -> int:
        """Greedy word wrap; words wider than a line are broken anywhere."""
        words = text.split()
        if not words:
            return 0
        space = self._width(" ")
        lines = 1
        used = 0.0
        for word in words:
            word_width = self._width(word)
            if word_width > width:
                if used > 0:
                    lines += 1
                extra = math.ceil(word_width / width)
                lines += extra - 1
                used = word_width - (extra - 1) * width
                continue
            needed = word_width if used == 0 else used + space + word_width
            if needed > width:
                lines += 1
                used = word_width
            else:
                used = needed
        return lines

    def _width(self, text: str) -> float:
        width = self._widths.get(text)
        if width is None:
            width = float(self._font.getlength(text))
            self._widths[text] = width
        return width


def _is_block(node: ContentNode) -> bool:
    if isinstance(node, ListNode):
        return True
    return isinstance(node, Element) and node.tag in BLOCK_TAGS


def _leaf_height(node: Element, default: int) -> float:
    """Height attribute of a leaf element, or default if missing or invalid."""
    try:
        height = float(node.attributes.get("height", default))
    except (TypeError, ValueError):
        return float(default)
    if not math.isfinite(height) or height < 0:
        return float(default)
    return height


def _load_font(size: int) -> ImageFont.FreeTypeFont:
    """
    Load a regular text font.

    Falls back to Pillow's default font if no TrueType font is available.
    """
    font_options = [
        "DejaVuSans.ttf",
        "arial.ttf",
        "Arial.ttf",
        "LiberationSans-Regular.ttf",
    ]

    for font_name in font_options:
        try:
            return ImageFont.truetype(font_name, size)
        except (IOError, OSError):
            continue

    logger.warning("Could not load TrueType font, using default")
    return ImageFont.load_default(size=size)

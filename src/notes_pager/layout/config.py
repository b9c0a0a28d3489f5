"""
Module: layout.config

Purpose:
    Configuration for the pagination engine.
    Defines page dimensions, margins, capacity and splitting behavior.

Key Classes:
    - LayoutConfig: Immutable layout configuration

Dependencies:
    - dataclasses (std)

Used By:
    - layout.measure: PillowOracle capacity and font metrics
    - layout.fitting: Depth guard and atomic tags
    - layout.paginator: Document pagination
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet


# Standard A4 page dimensions at 96 DPI
DEFAULT_PAGE_WIDTH_PX = 794
DEFAULT_PAGE_HEIGHT_PX = 1123

# Rendering can exceed the computed extent slightly; keep 5% spare
DEFAULT_SAFETY_RATIO = 0.95

DEFAULT_MAX_SPLIT_DEPTH = 10

DEFAULT_ATOMIC_TAGS = frozenset({"pre", "img", "hr", "svg", "video", "iframe", "table"})


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for page layout (immutable).

    Attributes:
        page_width: Page width in pixels
        page_height: Page height in pixels
        margin_top: Top margin in pixels
        margin_bottom: Bottom margin in pixels
        margin_left: Left margin in pixels
        margin_right: Right margin in pixels
        safety_ratio: Fraction of the available height usable by content
        max_split_depth: Recursion bound for the fitting engine
        split_on_semicolon: Treat ';' as a sentence boundary
        atomic_tags: Element tags that are never split
        font_size: Body font size for the measurement oracle
        line_spacing: Line height as a multiple of the font height
        block_spacing: Vertical gap between blocks in pixels
        list_indent: Horizontal indent of list items in pixels
        leaf_height: Height of leaf elements without a height attribute

    Example:
        >>> config = LayoutConfig(page_height=1000, margin_top=50, margin_bottom=50)
        >>> config.capacity
        855.0
    """

    # Page dimensions
    page_width: int = DEFAULT_PAGE_WIDTH_PX
    page_height: int = DEFAULT_PAGE_HEIGHT_PX

    # Margins
    margin_top: int = 40
    margin_bottom: int = 40
    margin_left: int = 48
    margin_right: int = 48

    # Capacity and splitting
    safety_ratio: float = DEFAULT_SAFETY_RATIO
    max_split_depth: int = DEFAULT_MAX_SPLIT_DEPTH
    split_on_semicolon: bool = False
    atomic_tags: FrozenSet[str] = field(default=DEFAULT_ATOMIC_TAGS)

    # Measurement
    font_size: int = 16
    line_spacing: float = 1.4
    block_spacing: int = 12
    list_indent: int = 24
    leaf_height: int = 120

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if self.available_width <= 0:
            raise ValueError("Margins exceed page width")
        if self.available_height <= 0:
            raise ValueError("Margins exceed page height")
        if not 0 < self.safety_ratio <= 1:
            raise ValueError(f"safety_ratio must be in (0, 1]: {self.safety_ratio}")
        if self.max_split_depth < 1:
            raise ValueError(f"max_split_depth must be at least 1: {self.max_split_depth}")
        if self.font_size <= 0:
            raise ValueError(f"font_size must be positive: {self.font_size}")
        if not isinstance(self.atomic_tags, frozenset):
            object.__setattr__(self, "atomic_tags", frozenset(self.atomic_tags))

    @property
    def available_width(self) -> int:
        """Width available for content (excluding margins)."""
        return self.page_width - self.margin_left - self.margin_right

    @property
    def available_height(self) -> int:
        """Height available for content (excluding margins)."""
        return self.page_height - self.margin_top - self.margin_bottom

    @property
    def capacity(self) -> float:
        """Content extent a page may hold before it counts as overflowing."""
        return self.available_height * self.safety_ratio

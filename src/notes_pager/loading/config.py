"""
Module: loading.config

Purpose:
    Configuration for the source loader.

Key Classes:
    - LoaderConfig: Immutable loader settings

Dependencies:
    - dataclasses (std)

Used By:
    - loading.loader: SourceLoader
"""

from __future__ import annotations

from dataclasses import dataclass

from .sources import DEFAULT_DOCUMENT_PATTERN

# Distance from the end of rendered content that counts as "near the end"
DEFAULT_NEAR_BOTTOM_PX = 300


@dataclass(frozen=True)
class LoaderConfig:
    """
    Configuration for the source loader (immutable).

    Attributes:
        start_index: First document index to fetch
        viewport_height: Height of the visible area in pixels
        near_bottom_threshold: Scroll distance from the end that triggers a load
        document_pattern: Document file name pattern

    Example:
        >>> config = LoaderConfig(viewport_height=800)
        >>> config.start_index
        1
    """

    start_index: int = 1
    viewport_height: int = 900
    near_bottom_threshold: int = DEFAULT_NEAR_BOTTOM_PX
    document_pattern: str = DEFAULT_DOCUMENT_PATTERN

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.start_index < 1:
            raise ValueError(f"start_index must be positive: {self.start_index}")
        if self.viewport_height <= 0:
            raise ValueError(f"viewport_height must be positive: {self.viewport_height}")
        if self.near_bottom_threshold < 0:
            raise ValueError(
                f"near_bottom_threshold must be non-negative: {self.near_bottom_threshold}"
            )
        if "{index}" not in self.document_pattern:
            raise ValueError(f"document_pattern must contain '{{index}}': {self.document_pattern!r}")

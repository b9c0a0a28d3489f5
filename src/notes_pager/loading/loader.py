"""
Module: loading.loader

Purpose:
    Fetch source documents in increasing index order, paginate each one and
    append its pages to the presentation surface, on demand.

Key Functions:
    - open_source(): Build a DocumentSource for a directory or URL

Key Classes:
    - SourceLoader: Single-flight, demand-driven document loader
    - LoaderError: Exception for loader misuse
    - ScrollEvent / PreloadEvent: Demand triggers for SourceLoader.run()

Process (one load):
    1. Take the in-flight guard (a trigger while a fetch is outstanding,
       or after exhaustion, is a no-op)
    2. Fetch document N; "not found" or a failed fetch stops loading for
       the rest of the session
    3. Convert the markup and paginate it after the surface's last page
    4. Append the pages, advance to N+1, release the guard

Dependencies:
    - asyncio (std): One task per fetch
    - layout.paginator: Document Pager
    - loading.sources: DocumentSource
    - output.surface: PageSurface

Used By:
    - Embedding applications (viewer, tests)
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Union

from notes_pager.core.models import ContentNode
from notes_pager.layout import LayoutConfig, LayoutDiagnostics, MeasurementOracle, paginate
from notes_pager.output.surface import PageSurface

from .config import LoaderConfig
from .converter import ConversionError, markdown_to_nodes
from .session import LoaderSession
from .sources import DirectorySource, DocumentSource, HttpSource, SourceError

logger = logging.getLogger(__name__)

Converter = Callable[[str], List[ContentNode]]

_URL_SCHEMES = ("http://", "https://")


class LoaderError(Exception):
    """Error setting up a loader."""
    pass


def open_source(location: Union[str, Path], config: Optional[LoaderConfig] = None) -> DocumentSource:
    """
    Build the document source for a location.

    Args:
        location: Base URL (http:// or https://) or local directory
        config: Loader configuration providing the document pattern

    Returns:
        HttpSource for URLs, DirectorySource otherwise

    Raises:
        LoaderError: If a local directory does not exist
    """
    config = config or LoaderConfig()
    text = str(location)
    if text.startswith(_URL_SCHEMES):
        return HttpSource(text, config.document_pattern)

    root = Path(location)
    if not root.is_dir():
        raise LoaderError(f"Document directory not found: {root}")
    logger.debug(f"Reading documents from {root}")
    return DirectorySource(root, config.document_pattern)


@dataclass(frozen=True)
class ScrollEvent:
    """The viewer scrolled; ``scroll_y`` is the top of the viewport."""
    scroll_y: float


@dataclass(frozen=True)
class PreloadEvent:
    """Fill the viewport with content."""


LoaderEvent = Union[ScrollEvent, PreloadEvent]


class SourceLoader:
    """
    Demand-driven loader for numbered documents.

    At most one fetch is outstanding at any time, documents are paginated
    strictly in index order, and the first missing document ends loading
    for good.

    Example:
        >>> loader = SourceLoader(DirectorySource(Path("notes")), PageStack(1123),
        ...                       PillowOracle(layout_config), layout_config)
        >>> await loader.preload()
        >>> loader.on_scroll(scroll_y=2000)
    """

    def __init__(
        self,
        source: DocumentSource,
        surface: PageSurface,
        oracle: MeasurementOracle,
        layout_config: LayoutConfig,
        loader_config: Optional[LoaderConfig] = None,
        *,
        converter: Converter = markdown_to_nodes,
        session: Optional[LoaderSession] = None,
        diagnostics: Optional[LayoutDiagnostics] = None,
    ):
        self._source = source
        self._surface = surface
        self._oracle = oracle
        self._layout_config = layout_config
        self._config = loader_config or LoaderConfig()
        self._converter = converter
        self._session = session or LoaderSession(next_index=self._config.start_index)
        self.diagnostics = diagnostics if diagnostics is not None else LayoutDiagnostics()
        self._pending: Optional[asyncio.Task] = None

    @property
    def session(self) -> LoaderSession:
        return self._session

    @property
    def has_more(self) -> bool:
        return self._session.has_more

    # ─────────────────────────────────────────────────────────────────────
    # Loading
    # ─────────────────────────────────────────────────────────────────────

    def request_load(self) -> Optional[asyncio.Task]:
        """
        Start loading the next document unless one is in flight.

        Must be called from a running event loop.

        Returns:
            The load task, or None if the request was a no-op
        """
        if not self._session.can_load:
            return None
        index = self._session.begin_fetch()
        self._pending = asyncio.create_task(self._load(index))
        return self._pending

    async def load_next(self) -> bool:
        """
        Load the next document and wait for it.

        Returns:
            True if a document was loaded and its pages appended
        """
        task = self.request_load()
        if task is None:
            return False
        return await task

    async def preload(self) -> int:
        """
        Load documents until the content extends past the viewport or the
        sources run out.

        Returns:
            Number of documents loaded
        """
        loaded = 0
        while self._session.has_more and not self._viewport_filled():
            if self._session.in_flight and self._pending is not None:
                await self._pending
                continue
            if await self.load_next():
                loaded += 1
        logger.info(
            f"Preloaded {loaded} documents ({self._surface.page_count} pages, "
            f"extent {self._surface.content_extent:.0f}px)"
        )
        return loaded

    def is_near_bottom(self, scroll_y: float) -> bool:
        """Check whether the viewport is close to the end of the content."""
        viewport_bottom = scroll_y + self._config.viewport_height
        return viewport_bottom >= self._surface.content_extent - self._config.near_bottom_threshold

    def on_scroll(self, scroll_y: float) -> Optional[asyncio.Task]:
        """Scroll trigger: request a load when near the end of the content."""
        if not self.is_near_bottom(scroll_y):
            return None
        return self.request_load()

    async def run(self, events: asyncio.Queue) -> None:
        """
        Consume demand events until a None sentinel arrives.

        Scroll events only request a load, so events delivered while a fetch
        is outstanding are no-ops rather than queued retries. On shutdown
        the outstanding load, if any, is awaited.
        """
        while True:
            event = await events.get()
            try:
                if event is None:
                    break
                if isinstance(event, ScrollEvent):
                    self.on_scroll(event.scroll_y)
                elif isinstance(event, PreloadEvent):
                    await self.preload()
                else:
                    logger.warning(f"Ignoring unknown loader event: {event!r}")
            finally:
                events.task_done()

        if self._pending is not None and not self._pending.done():
            await self._pending

    # ─────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────

    def _viewport_filled(self) -> bool:
        return self._surface.content_extent > self._config.viewport_height

    async def _load(self, index: int) -> bool:
        try:
            try:
                raw = await self._source.fetch(index)
            except SourceError as e:
                logger.error(f"Fetching document {index} failed, stopping: {e}")
                self._session.exhaust()
                return False
            except Exception:
                logger.exception(f"Unexpected error fetching document {index}, stopping")
                self._session.exhaust()
                return False

            if raw is None:
                logger.info(f"Document {index} not found, no more documents")
                self._session.exhaust()
                return False

            try:
                nodes = self._converter(raw)
            except ConversionError as e:
                logger.error(f"Converting document {index} failed, stopping: {e}")
                self._session.exhaust()
                return False

            result = paginate(
                nodes,
                self._oracle,
                self._layout_config,
                start_index=self._surface.page_count,
                source_index=index,
                diagnostics=self.diagnostics,
            )
            self._surface.append_pages(result.pages)
            self._session.complete()

            logger.info(f"Loaded document {index}: {result.page_count} pages")
            return True
        finally:
            self._session.release()

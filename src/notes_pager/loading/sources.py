"""
Module: loading.sources

Purpose:
    Fetch numbered source documents (1.md, 2.md, ...) asynchronously.
    A missing document is the only "no more sources" signal.

Key Classes:
    - DocumentSource: Abstract source interface
    - DirectorySource: Documents read from a local directory
    - HttpSource: Documents fetched over HTTP
    - SourceError: Transport or decode failure

Dependencies:
    - asyncio (std): Blocking I/O runs in a worker thread
    - requests: HTTP client for HttpSource

Used By:
    - loading.loader: SourceLoader
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_DOCUMENT_PATTERN = "{index}.md"


class SourceError(Exception):
    """Error fetching or decoding a source document."""
    pass


class DocumentSource(ABC):
    """
    Abstract interface for numbered source documents.

    Indices start at 1 and are requested strictly in increasing order.
    """

    @abstractmethod
    async def fetch(self, index: int) -> Optional[str]:
        """
        Fetch document ``index``.

        Args:
            index: Positive document number

        Returns:
            Raw markup text, or None if the document does not exist

        Raises:
            SourceError: If the document exists but cannot be read
        """

    def document_name(self, index: int) -> str:
        """File name of document ``index``."""
        if index < 1:
            raise ValueError(f"Document index must be positive: {index}")
        return self.pattern.format(index=index)

    @property
    def pattern(self) -> str:
        return DEFAULT_DOCUMENT_PATTERN


class DirectorySource(DocumentSource):
    """
    Source reading ``<root>/<pattern>`` files.

    Example:
        >>> source = DirectorySource(Path("notes"))
        >>> text = await source.fetch(1)  # notes/1.md
    """

    def __init__(
        self,
        root: Path,
        pattern: str = DEFAULT_DOCUMENT_PATTERN,
        encoding: str = "utf-8",
    ):
        self.root = Path(root)
        self._pattern = pattern
        self.encoding = encoding

    @property
    def pattern(self) -> str:
        return self._pattern

    async def fetch(self, index: int) -> Optional[str]:
        path = self.root / self.document_name(index)
        return await asyncio.to_thread(self._read, path)

    def _read(self, path: Path) -> Optional[str]:
        try:
            if not path.is_file():
                logger.debug(f"No document at {path}")
                return None
            return path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise SourceError(f"Could not read {path}: {e}") from e


class HttpSource(DocumentSource):
    """
    Source fetching ``<base_url>/<pattern>`` over HTTP.

    Any non-OK response counts as "not found". Requests are issued without
    a timeout: a fetch runs until it completes or fails.
    """

    def __init__(
        self,
        base_url: str,
        pattern: str = DEFAULT_DOCUMENT_PATTERN,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._pattern = pattern
        self._session = session or requests.Session()

    @property
    def pattern(self) -> str:
        return self._pattern

    def url_for(self, index: int) -> str:
        return f"{self.base_url}/{self.document_name(index)}"

    async def fetch(self, index: int) -> Optional[str]:
        return await asyncio.to_thread(self._get, self.url_for(index))

    def _get(self, url: str) -> Optional[str]:
        try:
            response = self._session.get(url)
        except requests.RequestException as e:
            raise SourceError(f"Request for {url} failed: {e}") from e

        if not response.ok:
            logger.debug(f"GET {url} returned {response.status_code}")
            return None
        try:
            return response.text
        except (UnicodeDecodeError, LookupError) as e:
            raise SourceError(f"Could not decode {url}: {e}") from e

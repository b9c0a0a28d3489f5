"""
Module: loading.session

Purpose:
    Session state of the source loader: the next document index, whether
    more documents exist, and the single in-flight guard.

Key Classes:
    - LoaderSession: Mutable session state owned by one SourceLoader

Used By:
    - loading.loader: SourceLoader
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class LoaderSession:
    """
    Loader session state.

    Created at session start and mutated only by the loader. ``has_more``
    never turns back on once cleared.

    Attributes:
        next_index: Next document to fetch
        has_more: False after the first missing document or failed fetch
        in_flight: True while a fetch is outstanding
        loaded: Number of documents loaded so far
    """

    next_index: int = 1
    has_more: bool = True
    in_flight: bool = False
    loaded: int = 0

    @property
    def can_load(self) -> bool:
        return self.has_more and not self.in_flight

    def begin_fetch(self) -> int:
        """Take the guard and return the index to fetch."""
        if not self.can_load:
            raise RuntimeError("Cannot start a fetch: loader is busy or exhausted")
        self.in_flight = True
        return self.next_index

    def complete(self) -> None:
        """Record a loaded document and move to the next index."""
        self.next_index += 1
        self.loaded += 1

    def exhaust(self) -> None:
        """Stop loading for the rest of the session."""
        self.has_more = False

    def release(self) -> None:
        """Drop the in-flight guard."""
        self.in_flight = False

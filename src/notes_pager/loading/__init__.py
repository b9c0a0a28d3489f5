"""
Module: loading

Purpose:
    Fetch numbered source documents, convert them to content trees and
    drive their pagination on demand.

Key Functions:
    - markdown_to_nodes(): Markdown -> content tree
    - html_to_nodes(): HTML -> content tree
    - open_source(): Directory or URL -> DocumentSource

Key Classes:
    - SourceLoader: Single-flight demand-driven loader
    - LoaderSession: Session state (next index, more sources, in-flight)
    - LoaderConfig: Loader settings
    - DocumentSource / DirectorySource / HttpSource: Document access
    - SourceError / ConversionError / LoaderError: Loading failures

Dependencies:
    - markdown, bs4: Markup conversion
    - requests: HTTP documents
    - notes_pager.layout: Pagination
"""

from .config import LoaderConfig
from .converter import ConversionError, html_to_nodes, markdown_to_nodes
from .loader import LoaderError, PreloadEvent, ScrollEvent, SourceLoader, open_source
from .session import LoaderSession
from .sources import DirectorySource, DocumentSource, HttpSource, SourceError

__all__ = [
    # Config
    "LoaderConfig",
    # Conversion
    "markdown_to_nodes",
    "html_to_nodes",
    "ConversionError",
    # Sources
    "DocumentSource",
    "DirectorySource",
    "HttpSource",
    "SourceError",
    "open_source",
    # Loader
    "LoaderSession",
    "SourceLoader",
    "ScrollEvent",
    "PreloadEvent",
    "LoaderError",
]

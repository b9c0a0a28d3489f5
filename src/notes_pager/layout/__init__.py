"""
Module: layout

Purpose:
    Pagination engine. Partitions a document's content tree across an
    open-ended sequence of fixed-capacity pages.

Key Functions:
    - paginate(): Document Pager entry point
    - split_text(): Sentence -> word -> character fallback ladder

Key Classes:
    - LayoutConfig: Page geometry, capacity and splitting settings
    - MeasurementOracle / PillowOracle: Overflow predicate
    - FittingEngine / PageBuilder / FitResult: Place-or-split engine
    - ListPacker: Item-level packing of lists
    - Page / LayoutResult: Output models
    - LayoutDiagnostics: Soft failure collector

Dependencies:
    - PIL: Text metrics for PillowOracle
    - notes_pager.core.models: Content tree

Used By:
    - notes_pager.loading.loader: Source Loader
"""

from .config import LayoutConfig
from .diagnostics import IssueType, LayoutDiagnostics, LayoutIssue
from .fitting import FitResult, FitStatus, FittingEngine, PageBuilder
from .list_packer import ListPacker
from .measure import MeasurementOracle, PillowOracle
from .models import LayoutResult, Page
from .paginator import paginate
from .splitter import split_chars, split_node, split_sentences, split_text, split_words

__all__ = [
    # Config
    "LayoutConfig",
    # Oracle
    "MeasurementOracle",
    "PillowOracle",
    # Models
    "Page",
    "LayoutResult",
    # Diagnostics
    "IssueType",
    "LayoutIssue",
    "LayoutDiagnostics",
    # Engine
    "PageBuilder",
    "FitResult",
    "FitStatus",
    "FittingEngine",
    "ListPacker",
    # Functions
    "paginate",
    "split_text",
    "split_sentences",
    "split_words",
    "split_chars",
    "split_node",
]

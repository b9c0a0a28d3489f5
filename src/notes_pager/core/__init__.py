"""
notes_pager core package.

Shared data models used by every stage of the pipeline:
Source Loader -> content tree -> Document Pager -> pages -> surface.
"""

from .models import ContentNode, Element, ListKind, ListNode, Text

__all__ = [
    "ContentNode",
    "Element",
    "ListKind",
    "ListNode",
    "Text",
]

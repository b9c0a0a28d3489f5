"""
Core Models Package

Immutable content tree shared by the layout engine and the loaders.

All nodes are frozen dataclasses: splitting never mutates a node, it builds
new shells holding disjoint runs of the original children.
"""

from .content import (
    ContentNode,
    Element,
    ListKind,
    ListNode,
    Text,
    content_node_from_dict,
    text_of,
)

__all__ = [
    "ContentNode",
    "Element",
    "ListKind",
    "ListNode",
    "Text",
    "content_node_from_dict",
    "text_of",
]

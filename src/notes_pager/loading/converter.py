"""
Module: loading.converter

Purpose:
    Convert raw Markdown (or HTML) into the content tree consumed by the
    pagination engine.

Key Functions:
    - markdown_to_nodes(): Markdown -> top-level content nodes
    - html_to_nodes(): HTML -> top-level content nodes

Key Classes:
    - ConversionError: Exception for conversion failures

Rules:
    - ul/ol become ListNodes; their li children become the items
    - Other tags become Elements with attributes kept as strings
    - Strings become Text; comments and doctype declarations are dropped
    - Whitespace-only strings between top-level blocks are dropped

Dependencies:
    - markdown: Markdown -> HTML
    - bs4: HTML parsing

Used By:
    - loading.loader: SourceLoader (default converter)
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import markdown
from bs4 import BeautifulSoup, Comment, Doctype, NavigableString, Tag

from notes_pager.core.models import ContentNode, Element, ListKind, ListNode, Text

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]

_LIST_TAGS = {"ul", "ol"}


class ConversionError(Exception):
    """Error converting markup to a content tree."""
    pass


def markdown_to_nodes(text: str) -> List[ContentNode]:
    """
    Convert Markdown text to top-level content nodes.

    Args:
        text: Raw Markdown

    Returns:
        Top-level nodes in document order

    Raises:
        ConversionError: If the markup cannot be converted

    Example:
        >>> nodes = markdown_to_nodes("# Title\\n\\n- a\\n- b")
        >>> [type(n).__name__ for n in nodes]
        ['Element', 'ListNode']
    """
    try:
        rendered = markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)
    except Exception as e:
        raise ConversionError(f"Markdown conversion failed: {e}") from e
    return html_to_nodes(rendered)


def html_to_nodes(html: str) -> List[ContentNode]:
    """
    Convert an HTML fragment to top-level content nodes.

    Raises:
        ConversionError: If the HTML cannot be parsed
    """
    try:
        soup = BeautifulSoup(html, "html.parser")
    except Exception as e:
        raise ConversionError(f"HTML parsing failed: {e}") from e

    nodes: List[ContentNode] = []
    for child in soup.children:
        if isinstance(child, NavigableString) and not _is_markup_text(child):
            continue
        if isinstance(child, NavigableString) and not str(child).strip():
            continue
        node = _convert(child)
        if node is not None:
            nodes.append(node)

    logger.debug(f"Converted markup into {len(nodes)} top-level nodes")
    return nodes


def _convert(item) -> Optional[ContentNode]:
    if isinstance(item, NavigableString):
        if not _is_markup_text(item):
            return None
        return Text(str(item))
    if not isinstance(item, Tag):
        return None

    tag = item.name.lower()
    attributes = _attributes(item)

    if tag in _LIST_TAGS:
        items = []
        for child in item.children:
            if isinstance(child, NavigableString) and not str(child).strip():
                continue
            node = _convert(child)
            if node is not None:
                items.append(node)
        return ListNode(ListKind.from_tag(tag), tuple(items), attributes)

    children = []
    for child in item.children:
        node = _convert(child)
        if node is not None:
            children.append(node)
    return Element(tag, attributes, tuple(children))


def _is_markup_text(item: NavigableString) -> bool:
    """Plain strings count as text; comments, doctypes and the like do not."""
    return not isinstance(item, (Comment, Doctype)) and type(item) is NavigableString


def _attributes(tag: Tag) -> Dict[str, str]:
    attributes: Dict[str, str] = {}
    for name, value in tag.attrs.items():
        # Multi-valued attributes such as class come back as lists
        attributes[name] = " ".join(value) if isinstance(value, list) else str(value)
    return attributes

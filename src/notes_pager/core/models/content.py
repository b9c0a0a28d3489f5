"""
Module: core.models.content

Purpose:
    Provides the content tree: an immutable, tagged union of nodes produced
    from one source document and consumed by the pagination engine.

Key Classes:
    - Text: Atomic run of characters
    - Element: Structural node with ordered children
    - ListNode: Ordered/unordered list whose items are whole subtrees
    - ListKind: ORDERED or UNORDERED

Key Functions:
    - content_node_from_dict(): Deserialize any node variant
    - text_of(): Concatenated text of a node sequence

Dependencies:
    - dataclasses (std)
    - html (std): Escaping for to_html()

Used By:
    - layout.splitter, layout.fitting, layout.list_packer, layout.paginator
    - loading.converter: Builds trees from markup

Splitting Invariants:
    - Text splits into Text only
    - Element splits by distributing contiguous child runs over shells
      (same tag and attributes); concatenating the shells' children in
      order reconstructs the original children
    - ListNode splits only at item boundaries; items are never split
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Tuple, Union

# Elements rendered without a closing tag
VOID_TAGS = frozenset({"img", "hr", "br", "input", "source", "wbr"})


class ListKind(str, Enum):
    """Kind of list container."""
    ORDERED = "ordered"
    UNORDERED = "unordered"

    def __str__(self) -> str:
        return self.value

    @property
    def tag(self) -> str:
        """HTML tag for this list kind."""
        return "ol" if self is ListKind.ORDERED else "ul"

    @classmethod
    def from_tag(cls, tag: str) -> ListKind:
        """Map an HTML list tag (ol/ul) to its kind."""
        if tag.lower() == "ol":
            return cls.ORDERED
        if tag.lower() == "ul":
            return cls.UNORDERED
        raise ValueError(f"Not a list tag: {tag!r}")


@dataclass(frozen=True, slots=True)
class Text:
    """
    Atomic run of characters.

    Example:
        >>> Text("Hello. World.").text_content
        'Hello. World.'
    """

    value: str

    @property
    def text_content(self) -> str:
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "text", "value": self.value}

    def to_html(self) -> str:
        return html.escape(self.value, quote=False)


@dataclass(frozen=True, slots=True)
class Element:
    """
    Structural node (immutable).

    An element with no children is a leaf (e.g. an image placeholder) and
    is never split.

    Attributes:
        tag: Lower-case tag name like "p", "h2", "pre"
        attributes: Tag attributes (copied verbatim onto shells)
        children: Ordered child nodes
    """

    tag: str
    attributes: Mapping[str, str] = field(default_factory=dict)
    children: Tuple[ContentNode, ...] = ()

    def __post_init__(self) -> None:
        if not self.tag:
            raise ValueError("Element tag must be non-empty")
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    @property
    def is_leaf(self) -> bool:
        """Check if this element has no children."""
        return len(self.children) == 0

    @property
    def text_content(self) -> str:
        return text_of(self.children)

    def shell(self) -> Element:
        """Clone of this element without children."""
        return Element(self.tag, dict(self.attributes), ())

    def with_children(self, children: Iterable[ContentNode]) -> Element:
        """Clone of this element holding the given children."""
        return Element(self.tag, dict(self.attributes), tuple(children))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "element",
            "tag": self.tag,
            "attributes": dict(self.attributes),
            "children": [child.to_dict() for child in self.children],
        }

    def to_html(self) -> str:
        attrs = _format_attributes(self.attributes)
        if self.tag in VOID_TAGS and self.is_leaf:
            return f"<{self.tag}{attrs}>"
        inner = "".join(child.to_html() for child in self.children)
        return f"<{self.tag}{attrs}>{inner}</{self.tag}>"


@dataclass(frozen=True, slots=True)
class ListNode:
    """
    List container (immutable).

    Each item is a whole subtree (normally an ``li`` Element). Lists are
    split only between items.

    Attributes:
        kind: ORDERED or UNORDERED
        items: Ordered item subtrees
        attributes: Attributes of the list tag (e.g. ``start``)
    """

    kind: ListKind
    items: Tuple[ContentNode, ...] = ()
    attributes: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.kind, ListKind):
            object.__setattr__(self, "kind", ListKind(self.kind))
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    @property
    def tag(self) -> str:
        return self.kind.tag

    @property
    def text_content(self) -> str:
        return text_of(self.items)

    def shell(self) -> ListNode:
        """Empty container of the same kind and attributes."""
        return ListNode(self.kind, (), dict(self.attributes))

    def with_items(self, items: Iterable[ContentNode]) -> ListNode:
        """Container of the same kind holding the given items."""
        return ListNode(self.kind, tuple(items), dict(self.attributes))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "list",
            "kind": self.kind.value,
            "attributes": dict(self.attributes),
            "items": [item.to_dict() for item in self.items],
        }

    def to_html(self) -> str:
        attrs = _format_attributes(self.attributes)
        inner = "".join(item.to_html() for item in self.items)
        return f"<{self.tag}{attrs}>{inner}</{self.tag}>"


ContentNode = Union[Text, Element, ListNode]


def text_of(nodes: Iterable[ContentNode]) -> str:
    """Concatenate the text content of nodes in order."""
    return "".join(node.text_content for node in nodes)


def content_node_from_dict(data: Mapping[str, Any]) -> ContentNode:
    """
    Deserialize a node produced by ``to_dict()``.

    Raises:
        ValueError: If the node type is unknown
    """
    node_type = data.get("type")
    if node_type == "text":
        return Text(data["value"])
    if node_type == "element":
        return Element(
            tag=data["tag"],
            attributes=dict(data.get("attributes", {})),
            children=tuple(content_node_from_dict(c) for c in data.get("children", [])),
        )
    if node_type == "list":
        return ListNode(
            kind=ListKind(data["kind"]),
            items=tuple(content_node_from_dict(i) for i in data.get("items", [])),
            attributes=dict(data.get("attributes", {})),
        )
    raise ValueError(f"Unknown content node type: {node_type!r}")


def _format_attributes(attributes: Mapping[str, str]) -> str:
    return "".join(
        f' {name}="{html.escape(str(value), quote=True)}"'
        for name, value in attributes.items()
    )

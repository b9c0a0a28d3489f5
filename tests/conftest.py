import sys
from pathlib import Path
from typing import List, Sequence

import pytest

# Add src to sys.path so we can import notes_pager
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from notes_pager.core.models import ContentNode, Element, ListNode, Text  # noqa: E402
from notes_pager.layout import LayoutConfig, LayoutDiagnostics, MeasurementOracle  # noqa: E402


def node_size(node: ContentNode) -> int:
    """Characters of text; leaf elements count their ``size`` attribute."""
    if isinstance(node, Text):
        return len(node.value)
    if isinstance(node, ListNode):
        return sum(node_size(item) for item in node.items)
    if node.is_leaf:
        return int(node.attributes.get("size", 0))
    return sum(node_size(child) for child in node.children)


class BudgetOracle(MeasurementOracle):
    """
    Deterministic oracle: a page overflows when its content has more than
    ``capacity`` characters. Records every candidate it is asked about.
    """

    def __init__(self, capacity: int):
        self.capacity = capacity
        self.calls: List[tuple] = []

    def size(self, nodes: Sequence[ContentNode]) -> int:
        return sum(node_size(node) for node in nodes)

    def exceeds_capacity(self, nodes: Sequence[ContentNode]) -> bool:
        self.calls.append(tuple(nodes))
        return self.size(nodes) > self.capacity


# Common test fixtures
@pytest.fixture
def budget_oracle():
    """Factory for character-budget oracles."""
    def _create(capacity: int) -> BudgetOracle:
        return BudgetOracle(capacity)
    return _create


@pytest.fixture
def layout_config():
    """Default layout configuration."""
    return LayoutConfig()


@pytest.fixture
def diagnostics():
    """Fresh diagnostics collector."""
    return LayoutDiagnostics()


@pytest.fixture
def paragraph():
    """Factory for <p> elements holding one text run."""
    def _create(text: str, tag: str = "p") -> Element:
        return Element(tag, {}, (Text(text),))
    return _create


@pytest.fixture
def list_factory():
    """Factory for lists of <li> items holding one text run each."""
    def _create(*texts: str, ordered: bool = False) -> ListNode:
        from notes_pager.core.models import ListKind
        kind = ListKind.ORDERED if ordered else ListKind.UNORDERED
        return ListNode(kind, tuple(Element("li", {}, (Text(t),)) for t in texts))
    return _create

"""
Unit tests for the list packer.
"""

from notes_pager.core.models import Element, ListKind, ListNode, Text
from notes_pager.layout import IssueType, ListPacker


def _item_texts(page):
    (container,) = page.nodes
    return [item.text_content for item in container.items]


class TestListPacker:

    def test_pack_when_all_items_fit_then_single_page(self, budget_oracle, list_factory):
        oracle = budget_oracle(100)
        node = list_factory("one", "two", "three")

        pages = ListPacker(oracle).pack(node)

        assert len(pages) == 1
        assert _item_texts(pages[0]) == ["one", "two", "three"]

    def test_pack_when_fourth_item_overflows_then_new_container_on_next_page(self, budget_oracle, list_factory):
        oracle = budget_oracle(12)
        node = list_factory("aaaa", "bbbb", "cccc", "dddd", "eeee")

        pages = ListPacker(oracle).pack(node, start_index=4)

        assert [p.index for p in pages] == [4, 5]
        assert _item_texts(pages[0]) == ["aaaa", "bbbb", "cccc"]
        assert _item_texts(pages[1]) == ["dddd", "eeee"]
        assert all(isinstance(p.nodes[0], ListNode) for p in pages)

    def test_pack_when_ordered_then_containers_keep_kind_and_attributes(self, budget_oracle):
        oracle = budget_oracle(4)
        items = tuple(Element("li", {}, (Text(t),)) for t in ("aaa", "bbb"))
        node = ListNode(ListKind.ORDERED, items, {"start": "5"})

        pages = ListPacker(oracle).pack(node)

        assert len(pages) == 2
        for page in pages:
            assert page.nodes[0].kind is ListKind.ORDERED
            assert page.nodes[0].attributes == {"start": "5"}

    def test_pack_when_item_alone_overflows_then_forced_on_own_page(
        self, budget_oracle, list_factory, diagnostics
    ):
        oracle = budget_oracle(10)
        node = list_factory("short", "x" * 40, "tail")

        pages = ListPacker(oracle, diagnostics).pack(node)

        assert [_item_texts(p) for p in pages] == [["short"], ["x" * 40], ["tail"]]
        assert [p.forced for p in pages] == [False, True, False]
        assert diagnostics.count(IssueType.OVERSIZED_LIST_ITEM) == 1
        assert diagnostics.issues[0].page_index == 1

    def test_pack_when_first_item_oversized_then_no_empty_page_before_it(
        self, budget_oracle, list_factory
    ):
        oracle = budget_oracle(10)
        node = list_factory("y" * 30, "ok")

        pages = ListPacker(oracle).pack(node)

        assert [_item_texts(p) for p in pages] == [["y" * 30], ["ok"]]
        assert all(not p.is_empty for p in pages)

    def test_pack_when_many_items_then_each_item_exactly_once_in_order(self, budget_oracle, list_factory):
        oracle = budget_oracle(17)
        texts = [f"item-{n:02d}" for n in range(25)]
        node = list_factory(*texts)

        pages = ListPacker(oracle).pack(node)

        packed = [text for page in pages for text in _item_texts(page)]
        assert packed == texts
        for page in pages:
            assert oracle.exceeds_capacity(page.nodes) is False

    def test_pack_when_empty_list_then_no_pages(self, budget_oracle, list_factory):
        assert ListPacker(budget_oracle(10)).pack(list_factory()) == []

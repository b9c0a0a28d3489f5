"""
Unit tests for the splitter fallback ladder.
"""

import pytest

from notes_pager.core.models import Element, ListKind, ListNode, Text
from notes_pager.layout import LayoutConfig
from notes_pager.layout.splitter import (
    is_splittable,
    split_chars,
    split_node,
    split_sentences,
    split_text,
    split_words,
)


class TestSplitSentences:

    def test_split_when_several_sentences_then_punctuation_stays_attached(self):
        assert split_sentences("One. Two! Three? Four") == ["One. ", "Two! ", "Three? ", "Four"]

    def test_split_when_repeated_punctuation_then_kept_together(self):
        assert split_sentences("Wait... what?!") == ["Wait... ", "what?!"]

    def test_split_when_leading_punctuation_then_nothing_dropped(self):
        text = "...and then. More"
        assert "".join(split_sentences(text)) == text

    def test_split_when_semicolon_enabled_then_breaks_on_semicolon(self):
        assert split_sentences("a; b. c", include_semicolon=True) == ["a; ", "b. ", "c"]
        assert split_sentences("a; b. c") == ["a; b. ", "c"]

    def test_split_when_no_boundary_then_single_segment(self):
        assert split_sentences("no boundary here") == ["no boundary here"]


class TestSplitWords:

    def test_split_when_words_then_trailing_whitespace_attached(self):
        assert split_words("alpha beta  gamma") == ["alpha ", "beta  ", "gamma"]

    def test_split_when_leading_whitespace_then_attached_to_first_word(self):
        assert split_words("  lead word") == ["  lead ", "word"]

    def test_split_when_only_whitespace_then_single_segment(self):
        assert split_words("   ") == ["   "]


class TestSplitText:

    def test_ladder_when_sentences_present_then_uses_sentences(self):
        assert split_text("First one. Second one.") == ["First one. ", "Second one."]

    def test_ladder_when_no_sentence_boundary_then_uses_words(self):
        assert split_text("just some words") == ["just ", "some ", "words"]

    def test_ladder_when_single_token_then_uses_characters(self):
        assert split_text("abc") == ["a", "b", "c"]

    def test_ladder_when_single_character_then_cannot_split(self):
        assert split_text("x") == ["x"]

    @pytest.mark.parametrize("text", [
        "Plain sentence. Another one! And a question? Trailing",
        "  spaced   out\twords\n",
        "supercalifragilistic",
        "",
        "ends with dot.",
    ])
    def test_round_trip_when_joined_then_reproduces_text(self, text):
        for splitter in (split_sentences, split_words, split_chars, split_text):
            assert "".join(splitter(text)) == text


class TestSplitNode:

    def test_text_when_splittable_then_returns_text_fragments(self):
        config = LayoutConfig()

        fragments = split_node(Text("A. B."), config)

        assert fragments == [Text("A. "), Text("B.")]

    def test_element_when_children_then_returns_children(self):
        children = (Text("a"), Element("em", {}, (Text("b"),)))
        assert split_node(Element("p", {}, children), LayoutConfig()) == list(children)

    def test_element_when_leaf_then_cannot_split(self):
        assert split_node(Element("img", {"src": "a.png"}), LayoutConfig()) is None

    def test_element_when_atomic_tag_then_cannot_split(self):
        pre = Element("pre", {}, (Text("code\nmore code"),))
        assert split_node(pre, LayoutConfig()) is None
        assert is_splittable(pre, LayoutConfig()) is False

    def test_element_when_atomic_tags_overridden_then_splits(self):
        pre = Element("pre", {}, (Text("code"),))
        config = LayoutConfig(atomic_tags=frozenset())
        assert split_node(pre, config) == [Text("code")]

    def test_list_when_given_then_not_handled_by_generic_splitter(self):
        node = ListNode(ListKind.UNORDERED, (Element("li", {}, (Text("a"),)),))
        assert split_node(node, LayoutConfig()) is None

    def test_text_when_single_character_then_cannot_split(self):
        assert split_node(Text("x"), LayoutConfig()) is None

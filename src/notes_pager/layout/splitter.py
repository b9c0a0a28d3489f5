"""
Module: layout.splitter

Purpose:
    Decompose an oversized node into smaller ordered fragments whose
    concatenation reconstructs the original.

Key Functions:
    - split_text(): Fallback ladder sentences -> words -> characters
    - split_node(): Fragments of a Text or Element, or None if unsplittable

Algorithm:
    Text is tried at the coarsest granularity first: sentences give the most
    natural breaks, words are next, and characters guarantee that arbitrarily
    long unbroken text still paginates. A level is used only if it yields
    more than one fragment.

Dependencies:
    - re (std)
    - core.models: Text, Element, ListNode

Used By:
    - layout.fitting: FittingEngine
"""

from __future__ import annotations

import re
from typing import List, Optional, Pattern, Sequence

from notes_pager.core.models import ContentNode, Element, ListNode, Text

from .config import LayoutConfig

_SENTENCE_RE = re.compile(r"[^.!?]*[.!?]+\s*")
_SENTENCE_SEMICOLON_RE = re.compile(r"[^.!?;]*[.!?;]+\s*")
_WORD_RE = re.compile(r"\s*\S+\s*")


def _segment(pattern: Pattern[str], text: str) -> List[str]:
    """
    Cut text into contiguous matches of pattern.

    Anything after the last match becomes the final segment, so nothing is
    ever dropped.
    """
    segments: List[str] = []
    pos = 0
    for match in pattern.finditer(text):
        if match.start() != pos:
            # Gap before a match: keep it attached to the next segment
            segments.append(text[pos:match.end()])
        else:
            segments.append(match.group())
        pos = match.end()
    if pos < len(text):
        segments.append(text[pos:])
    return segments or [text]


def split_sentences(text: str, include_semicolon: bool = False) -> List[str]:
    """
    Split text after '.', '!' or '?' (and ';' if requested).

    Trailing punctuation and whitespace stay with the preceding sentence.

    Example:
        >>> split_sentences("One. Two! Three")
        ['One. ', 'Two! ', 'Three']
    """
    pattern = _SENTENCE_SEMICOLON_RE if include_semicolon else _SENTENCE_RE
    return _segment(pattern, text)


def split_words(text: str) -> List[str]:
    """
    Split text into whitespace-delimited words.

    Trailing whitespace stays with the preceding word; leading whitespace
    belongs to the first word.

    Example:
        >>> split_words("alpha beta  gamma")
        ['alpha ', 'beta  ', 'gamma']
    """
    return _segment(_WORD_RE, text)


def split_chars(text: str) -> List[str]:
    """Split text into single characters (whitespace included)."""
    return list(text) or [text]


def split_text(text: str, include_semicolon: bool = False) -> List[str]:
    """
    Split text at the coarsest granularity that yields several fragments.

    Returns a single fragment when the text is one character (or empty).
    """
    for splitter in (
        lambda t: split_sentences(t, include_semicolon),
        split_words,
        split_chars,
    ):
        fragments = splitter(text)
        if len(fragments) > 1:
            return fragments
    return [text]


def is_splittable(node: ContentNode, config: LayoutConfig) -> bool:
    """Check whether the generic splitter can decompose node."""
    if isinstance(node, Text):
        return len(node.value) > 1
    if isinstance(node, Element):
        return not node.is_leaf and node.tag not in config.atomic_tags
    return False


def split_node(node: ContentNode, config: LayoutConfig) -> Optional[Sequence[ContentNode]]:
    """
    Decompose node into ordered fragments.

    - Text: Text fragments from the fallback ladder
    - Element: its children, to be distributed over shells of the element
    - ListNode, leaf or atomic Element: None (cannot split)

    Args:
        node: Oversized node
        config: Layout configuration (semicolon rule, atomic tags)

    Returns:
        Fragments, or None if node cannot be split
    """
    if isinstance(node, ListNode) or not is_splittable(node, config):
        return None
    if isinstance(node, Text):
        fragments = split_text(node.value, config.split_on_semicolon)
        if len(fragments) < 2:
            return None
        return [Text(fragment) for fragment in fragments]
    return list(node.children)

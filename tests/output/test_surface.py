"""
Unit tests for the page stack surface.
"""

import pytest

from notes_pager.core.models import Element, Text
from notes_pager.layout import Page
from notes_pager.output import PageStack


def _page(index, text="x"):
    return Page(index=index, nodes=(Element("p", {}, (Text(text),)),))


class TestPageStack:

    def test_append_when_contiguous_then_pages_kept_in_order(self):
        stack = PageStack(page_height=100)

        stack.append_pages([_page(0, "a"), _page(1, "b")])
        stack.append_pages([_page(2, "c")])

        assert stack.page_count == 3
        assert stack.text_content == "abc"

    def test_append_when_index_gap_then_raises_error(self):
        stack = PageStack(page_height=100)
        stack.append_pages([_page(0)])

        with pytest.raises(ValueError, match="does not continue"):
            stack.append_pages([_page(2)])

        assert stack.page_count == 1

    def test_append_when_batch_not_contiguous_then_nothing_appended(self):
        stack = PageStack(page_height=100)

        with pytest.raises(ValueError):
            stack.append_pages([_page(0), _page(0)])

        assert stack.page_count == 0

    def test_content_extent_when_gap_then_included_per_page(self):
        stack = PageStack(page_height=1123, page_gap=16)

        stack.append_pages([_page(0), _page(1)])

        assert stack.content_extent == 2278

    def test_init_when_height_not_positive_then_raises_error(self):
        with pytest.raises(ValueError, match="page_height"):
            PageStack(page_height=0)

    def test_to_html_when_pages_then_one_div_per_page(self):
        stack = PageStack(page_height=100)
        stack.append_pages([_page(0, "a"), _page(1, "b")])

        html = stack.to_html()

        assert html.count('<div class="page"') == 2
        assert '<div class="page" data-index="1"><p>b</p></div>' in html

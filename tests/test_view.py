"""Tests for view module (frame rendering)."""

import re

from tfs.categories import BACKGROUNDS, Category
from tfs.navigation import DETAIL, DOWN, OPEN, NavState, handle_event
from tfs.plan_reader import ResourceChange
from tfs.planner import classify
from tfs.view import DETAIL_HELP, EMPTY_MESSAGE, LIST_HELP, render_tabs, render_view

ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


def _plain(text):
    return ANSI_ESCAPE.sub("", text)


def _rc(address, *actions, **maps):
    type_, name = address.split(".", 1)
    return ResourceChange(address, type_, name, tuple(actions), **maps)


def _buckets():
    return classify([
        _rc("t.a", "create", after={"x": "1"}),
        _rc("t.b", "create"),
        _rc("t.c", "delete", "create"),
        _rc("t.d", "read"),
    ])


class TestTabs:
    # Tests that each tab shows label, symbol and count.
    def test_tab_titles(self):
        text = _plain(render_tabs(NavState(), _buckets()))
        assert text == " CREATE (+ 2)  DESTROY (- 0)  REPLACE (-/+ 1)  UPDATE (~ 0)  IMPORT (1) "

    # Tests that the active tab uses its background color.
    def test_active_tab_highlighted(self):
        state = NavState(category=Category.REPLACE)
        text = render_tabs(state, _buckets())
        assert f"{BACKGROUNDS[Category.REPLACE]} REPLACE (-/+ 1) " in text
        assert BACKGROUNDS[Category.CREATE] not in text


class TestListView:
    # Tests that the frame fills exactly the terminal height.
    def test_frame_height(self):
        frame = render_view(NavState(width=50, height=12), _buckets())
        assert len(frame.split("\n")) == 12

    # Tests that the separator matches the terminal width.
    def test_separator_width(self):
        lines = _plain(render_view(NavState(width=50), _buckets())).split("\n")
        assert lines[1] == "─" * 50

    # Tests that the cursor row is marked.
    def test_cursor_marked(self):
        buckets = _buckets()
        state = handle_event(NavState(), buckets, DOWN)
        lines = _plain(render_view(state, buckets)).split("\n")
        assert lines[3] == "  t.a"
        assert lines[4] == "> t.b"
        assert lines[-1] == LIST_HELP

    # Tests the empty-category message.
    def test_empty_category(self):
        state = NavState(category=Category.DESTROY)
        lines = _plain(render_view(state, _buckets())).split("\n")
        assert lines[3] == EMPTY_MESSAGE

    # Tests that a long list scrolls to keep the cursor visible.
    def test_long_list_follows_cursor(self):
        buckets = classify([_rc(f"t.r{i:02d}", "create") for i in range(30)])
        state = NavState(height=10, cursor=20)
        lines = _plain(render_view(state, buckets)).split("\n")
        rows = lines[3:8]
        assert rows[-1] == "> t.r20"
        assert rows[0] == "  t.r16"


class TestDetailView:
    # Tests that detail mode shows the rendered block and a position footer.
    def test_detail_content(self):
        buckets = _buckets()
        state = handle_event(NavState(), buckets, OPEN)
        lines = _plain(render_view(state, buckets)).split("\n")
        assert lines[3] == "# t.a will be created"
        assert lines[4] == '  + resource "t" "a" {'
        assert lines[5] == '      + x = "1"'
        assert lines[6] == "  }"
        assert lines[-1].endswith("(1-4 of 4)")

    # Tests that the scroll offset selects the visible slice.
    def test_detail_scrolled(self):
        buckets = _buckets()
        state = handle_event(NavState(height=7), buckets, OPEN)
        state = handle_event(state, buckets, DOWN)
        lines = _plain(render_view(state, buckets)).split("\n")
        assert lines[3:5] == ['  + resource "t" "a" {', '      + x = "1"']
        assert lines[-1].endswith("(2-3 of 4)")

    # Tests that an empty detail block shows the help line without a range.
    def test_empty_detail_footer(self):
        state = NavState(mode=DETAIL)
        lines = _plain(render_view(state, _buckets())).split("\n")
        assert lines[-1] == DETAIL_HELP
        assert len(lines) == state.height

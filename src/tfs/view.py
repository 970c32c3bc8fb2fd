"""Render a navigation state as one terminal frame of ANSI text."""

from __future__ import annotations

from tfs.categories import (
    BACKGROUNDS, BOLD, BRIGHT, COLORS, DIM, ORDER, tab_title, paint,
)
from tfs.navigation import LIST, NavState
from tfs.planner import Buckets

EMPTY_MESSAGE = "  No changes in this category."
LIST_HELP = "[Arrows]: Navigate  [Enter]: Details  [Tab]: Next Category  [q]: Quit"
DETAIL_HELP = "[Up/Down/PgUp/PgDn]: Scroll  [Esc]: Back  [q]: Quit"


def render_tabs(state: NavState, buckets: Buckets) -> str:
    tabs = []
    for category in ORDER:
        title = f" {tab_title(category, len(buckets.get(category, [])))} "
        if category == state.category:
            tabs.append(paint(title, BOLD, BRIGHT, BACKGROUNDS[category]))
        else:
            tabs.append(paint(title, COLORS[category]))
    return "".join(tabs)


def _list_rows(state: NavState, buckets: Buckets) -> list[str]:
    items = buckets.get(state.category, [])
    if not items:
        return [paint(EMPTY_MESSAGE, DIM)]
    height = state.viewport_height
    # Keep the cursor row on screen
    start = max(0, state.cursor - height + 1)
    rows = []
    for i, rc in enumerate(items[start:start + height], start):
        if i == state.cursor:
            rows.append(paint(f"> {rc.address}", BOLD, COLORS[state.category]))
        else:
            rows.append(f"  {rc.address}")
    return rows


def _detail_rows(state: NavState) -> list[str]:
    return list(state.detail[state.scroll:state.scroll + state.viewport_height])


def render_view(state: NavState, buckets: Buckets) -> str:
    """Build the full frame: tab bar, separator, list or detail, help line."""
    rows = _list_rows(state, buckets) if state.mode == LIST else _detail_rows(state)
    rows += [""] * (state.viewport_height - len(rows))

    if state.mode == LIST:
        footer = LIST_HELP
    elif not state.detail:
        footer = DETAIL_HELP
    else:
        last = min(len(state.detail), state.scroll + state.viewport_height)
        footer = f"{DETAIL_HELP}  ({state.scroll + 1}-{last} of {len(state.detail)})"

    frame = [
        render_tabs(state, buckets),
        paint("─" * state.width, DIM),
        "",
        *rows,
        "",
        paint(footer, DIM),
    ]
    return "\n".join(frame)

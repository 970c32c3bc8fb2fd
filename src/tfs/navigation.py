"""Navigation state machine for the interactive plan viewer.

State is an immutable NavState value; handle_event() takes the current state,
the plan buckets and one input event and returns the next state. Nothing here
touches the terminal, so every transition can be exercised directly.

Out-of-range moves (cursor past the list, scrolling past the text) are
clamped silently. Transitions that do not apply in the current mode are
no-ops.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import NamedTuple, Union

from tfs.categories import ORDER, Category
from tfs.planner import Buckets
from tfs.renderer import render

# View modes
LIST = "list"
DETAIL = "detail"

# Input events
QUIT = "quit"
NEXT_CATEGORY = "next_category"
PREV_CATEGORY = "prev_category"
UP = "up"
DOWN = "down"
PAGE_UP = "page_up"
PAGE_DOWN = "page_down"
OPEN = "open"
CLOSE = "close"

# Rows around the content area: tab bar, separator, blank / blank, help
HEADER_HEIGHT = 3
FOOTER_HEIGHT = 2
DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24


class Resize(NamedTuple):
    width: int
    height: int


Event = Union[str, Resize]


@dataclass(frozen=True)
class NavState:
    category: Category = Category.CREATE
    cursor: int = 0
    mode: str = LIST
    scroll: int = 0
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    # Rendered lines of the resource open in detail mode
    detail: tuple[str, ...] = ()
    running: bool = True

    @property
    def viewport_height(self) -> int:
        return max(1, self.height - HEADER_HEIGHT - FOOTER_HEIGHT)

    @property
    def max_scroll(self) -> int:
        return max(0, len(self.detail) - self.viewport_height)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def handle_event(state: NavState, buckets: Buckets, event: Event) -> NavState:
    """Apply one input event and return the resulting state."""
    if isinstance(event, Resize):
        return resize(state, event.width, event.height)
    if event == QUIT:
        return replace(state, running=False)
    if state.mode == LIST:
        return _handle_list(state, buckets, event)
    return _handle_detail(state, event)


def _handle_list(state: NavState, buckets: Buckets, event: str) -> NavState:
    items = buckets.get(state.category, [])
    last = max(0, len(items) - 1)

    if event in (NEXT_CATEGORY, PREV_CATEGORY):
        step = 1 if event == NEXT_CATEGORY else -1
        category = ORDER[(ORDER.index(state.category) + step) % len(ORDER)]
        return replace(state, category=category, cursor=0, mode=LIST, scroll=0)
    if event == UP:
        return replace(state, cursor=_clamp(state.cursor - 1, 0, last))
    if event == DOWN:
        return replace(state, cursor=_clamp(state.cursor + 1, 0, last))
    if event == PAGE_UP:
        return replace(state, cursor=_clamp(state.cursor - state.viewport_height, 0, last))
    if event == PAGE_DOWN:
        return replace(state, cursor=_clamp(state.cursor + state.viewport_height, 0, last))
    if event == OPEN and items:
        detail = tuple(render(items[state.cursor]).rstrip("\n").split("\n"))
        return replace(state, mode=DETAIL, detail=detail, scroll=0)
    return state


def _handle_detail(state: NavState, event: str) -> NavState:
    if event == UP:
        return replace(state, scroll=_clamp(state.scroll - 1, 0, state.max_scroll))
    if event == DOWN:
        return replace(state, scroll=_clamp(state.scroll + 1, 0, state.max_scroll))
    if event == PAGE_UP:
        return replace(state, scroll=_clamp(state.scroll - state.viewport_height, 0, state.max_scroll))
    if event == PAGE_DOWN:
        return replace(state, scroll=_clamp(state.scroll + state.viewport_height, 0, state.max_scroll))
    if event == CLOSE:
        return replace(state, mode=LIST, detail=(), scroll=0)
    return state


def resize(state: NavState, width: int, height: int) -> NavState:
    """Record a new terminal size and pull the scroll offset back into range."""
    resized = replace(state, width=max(1, width), height=max(1, height))
    return replace(resized, scroll=_clamp(resized.scroll, 0, resized.max_scroll))

"""Full-screen terminal viewer: key bindings driving the navigation state machine."""

from __future__ import annotations

from typing import Any, Callable

from prompt_toolkit.application import Application, get_app
from prompt_toolkit.formatted_text import ANSI
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import Layout
from prompt_toolkit.layout.containers import Window
from prompt_toolkit.layout.controls import FormattedTextControl

from tfs.navigation import (
    CLOSE, DOWN, NEXT_CATEGORY, OPEN, PAGE_DOWN, PAGE_UP, PREV_CATEGORY, QUIT, UP,
    Event, NavState, Resize, handle_event,
)
from tfs.planner import Buckets
from tfs.view import render_view

# Navigation event -> prompt_toolkit key names
KEYMAP = {
    QUIT: ("q", "c-c"),
    NEXT_CATEGORY: ("tab", "right", "l"),
    PREV_CATEGORY: ("s-tab", "left", "h"),
    UP: ("up", "k"),
    DOWN: ("down", "j"),
    PAGE_UP: ("pageup",),
    PAGE_DOWN: ("pagedown",),
    OPEN: ("enter",),
    CLOSE: ("escape",),
}

# Seconds to wait after Esc before treating it as a lone key press
ESCAPE_TIMEOUT = 0.05


class PlanSession:
    """Buckets plus the current navigation state for one viewer run."""

    def __init__(self, buckets: Buckets) -> None:
        self.buckets = buckets
        self.state = NavState()

    def dispatch(self, event: Event) -> NavState:
        self.state = handle_event(self.state, self.buckets, event)
        return self.state

    def frame(self, width: int, height: int) -> str:
        """Render the current frame, first applying a terminal size change if any."""
        if (width, height) != (self.state.width, self.state.height):
            self.dispatch(Resize(width, height))
        return render_view(self.state, self.buckets)


def _handler(session: PlanSession, kind: str) -> Callable[[Any], None]:
    def handle(event: Any) -> None:
        state = session.dispatch(kind)
        if not state.running:
            event.app.exit()
    return handle


def build_key_bindings(session: PlanSession) -> KeyBindings:
    kb = KeyBindings()
    for kind, keys in KEYMAP.items():
        for key in keys:
            kb.add(key)(_handler(session, kind))
    return kb


def run(buckets: Buckets) -> None:
    """Run the viewer until the user quits."""
    session = PlanSession(buckets)

    def get_text() -> ANSI:
        size = get_app().output.get_size()
        return ANSI(session.frame(size.columns, size.rows))

    app: Application[None] = Application(
        layout=Layout(Window(FormattedTextControl(get_text), wrap_lines=False)),
        key_bindings=build_key_bindings(session),
        full_screen=True,
    )
    app.ttimeoutlen = ESCAPE_TIMEOUT
    app.run()

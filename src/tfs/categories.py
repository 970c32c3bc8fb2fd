"""Plan categories: ordinals, tab labels, symbols and colors shared by every surface."""

from __future__ import annotations

from enum import IntEnum


class Category(IntEnum):
    CREATE = 0
    DESTROY = 1
    REPLACE = 2
    UPDATE = 3
    OTHER = 4


# Fixed tab order; the static document uses the same ordinals
ORDER = tuple(Category)

LABELS = {
    Category.CREATE: "CREATE",
    Category.DESTROY: "DESTROY",
    Category.REPLACE: "REPLACE",
    Category.UPDATE: "UPDATE",
    Category.OTHER: "IMPORT",
}
SYMBOLS = {
    Category.CREATE: "+",
    Category.DESTROY: "-",
    Category.REPLACE: "-/+",
    Category.UPDATE: "~",
    Category.OTHER: "",
}
COLORS = {
    Category.CREATE: "\033[32m",
    Category.DESTROY: "\033[31m",
    Category.REPLACE: "\033[35m",
    Category.UPDATE: "\033[33m",
    Category.OTHER: "\033[36m",
}
# Background variants for the active tab
BACKGROUNDS = {
    Category.CREATE: "\033[42m",
    Category.DESTROY: "\033[41m",
    Category.REPLACE: "\033[45m",
    Category.UPDATE: "\033[43m",
    Category.OTHER: "\033[46m",
}
HTML_COLORS = {
    Category.CREATE: "#00AF00",
    Category.DESTROY: "#D70000",
    Category.REPLACE: "#AE00FF",
    Category.UPDATE: "#FFAF00",
    Category.OTHER: "#00AFFF",
}
CSS_KEYS = {
    Category.CREATE: "create",
    Category.DESTROY: "destroy",
    Category.REPLACE: "replace",
    Category.UPDATE: "update",
    Category.OTHER: "import",
}

# Action tokens
CREATE = "create"
DELETE = "delete"
UPDATE = "update"
REPLACE = "replace"
NOOP = "no-op"

REPLACE_ACTIONS = (DELETE, CREATE)


def resource_action(actions: list[str] | tuple[str, ...]) -> str:
    """Collapse an action sequence to one word; delete,create is a replace."""
    if tuple(actions[:2]) == REPLACE_ACTIONS:
        return REPLACE
    return actions[0] if actions else NOOP


def categorize(actions: list[str] | tuple[str, ...]) -> Category:
    """Pick the category from the first one or two action tokens."""
    action = resource_action(actions)
    if action == REPLACE:
        return Category.REPLACE
    if action == CREATE:
        return Category.CREATE
    if action == DELETE:
        return Category.DESTROY
    if action == UPDATE:
        return Category.UPDATE
    return Category.OTHER


BOLD = "\033[1m"
DIM = "\033[90m"
REVERSE = "\033[7m"
BRIGHT = "\033[97m"
RESET = "\033[0m"


def tab_title(category: Category, count: int) -> str:
    """Tab text, e.g. "REPLACE (-/+ 2)" or "IMPORT (3)"."""
    symbol = SYMBOLS[category]
    if symbol:
        return f"{LABELS[category]} ({symbol} {count})"
    return f"{LABELS[category]} ({count})"


def paint(text: str, *codes: str) -> str:
    """Wrap text in ANSI codes, re-opening them on every physical line.

    A multi-line value stays one styled call, but each line carries its own
    codes so the viewport can slice anywhere without losing color.
    """
    if not codes:
        return text
    prefix = "".join(codes)
    return "\n".join(f"{prefix}{line}{RESET}" for line in text.split("\n"))

"""Render a resource change as a Terraform-style diff block."""

from __future__ import annotations

import json

from tfs.categories import (
    BOLD, COLORS, CREATE, DELETE, NOOP, REPLACE, SYMBOLS, UPDATE,
    categorize, paint, resource_action,
)
from tfs.differ import DiffLine, diff
from tfs.plan_reader import ResourceChange

BLOCK_INDENT = 2
# One step past the block line; the terminal and the HTML report both render these lines
ATTRIBUTE_INDENT = 6
# Identifiers are noise in a diff view
SKIPPED_KEYS = frozenset({"id"})

_HEADERS = {
    CREATE: "will be created",
    DELETE: "will be destroyed",
    UPDATE: "will be updated in-place",
    REPLACE: "must be replaced",
    "read": "will be read during apply",
    NOOP: "will be left unchanged",
}


def header_text(rc: ResourceChange) -> str:
    action = resource_action(rc.actions)
    verb = _HEADERS.get(action)
    if verb is None:
        verb = f"will be {action}d" if action.endswith("e") else f"will be {action}ed"
    return f"# {rc.type}.{rc.name} {verb}"


def render_lines(rc: ResourceChange) -> list[DiffLine]:
    """Build the styled lines of one resource's diff block."""
    category = categorize(rc.actions)
    padding = " " * BLOCK_INDENT
    lines = [
        DiffLine(header_text(rc), bold=True),
        DiffLine(
            f"{padding}{SYMBOLS[category]} resource {json.dumps(rc.type)} {json.dumps(rc.name)} {{",
            category,
        ),
    ]

    keys = (set(rc.before) | set(rc.after) | set(rc.after_unknown)) - SKIPPED_KEYS
    for key in sorted(keys):
        unknown = rc.after_unknown.get(key)
        lines.extend(diff(
            key, rc.before.get(key), rc.after.get(key), unknown is True,
            ATTRIBUTE_INDENT, category, unknown,
        ))

    lines.append(DiffLine(f"{padding}}}"))
    return lines


def to_ansi(lines: list[DiffLine]) -> str:
    """Join lines into terminal text, one styled call per logical line."""
    out = []
    for line in lines:
        codes = []
        if line.bold:
            codes.append(BOLD)
        if line.style is not None:
            codes.append(COLORS[line.style])
        out.append(paint(line.text, *codes) + "\n")
    return "".join(out)


def to_text(lines: list[DiffLine]) -> str:
    return "".join(line.text + "\n" for line in lines)


def render(rc: ResourceChange) -> str:
    """Render a resource change as colored terminal text."""
    return to_ansi(render_lines(rc))

"""Diff one attribute's before/after values into styled, indented lines."""

from __future__ import annotations

from typing import Any, NamedTuple

from tfs.categories import Category
from tfs.values import STEP, format_value

KNOWN_AFTER_APPLY = "(known after apply)"


class DiffLine(NamedTuple):
    """One logical output line; text may span several physical lines."""

    text: str
    style: Category | None = None
    bold: bool = False


def diff(key: str, before: Any, after: Any, known_after_apply: bool, indent: int,
         style: Category, unknown: Any = None) -> list[DiffLine]:
    """Compare one attribute and return the lines describing the change.

    Classification, first match wins:
      1. addition   - before absent, after present or known after apply
      2. deletion   - before present, after absent and not known after apply
      3. nested map - both sides are mappings; recurse over the sorted key union
      4. update     - formatted sides differ; identical sides produce no lines

    Additions are always CREATE and deletions always DESTROY; everything else
    takes the caller's style. None counts as absent on either side.

    Args:
        key: Attribute name
        before: Value before the change (None if absent)
        after: Value after the change (None if absent)
        known_after_apply: The after value is only known once applied
        indent: Column of the leading marker
        style: Category used for update and nested-map lines
        unknown: This attribute's after_unknown subtree; when it is a mapping
            its entries mark nested keys as known after apply
    """
    padding = " " * indent

    if before is None and (after is not None or known_after_apply):
        value = KNOWN_AFTER_APPLY if known_after_apply else format_value(after, indent)
        return [DiffLine(f"{padding}+ {key} = {value}", Category.CREATE)]

    if before is not None and after is None and not known_after_apply:
        return [DiffLine(f"{padding}- {key} = {format_value(before, indent)}", Category.DESTROY)]

    if isinstance(before, dict) and isinstance(after, dict):
        nested_unknown = unknown if isinstance(unknown, dict) else {}
        lines = [DiffLine(f"{padding}~ {key} = {{", style)]
        for child in sorted(set(before) | set(after) | set(nested_unknown)):
            child_unknown = nested_unknown.get(child)
            lines.extend(diff(
                child, before.get(child), after.get(child), child_unknown is True,
                indent + STEP, style, child_unknown,
            ))
        lines.append(DiffLine(f"{padding}}}", style))
        return lines

    old = format_value(before, indent)
    new = KNOWN_AFTER_APPLY if known_after_apply else format_value(after, indent)
    if old == new:
        return []
    return [DiffLine(f"{padding}~ {key} = {old} -> {new}", style)]

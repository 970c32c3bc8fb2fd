"""Reads `terraform show -json` output into resource changes, preserving number literals."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from tfs.exceptions import PlanFormatError
from tfs.values import decode_json


@dataclass(frozen=True)
class ResourceChange:
    """One resource's planned change.

    before/after/after_unknown are attribute name -> value maps; absent maps
    are stored as empty dicts.
    """

    address: str
    type: str
    name: str
    actions: tuple[str, ...]
    before: dict[str, Any] = field(default_factory=dict)
    after: dict[str, Any] = field(default_factory=dict)
    after_unknown: dict[str, Any] = field(default_factory=dict)


def parse_plan(text: str | bytes) -> list[ResourceChange]:
    """Parse change-set JSON text into resource changes, in document order.

    Raises PlanFormatError if the text is not JSON or does not have the
    resource_changes shape. No partial result is ever returned.
    """
    try:
        data = decode_json(text)
    except (ValueError, json.JSONDecodeError) as e:
        raise PlanFormatError(f"Invalid plan JSON: {e}")
    try:
        # Unpaired \uD800-\uDFFF escapes decode but cannot be written back out
        json.dumps(data, ensure_ascii=False).encode("utf-8")
    except UnicodeEncodeError as e:
        raise PlanFormatError(f"Invalid plan JSON: unpaired surrogate escape ({e.reason})")

    if not isinstance(data, dict):
        raise PlanFormatError("Plan JSON must be an object")
    raw_changes = data.get("resource_changes")
    if raw_changes is None:
        # Plans with nothing to change may omit the key entirely
        return []
    if not isinstance(raw_changes, list):
        raise PlanFormatError("must be a list", path="resource_changes")

    return [_parse_change(item, f"resource_changes[{i}]") for i, item in enumerate(raw_changes)]


def _parse_change(item: Any, path: str) -> ResourceChange:
    if not isinstance(item, dict):
        raise PlanFormatError("must be an object", path=path)
    for key in ("address", "type", "name"):
        if not isinstance(item.get(key), str):
            raise PlanFormatError(f"missing string field {key!r}", path=path)

    change = item.get("change")
    if not isinstance(change, dict):
        raise PlanFormatError("missing object field 'change'", path=path)
    actions = change.get("actions")
    if not isinstance(actions, list) or not all(isinstance(a, str) for a in actions):
        raise PlanFormatError("'actions' must be a list of strings", path=f"{path}.change")

    return ResourceChange(
        address=item["address"],
        type=item["type"],
        name=item["name"],
        actions=tuple(actions),
        before=_object_or_empty(change, "before", path),
        after=_object_or_empty(change, "after", path),
        after_unknown=_object_or_empty(change, "after_unknown", path),
    )


def _object_or_empty(change: dict[str, Any], key: str, path: str) -> dict[str, Any]:
    value = change.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise PlanFormatError(f"{key!r} must be an object or null", path=f"{path}.change")
    return value

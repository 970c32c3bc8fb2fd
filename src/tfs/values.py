"""Plan attribute values: lossless JSON decoding and canonical text formatting."""

from __future__ import annotations

import json
from typing import Any, Union

# Indentation step for nested values and nested attribute diffs
STEP = 4


class Number(str):
    """A JSON number kept as the literal text it was written with.

    Plan output is a textual diff, so "1.10" must never become 1.1.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Number({str.__repr__(self)})"


# None | bool | Number | str | list[PlanValue] | dict[str, PlanValue]
PlanValue = Union[None, bool, Number, str, list, dict]


def decode_json(text: str | bytes) -> Any:
    """Parse JSON text, keeping every number as a Number."""
    return json.loads(text, parse_int=Number, parse_float=Number, parse_constant=Number)


def format_value(value: Any, indent: int = 0) -> str:
    """Render a value in canonical indented form.

    Nested lines are indented by indent + STEP; closing brackets sit at indent.
    Mapping keys are sorted so output never depends on decode order.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Number):
        return str(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, (int, float)):
        return str(value)
    padding = " " * (indent + STEP)
    if isinstance(value, list):
        if not value:
            return "[]"
        items = "".join(f"{padding}{format_value(item, indent + STEP)},\n" for item in value)
        return "[\n" + items + " " * indent + "]"
    if isinstance(value, dict):
        entries = "".join(
            f"{padding}{key} = {format_value(value[key], indent + STEP)}\n"
            for key in sorted(value)
        )
        return "{\n" + entries + " " * indent + "}"
    return str(value)

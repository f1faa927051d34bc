"""Conversion of Python values into PHP literal source text."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from phpgen.errors import RenderError

INDENT = "    "

# Characters that must be escaped inside a double-quoted PHP string
_STRING_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"', "$": "\\$"})


def render_string(value: str) -> str:
    """Render a double-quoted PHP string that reads back as `value`."""
    return '"' + value.translate(_STRING_ESCAPES) + '"'


def render_number(value: int | float) -> str:
    """Render an int or float in plain decimal/exponent form."""
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NAN"
    if math.isinf(value):
        return "INF" if value > 0 else "-INF"
    return repr(value)


def render_literal(value: Any) -> str:
    """Render a supported Python value as PHP literal text.

    Supported kinds: str, bool, None, int, float, list/tuple and mappings
    (nested to any depth). Booleans are checked before numbers because
    bool is a subclass of int.

    Raises:
        RenderError: If the value (or anything nested in it) is unsupported.
    """
    if isinstance(value, str):
        return render_string(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (int, float)):
        return render_number(value)
    if isinstance(value, (list, tuple, Mapping)):
        return render_array(value)
    raise RenderError(value)


def _render_key(key: Any) -> str:
    if isinstance(key, bool) or not isinstance(key, (str, int)):
        raise RenderError(key)
    return render_literal(key)


def _keys(value: list[Any] | tuple[Any, ...] | Mapping[Any, Any]) -> list[str]:
    """Return the rendered `key => ` prefix of each entry, empty for sequences."""
    if isinstance(value, Mapping):
        return [f"{_render_key(k)} => " for k in value]
    return [""] * len(value)


def render_array(
    value: list[Any] | tuple[Any, ...] | Mapping[Any, Any],
    indent: int | None = None,
) -> str:
    """Render a list, tuple or mapping as a PHP short array literal.

    Sequences render without keys; mappings render `key => value` pairs in
    iteration order.

    Args:
        value: The array to render.
        indent: None for a single-line literal. Otherwise the indentation
            level of the line holding the opening bracket; entries are placed
            one per line at `indent + 1` with trailing commas.
    """
    items = list(value.values()) if isinstance(value, Mapping) else list(value)
    if not items:
        return "[]"

    keys = _keys(value)

    if indent is None:
        rendered = [k + render_literal(v) for k, v in zip(keys, items)]
        return "[" + ", ".join(rendered) + "]"

    inner = INDENT * (indent + 1)
    lines = ["["]
    for key, item in zip(keys, items):
        if isinstance(item, (list, tuple, Mapping)):
            text = render_array(item, indent + 1)
        else:
            text = render_literal(item)
        lines.append(f"{inner}{key}{text},")
    lines.append(f"{INDENT * indent}]")
    return "\n".join(lines)

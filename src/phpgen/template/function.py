"""Standalone PHP function files."""

from __future__ import annotations

from collections.abc import Iterable

from phpgen.models import DEFAULT_BODY, ArgumentSpec
from phpgen.render.fragments import (
    render_declare,
    render_function_if_not_exists,
    render_open_tag,
)
from phpgen.template.unit import TemplateUnit


def build_function_unit(
    name: str,
    arguments: Iterable[ArgumentSpec] = (),
    return_type: str | None = None,
    body: str = DEFAULT_BODY,
) -> TemplateUnit:
    """Return a generated TemplateUnit holding one guarded global function.

    The function is wrapped in `if (!function_exists(...))` so the file can
    be included more than once.
    """
    content = (
        render_open_tag()
        + render_declare()
        + render_function_if_not_exists(name, tuple(arguments), return_type, body)
    )
    return TemplateUnit().with_content_file(content)

"""Docblock comments for generated methods and functions."""

from __future__ import annotations

from collections.abc import Iterable

from phpgen.models import ArgumentSpec


def render_param_tags(arguments: Iterable[ArgumentSpec]) -> list[str]:
    """Return one `@param` tag per argument. Untyped arguments become `mixed`."""
    return [f"@param {arg.type_hint or 'mixed'} ${arg.name}" for arg in arguments]


def render_return_tag(return_type: str, description: str = "") -> str:
    return f"@return {return_type} {description}".rstrip()


def render_docblock(
    summary: str,
    arguments: Iterable[ArgumentSpec] = (),
    return_type: str | None = None,
    depth: int = 0,
) -> str:
    """Render a `/** ... */` block at the given tab depth.

    The summary may span several lines. Tags follow after a blank ` *` line
    when there are any.
    """
    indent = "\t" * depth
    tags = render_param_tags(arguments)
    if return_type:
        tags.append(render_return_tag(return_type))

    lines = [f"{indent}/**"]
    for line in summary.splitlines() or [""]:
        lines.append(f"{indent} * {line}".rstrip())
    if tags:
        lines.append(f"{indent} *")
        lines.extend(f"{indent} * {tag}" for tag in tags)
    lines.append(f"{indent} */")
    return "\n".join(lines) + "\n"

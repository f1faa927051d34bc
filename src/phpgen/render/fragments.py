"""Text fragments that make up a generated PHP file.

Every function here is pure. Fragments end with a newline where they close a
line, so a file is produced by plain concatenation. Class members are
indented with one tab per level.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from phpgen.render.docblock import render_docblock
from phpgen.render.literals import render_literal, render_string
from phpgen.models import (
    DEFAULT_BODY,
    ArgumentSpec,
    ConstSpec,
    FieldSpec,
    MethodSpec,
    has_default,
)

TAB = "\t"


def tab(times: int = 1) -> str:
    return TAB * times


def render_open_tag() -> str:
    return "<?php\n\n"


def render_declare() -> str:
    return "declare(strict_types=1);\n\n"


def render_namespace(namespace: str) -> str:
    return f"namespace {namespace};\n\n"


def render_imports(packages: Sequence[str]) -> str:
    """One `use` line per package, in order, followed by a blank line."""
    if not packages:
        return ""
    return "".join(f"use {package};\n" for package in packages) + "\n"


def render_class_header(
    name: str, extends: str | None = None, implements: str | None = None
) -> str:
    """Render `class Name[ extends X][ implements Y]` and the opening brace."""
    header = f"class {name}"
    if extends:
        header += f" extends {extends}"
    if implements:
        header += f" implements {implements}"
    return header + "\n{\n"


def render_close() -> str:
    return "}\n"


def render_traits(traits: Sequence[str]) -> str:
    """Render all trait imports on a single indented line."""
    if not traits:
        return ""
    return tab() + "".join(f"use {trait};" for trait in traits) + "\n"


def _default_clause(default: object) -> str:
    return f" = {render_literal(default)}" if has_default(default) else ""


def render_field(spec: FieldSpec) -> str:
    parts = [spec.visibility]
    if spec.is_static:
        parts.append("static")
    if spec.type_hint:
        parts.append(spec.type_hint)
    parts.append(f"${spec.name}")
    return f"{tab()}{' '.join(parts)}{_default_clause(spec.default)};\n"


def render_constant(spec: ConstSpec) -> str:
    parts = [spec.visibility]
    if spec.is_static:
        parts.append("static")
    parts.append("const")
    if spec.type_hint:
        parts.append(spec.type_hint)
    parts.append(spec.name)
    return f"{tab()}{' '.join(parts)}{_default_clause(spec.default)};\n"


def render_argument(spec: ArgumentSpec) -> str:
    """Render `[<type> ]$<name>[ = <default>]`."""
    argument = f"${spec.name}"
    if spec.type_hint:
        argument = f"{spec.type_hint} {argument}"
    return argument + _default_clause(spec.default)


def render_arguments(arguments: Iterable[ArgumentSpec]) -> str:
    return ", ".join(render_argument(arg) for arg in arguments)


def indent_body(body: str, depth: int) -> str:
    """Indent every non-blank line of `body` by `depth` tabs.

    Trailing newlines are dropped; blank lines stay empty.
    """
    lines = body.rstrip("\n").split("\n")
    return "\n".join(tab(depth) + line if line.strip() else "" for line in lines)


def render_function(
    name: str,
    arguments: Iterable[ArgumentSpec] = (),
    return_type: str | None = None,
    body: str = DEFAULT_BODY,
    depth: int = 0,
    prefix: str = "",
) -> str:
    """Render a function definition whose signature sits at `depth` tabs.

    `prefix` is placed before the `function` keyword (e.g. `public static `).
    """
    returns = f": {return_type}" if return_type else ""
    signature = f"{tab(depth)}{prefix}function {name}({render_arguments(arguments)}){returns}"
    return f"{signature} {{\n{indent_body(body, depth + 1)}\n{tab(depth)}}}\n"


def render_function_if_not_exists(
    name: str,
    arguments: Iterable[ArgumentSpec] = (),
    return_type: str | None = None,
    body: str = DEFAULT_BODY,
) -> str:
    """Render a top-level function wrapped in a `function_exists` guard."""
    function = render_function(name, arguments, return_type, body, depth=1)
    return f"if (!function_exists({render_string(name)})) {{\n{function}}}\n"


def render_method(spec: MethodSpec) -> str:
    """Render a method at class-member depth, preceded by its docblock if any."""
    docblock = ""
    if spec.summary is not None:
        docblock = render_docblock(
            spec.summary, spec.arguments, spec.return_type, depth=1
        )
    prefix = spec.visibility + (" static " if spec.is_static else " ")
    return docblock + render_function(
        spec.name,
        spec.arguments,
        spec.return_type,
        spec.body,
        depth=1,
        prefix=prefix,
    )

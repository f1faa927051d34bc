"""Rendering of PHP literals and source fragments."""

from phpgen.render.docblock import render_docblock
from phpgen.render.fragments import (
    render_argument,
    render_arguments,
    render_class_header,
    render_close,
    render_constant,
    render_declare,
    render_field,
    render_function,
    render_function_if_not_exists,
    render_imports,
    render_method,
    render_namespace,
    render_open_tag,
    render_traits,
)
from phpgen.render.literals import render_array, render_literal

__all__ = [
    "render_argument",
    "render_arguments",
    "render_array",
    "render_class_header",
    "render_close",
    "render_constant",
    "render_declare",
    "render_docblock",
    "render_field",
    "render_function",
    "render_function_if_not_exists",
    "render_imports",
    "render_literal",
    "render_method",
    "render_namespace",
    "render_open_tag",
    "render_traits",
]

"""Immutable description of one PHP class file and its rendered text."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Self

from phpgen.fs import write_file
from phpgen.models import (
    DEFAULT_BODY,
    NO_DEFAULT,
    ArgumentSpec,
    ConstSpec,
    FieldSpec,
    MethodSpec,
    Visibility,
)
from phpgen.render.fragments import (
    render_class_header,
    render_close,
    render_constant,
    render_declare,
    render_field,
    render_imports,
    render_method,
    render_namespace,
    render_open_tag,
    render_traits,
)


def _names(value: str | Iterable[str]) -> tuple[str, ...]:
    """Normalize package or trait names; a bare string is one name."""
    if isinstance(value, str):
        return (value,)
    return tuple(value)


@dataclass(frozen=True)
class TemplateUnit:
    """Immutable builder for a PHP class file.

    Every `with_*` method returns a new TemplateUnit and leaves the receiver
    unchanged. `generated_text` stays empty until `generate()` is called and
    is not refreshed by later `with_*` calls.
    """

    namespace: str | None = None
    class_name: str = ""
    extends: str | None = None
    implements: str | None = None
    packages: tuple[str, ...] = ()
    traits: tuple[str, ...] = ()
    fields: tuple[FieldSpec, ...] = ()
    constants: tuple[ConstSpec, ...] = ()
    methods: tuple[MethodSpec, ...] = ()
    generated_text: str = ""

    def __post_init__(self) -> None:
        for name in ("packages", "traits"):
            object.__setattr__(self, name, _names(getattr(self, name)))
        for name in ("fields", "constants", "methods"):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))

    @property
    def is_generated(self) -> bool:
        return bool(self.generated_text)

    # Scalars

    def with_namespace(self, namespace: str) -> Self:
        return replace(self, namespace=namespace)

    def with_name(self, class_name: str) -> Self:
        return replace(self, class_name=class_name)

    def with_extends(self, class_name: str) -> Self:
        return replace(self, extends=class_name)

    def with_implements(self, interface: str) -> Self:
        return replace(self, implements=interface)

    # Whole-sequence replacement

    def with_packages(self, packages: str | Iterable[str]) -> Self:
        return replace(self, packages=_names(packages))

    def with_traits(self, traits: str | Iterable[str]) -> Self:
        return replace(self, traits=_names(traits))

    def with_fields(self, fields: Iterable[FieldSpec]) -> Self:
        return replace(self, fields=tuple(fields))

    def with_constants(self, constants: Iterable[ConstSpec]) -> Self:
        return replace(self, constants=tuple(constants))

    def with_methods(self, methods: Iterable[MethodSpec]) -> Self:
        return replace(self, methods=tuple(methods))

    # Single-entry appends

    def with_package(self, package: str) -> Self:
        return replace(self, packages=(*self.packages, package))

    def with_trait(self, trait: str) -> Self:
        return replace(self, traits=(*self.traits, trait))

    def with_field(self, field: FieldSpec) -> Self:
        return replace(self, fields=(*self.fields, field))

    def with_constant(self, constant: ConstSpec) -> Self:
        return replace(self, constants=(*self.constants, constant))

    def with_method(self, method: MethodSpec) -> Self:
        return replace(self, methods=(*self.methods, method))

    def with_variable(
        self,
        name: str,
        visibility: Visibility = "protected",
        type_hint: str = "mixed",
        is_static: bool = False,
        default: Any = NO_DEFAULT,
    ) -> Self:
        """Append a property built from keyword arguments."""
        return self.with_field(
            FieldSpec(
                name=name,
                visibility=visibility,
                type_hint=type_hint,
                is_static=is_static,
                default=default,
            )
        )

    def with_const(
        self,
        name: str,
        visibility: Visibility = "public",
        type_hint: str = "",
        default: Any = NO_DEFAULT,
    ) -> Self:
        """Append a class constant built from keyword arguments."""
        return self.with_constant(
            ConstSpec(
                name=name, visibility=visibility, type_hint=type_hint, default=default
            )
        )

    def with_new_method(
        self,
        name: str,
        arguments: Iterable[ArgumentSpec] = (),
        return_type: str | None = None,
        body: str = DEFAULT_BODY,
        visibility: Visibility = "public",
        is_static: bool = False,
    ) -> Self:
        """Append a method built from keyword arguments."""
        return self.with_method(
            MethodSpec(
                name=name,
                visibility=visibility,
                is_static=is_static,
                arguments=tuple(arguments),
                return_type=return_type,
                body=body,
            )
        )

    # Method lookup and argument editing

    def _method_index(self, name: str) -> int | None:
        for index, method in enumerate(self.methods):
            if method.name == name:
                return index
        return None

    def find_method(self, name: str) -> MethodSpec | None:
        """Return the first method named `name`, or None."""
        index = self._method_index(name)
        return None if index is None else self.methods[index]

    def _with_method_at(self, index: int, method: MethodSpec) -> Self:
        methods = list(self.methods)
        methods[index] = method
        return replace(self, methods=tuple(methods))

    def with_argument(
        self,
        method_name: str,
        type_hint: str | None,
        name: str,
        default: Any = NO_DEFAULT,
    ) -> Self:
        """Append an argument to the first method named `method_name`.

        The method keeps its position; all other methods are untouched. If
        no method matches, an unchanged copy is returned.
        """
        index = self._method_index(method_name)
        if index is None:
            return replace(self)
        argument = ArgumentSpec(name=name, type_hint=type_hint, default=default)
        return self._with_method_at(index, self.methods[index].with_argument(argument))

    def with_arguments(
        self, method_name: str, arguments: Iterable[ArgumentSpec]
    ) -> Self:
        """Replace the argument list of the first method named `method_name`."""
        index = self._method_index(method_name)
        if index is None:
            return replace(self)
        return self._with_method_at(
            index, self.methods[index].with_arguments(tuple(arguments))
        )

    # Output

    def with_content_file(self, content: str) -> Self:
        """Return a copy whose generated text is `content` verbatim."""
        return replace(self, generated_text=content)

    def render(self) -> str:
        """Render the class file text for the current description.

        Order: open tag, strict types, namespace, imports, class header,
        then the traits, constants, fields and methods blocks separated by a
        blank line, then the closing brace. Empty blocks are left out.
        """
        head = render_open_tag() + render_declare()
        if self.namespace:
            head += render_namespace(self.namespace)
        head += render_imports(self.packages)
        head += render_class_header(self.class_name, self.extends, self.implements)

        blocks = [
            render_traits(self.traits),
            "".join(render_constant(c) for c in self.constants),
            "".join(render_field(f) for f in self.fields),
            "".join(render_method(m) for m in self.methods),
        ]
        body = "\n".join(block for block in blocks if block)

        return head + body + render_close()

    def generate(self) -> Self:
        """Return a copy in the generated state, with `generated_text` filled in."""
        return replace(self, generated_text=self.render())

    def save(self, path: str | Path) -> int:
        """Write `generated_text` to path and return the number of bytes written.

        Raises:
            WriteFailure: If the file cannot be written.
        """
        return write_file(path, self.generated_text)


def create_template(
    namespace: str | None = None,
    packages: str | Iterable[str] = (),
    methods: Iterable[MethodSpec] = (),
    traits: str | Iterable[str] = (),
    class_name: str = "",
) -> TemplateUnit:
    """Create a TemplateUnit from the most commonly set parts."""
    return TemplateUnit(
        namespace=namespace,
        class_name=class_name,
        packages=_names(packages),
        methods=tuple(methods),
        traits=_names(traits),
    )

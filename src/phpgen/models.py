"""Declarative records describing the members of a PHP class."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal

Visibility = Literal["public", "protected", "private"]


class _Sentinel(Enum):
    NO_DEFAULT = "NO_DEFAULT"

    def __repr__(self) -> str:
        return "NO_DEFAULT"


# Marks an omitted default. Distinct from None, which renders as `null`.
NO_DEFAULT = _Sentinel.NO_DEFAULT

DEFAULT_BODY = "//"


def has_default(value: Any) -> bool:
    """Return True if `value` is a real default rather than the sentinel."""
    return value is not NO_DEFAULT


def _detach(spec: Any, name: str) -> None:
    """Deep-copy a mutable default so the caller cannot change it later."""
    value = getattr(spec, name)
    if isinstance(value, (list, dict)):
        object.__setattr__(spec, name, copy.deepcopy(value))


@dataclass(frozen=True)
class FieldSpec:
    """A class property: `<visibility>[ static] <type> $<name>[ = <default>];`."""

    name: str
    visibility: Visibility = "protected"
    type_hint: str = "mixed"  # empty string omits the type
    is_static: bool = False
    default: Any = NO_DEFAULT

    def __post_init__(self) -> None:
        _detach(self, "default")


@dataclass(frozen=True)
class ConstSpec:
    """A class constant. Same shape as FieldSpec."""

    name: str
    visibility: Visibility = "public"
    type_hint: str = ""
    is_static: bool = False
    default: Any = NO_DEFAULT

    def __post_init__(self) -> None:
        _detach(self, "default")


@dataclass(frozen=True)
class ArgumentSpec:
    """A single method or function parameter."""

    name: str
    type_hint: str | None = None
    default: Any = NO_DEFAULT

    def __post_init__(self) -> None:
        _detach(self, "default")


@dataclass(frozen=True)
class MethodSpec:
    """A method signature and its body text.

    The body is inserted as given, one indentation level deeper than the
    signature. The default body `//` marks a stub.
    """

    name: str
    visibility: Visibility = "public"
    is_static: bool = False
    arguments: tuple[ArgumentSpec, ...] = ()
    return_type: str | None = None
    body: str = DEFAULT_BODY
    summary: str | None = None  # docblock text, omitted when None

    def __post_init__(self) -> None:
        if not isinstance(self.arguments, tuple):
            object.__setattr__(self, "arguments", tuple(self.arguments))

    def with_argument(self, argument: ArgumentSpec) -> MethodSpec:
        """Return a new MethodSpec with `argument` appended."""
        return MethodSpec(
            name=self.name,
            visibility=self.visibility,
            is_static=self.is_static,
            arguments=(*self.arguments, argument),
            return_type=self.return_type,
            body=self.body,
            summary=self.summary,
        )

    def with_arguments(self, arguments: tuple[ArgumentSpec, ...]) -> MethodSpec:
        """Return a new MethodSpec with its argument list replaced."""
        return MethodSpec(
            name=self.name,
            visibility=self.visibility,
            is_static=self.is_static,
            arguments=tuple(arguments),
            return_type=self.return_type,
            body=self.body,
            summary=self.summary,
        )

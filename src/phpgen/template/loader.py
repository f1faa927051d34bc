"""Loading class descriptions from YAML files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, cast

import yaml

from phpgen.errors import UnitLoadError
from phpgen.models import (
    DEFAULT_BODY,
    NO_DEFAULT,
    ArgumentSpec,
    ConstSpec,
    FieldSpec,
    MethodSpec,
    Visibility,
)
from phpgen.template.unit import TemplateUnit

logger = logging.getLogger(__name__)

VISIBILITIES: tuple[str, ...] = ("public", "protected", "private")


def _visibility(data: dict[str, Any], fallback: Visibility) -> Visibility:
    raw = data.get("visibility", fallback)
    if raw not in VISIBILITIES:
        raise UnitLoadError(
            f"Invalid visibility {raw!r} for {data.get('name', '?')!r}; "
            f"expected one of {', '.join(VISIBILITIES)}"
        )
    return cast(Visibility, raw)


def _default(data: dict[str, Any]) -> Any:
    """A missing `default` key means no default; `default: null` means null."""
    return data["default"] if "default" in data else NO_DEFAULT


def _entries(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    raw = data.get(key) or []
    if not isinstance(raw, list) or not all(isinstance(e, dict) for e in raw):
        raise UnitLoadError(f"'{key}' must be a list of mappings")
    return raw


def _strings(data: dict[str, Any], key: str) -> tuple[str, ...]:
    raw = data.get(key) or []
    if not isinstance(raw, list):
        raise UnitLoadError(f"'{key}' must be a list")
    return tuple(str(item) for item in raw)


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def field_from_dict(data: dict[str, Any]) -> FieldSpec:
    return FieldSpec(
        name=str(data.get("name", "")),
        visibility=_visibility(data, "protected"),
        type_hint=str(data.get("type", "mixed") or ""),
        is_static=bool(data.get("static", False)),
        default=_default(data),
    )


def constant_from_dict(data: dict[str, Any]) -> ConstSpec:
    return ConstSpec(
        name=str(data.get("name", "")),
        visibility=_visibility(data, "public"),
        type_hint=str(data.get("type", "") or ""),
        is_static=bool(data.get("static", False)),
        default=_default(data),
    )


def argument_from_dict(data: dict[str, Any]) -> ArgumentSpec:
    return ArgumentSpec(
        name=str(data.get("name", "")),
        type_hint=_optional_str(data.get("type")),
        default=_default(data),
    )


def method_from_dict(data: dict[str, Any]) -> MethodSpec:
    body = data.get("body")
    return MethodSpec(
        name=str(data.get("name", "")),
        visibility=_visibility(data, "public"),
        is_static=bool(data.get("static", False)),
        arguments=tuple(argument_from_dict(a) for a in _entries(data, "arguments")),
        return_type=_optional_str(data.get("return")),
        body=DEFAULT_BODY if body is None else str(body),
        summary=_optional_str(data.get("summary")),
    )


def unit_from_dict(data: dict[str, Any]) -> TemplateUnit:
    """Build a TemplateUnit from a parsed class description.

    Unknown keys are ignored.

    Raises:
        UnitLoadError: If a section has the wrong shape or a visibility is invalid.
    """
    return TemplateUnit(
        namespace=_optional_str(data.get("namespace")),
        class_name=str(data.get("name", "")),
        extends=_optional_str(data.get("extends")),
        implements=_optional_str(data.get("implements")),
        packages=_strings(data, "packages"),
        traits=_strings(data, "traits"),
        constants=tuple(constant_from_dict(c) for c in _entries(data, "constants")),
        fields=tuple(field_from_dict(f) for f in _entries(data, "fields")),
        methods=tuple(method_from_dict(m) for m in _entries(data, "methods")),
    )


def load_unit_from_yaml(path: Path) -> TemplateUnit:
    """Load a class description file.

    Raises:
        UnitLoadError: If the file is missing, is not valid YAML, or does not
            hold a mapping.
    """
    if not path.exists():
        raise UnitLoadError(f"Class description not found: {path}")

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise UnitLoadError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise UnitLoadError(f"Class description must be a mapping: {path}")

    logger.debug("Loaded class description %s", path)
    return unit_from_dict(data)

"""Exception hierarchy for phpgen."""

from __future__ import annotations

from pathlib import Path


class PhpgenError(Exception):
    """Base class for all phpgen errors."""


class RenderError(PhpgenError):
    """Raised when a value has no PHP literal form."""

    def __init__(self, value: object) -> None:
        self.type_name = type(value).__name__
        super().__init__(f"Cannot render value of type {self.type_name} as a PHP literal")


class WriteFailure(PhpgenError):
    """Raised when generated text cannot be written to disk."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write {path}: {reason}")


class ReadFailure(PhpgenError):
    """Raised when an existing file cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")


class ConfigFileError(PhpgenError):
    """Raised when a generated PHP config file cannot be edited."""


class DuplicateSectionError(ConfigFileError):
    """Raised when a config section is added twice."""

    def __init__(self, section: str) -> None:
        self.section = section
        super().__init__(f"Section already exists: {section}")


class UnitLoadError(PhpgenError):
    """Raised when a class description file is missing or malformed."""

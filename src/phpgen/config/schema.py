"""Configuration schema for phpgen."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Literal, cast

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class PhpgenConfig:
    """phpgen configuration.

    None values mean "not set" and are filled from lower-precedence layers.
    """

    # Where generated files are written
    output_dir: str | None = None
    overwrite: bool | None = None

    # Namespace used when a class description has none
    namespace: str | None = None

    log_level: LogLevel | None = None

    def merge(self, other: PhpgenConfig) -> PhpgenConfig:
        """Return a new config where non-None values from `other` win."""
        return PhpgenConfig(
            output_dir=(
                other.output_dir if other.output_dir is not None else self.output_dir
            ),
            overwrite=other.overwrite if other.overwrite is not None else self.overwrite,
            namespace=other.namespace if other.namespace is not None else self.namespace,
            log_level=other.log_level if other.log_level is not None else self.log_level,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary, leaving out None values."""
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                result[f.name] = value
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PhpgenConfig:
        """Create a config from a dictionary. Unknown keys are ignored."""
        output_dir = data.get("output_dir")
        overwrite_raw = data.get("overwrite")
        overwrite = bool(overwrite_raw) if overwrite_raw is not None else None
        namespace = data.get("namespace")
        log_level_raw = data.get("log_level")
        log_level: LogLevel | None = None
        if isinstance(log_level_raw, str) and log_level_raw.upper() in LOG_LEVELS:
            log_level = cast(LogLevel, log_level_raw.upper())

        return cls(
            output_dir=str(output_dir) if output_dir is not None else None,
            overwrite=overwrite,
            namespace=str(namespace) if namespace is not None else None,
            log_level=log_level,
        )


# Used for any value not set in a config file or on the command line
DEFAULT_CONFIG = PhpgenConfig(
    output_dir=".",
    overwrite=False,
    log_level="WARNING",
)

"""Configuration loading."""

from phpgen.config.loader import (
    get_home_config_path,
    get_local_config_path,
    load_config,
    save_config,
)
from phpgen.config.schema import DEFAULT_CONFIG, PhpgenConfig

__all__ = [
    "DEFAULT_CONFIG",
    "PhpgenConfig",
    "get_home_config_path",
    "get_local_config_path",
    "load_config",
    "save_config",
]

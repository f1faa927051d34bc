"""Configuration file loading and merging."""

import logging
from pathlib import Path

import yaml

from phpgen.config.schema import DEFAULT_CONFIG, PhpgenConfig

logger = logging.getLogger(__name__)

CONFIG_DIRNAME = ".phpgen"
CONFIG_FILENAME = "config.yaml"


def get_home_config_path() -> Path:
    """Get path to global config: ~/.phpgen/config.yaml."""
    return Path.home() / CONFIG_DIRNAME / CONFIG_FILENAME


def get_local_config_path() -> Path:
    """Get path to local config: ./.phpgen/config.yaml."""
    return Path.cwd() / CONFIG_DIRNAME / CONFIG_FILENAME


def load_yaml_config(path: Path) -> dict[str, object] | None:
    """Load a YAML config file, return None if not found, empty or invalid."""
    if not path.exists():
        return None
    try:
        with path.open() as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError:
        logger.warning("Ignoring invalid config file %s", path)
        return None
    if data is None:
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: not a mapping", path)
        return None
    result: dict[str, object] = data
    return result


def load_config() -> PhpgenConfig:
    """Load merged configuration.

    Precedence (lowest to highest):
    1. Built-in defaults
    2. Global config (~/.phpgen/config.yaml)
    3. Local config (./.phpgen/config.yaml)
    """
    config = DEFAULT_CONFIG

    for path in (get_home_config_path(), get_local_config_path()):
        data = load_yaml_config(path)
        if data:
            logger.debug("Applying config from %s", path)
            config = config.merge(PhpgenConfig.from_dict(data))

    return config


def save_config(config: PhpgenConfig, path: Path) -> None:
    """Save config to a YAML file, creating parent directories if needed.

    Only non-None values are written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.to_dict()
    with path.open("w") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)

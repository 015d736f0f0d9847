"""
Configuration for the tag search engine.
YAML file with defaults and environment overrides.
"""

import copy
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from colored_logger import get_colored_logger

logger = get_colored_logger(__name__)

CONFIG_ENV_VAR = "TAG_SEARCH_CONFIG"
ENV_PREFIX = "TAG_SEARCH__"
DEFAULT_CONFIG_FILE = "tag-search.yml"

DEFAULT_CONFIG = {
    "tags": {
        "max_length": 50,
        "max_per_record": 20,
    },
    "suggestions": {
        "default_limit": 5,
        "vocabulary_limit": 10,
    },
    "logging": {
        "level": "WARNING",
    },
}


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file with fallback to defaults.

    The file is taken from ``config_path``, then the TAG_SEARCH_CONFIG
    environment variable, then ``tag-search.yml`` in the working directory.

    Args:
        config_path: Optional path to config file

    Returns:
        Configuration dictionary
    """
    if config_path:
        config_file = Path(config_path)
    elif os.environ.get(CONFIG_ENV_VAR):
        config_file = Path(os.environ[CONFIG_ENV_VAR])
    else:
        config_file = Path.cwd() / DEFAULT_CONFIG_FILE

    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_file.is_file():
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                user_config = yaml.safe_load(f) or {}

            if not isinstance(user_config, dict):
                raise ValueError("top level must be a mapping")

            config = _deep_merge(config, user_config)
            logger.debug("Loaded tag search config from %s", config_file)

        except (OSError, yaml.YAMLError, ValueError) as e:
            logger.warning(
                "Failed to load config from %s: %s. Using defaults", config_file, e
            )
    elif config_path:
        logger.warning("Config file %s not found. Using defaults", config_file)

    return _apply_env_overrides(config)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge ``override`` into a copy of ``base``, recursing into dicts."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def _apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply environment variable overrides to config.

    Variables follow TAG_SEARCH__<SECTION>__<KEY>=value, with a double
    underscore between levels so keys may contain single underscores.
    Example: TAG_SEARCH__SUGGESTIONS__DEFAULT_LIMIT=8
    """
    for env_key, env_value in os.environ.items():
        if not env_key.startswith(ENV_PREFIX):
            continue

        key_parts = [part.lower() for part in env_key[len(ENV_PREFIX) :].split("__")]
        if len(key_parts) < 2 or not all(key_parts):
            continue

        current = config
        for part in key_parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]

        current[key_parts[-1]] = _convert_env_value(env_value)

    return config


def _convert_env_value(value: str) -> Any:
    """Convert an environment string to bool, int or float where it looks like one."""
    if value.lower() in ("true", "yes", "on"):
        return True
    if value.lower() in ("false", "no", "off"):
        return False

    try:
        return int(value)
    except ValueError:
        pass

    try:
        return float(value)
    except ValueError:
        pass

    return value


@dataclass(frozen=True)
class SearchSettings:
    """Typed view of the configuration used by the search engine."""

    max_tag_length: int = 50
    max_tags_per_record: int = 20
    suggestion_limit: int = 5
    vocabulary_limit: int = 10
    log_level: str = "WARNING"

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "SearchSettings":
        """Build settings from a config dict; bad values keep their defaults."""
        tags = _section(config, "tags")
        suggestions = _section(config, "suggestions")
        return cls(
            max_tag_length=_int_setting(tags, "max_length", cls.max_tag_length),
            max_tags_per_record=_int_setting(
                tags, "max_per_record", cls.max_tags_per_record
            ),
            suggestion_limit=_int_setting(
                suggestions, "default_limit", cls.suggestion_limit
            ),
            vocabulary_limit=_int_setting(
                suggestions, "vocabulary_limit", cls.vocabulary_limit
            ),
            log_level=str(_section(config, "logging").get("level", cls.log_level)),
        )

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "SearchSettings":
        return cls.from_config(load_config(config_path))


def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config.get(name, {})
    if not isinstance(section, dict):
        logger.warning("Ignoring config section '%s': expected a mapping", name)
        return {}
    return section


def _int_setting(section: Dict[str, Any], key: str, default: int) -> int:
    value = section.get(key, default)
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(
            "Invalid value %r for '%s', using default %d", value, key, default
        )
        return default

"""
Configuration Loading Functions.

Handles loading ChunkForge configuration from YAML and applying
environment variable overrides.

Configuration precedence: 1. Env vars, 2. YAML file, 3. Defaults

Environment overrides
---------------------
    CHUNKFORGE_MAX_CHUNK_SIZE    chunking.max_chunk_size
    CHUNKFORGE_OVERLAP_SIZE      chunking.overlap_size
    CHUNKFORGE_TABLE_MAX_SIZE    chunking.table_max_size
    CHUNKFORGE_MIN_CHUNK_SIZE    chunking.min_chunk_size
    CHUNKFORGE_LOG_LEVEL         logging.level
"""

import os
import re
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from chunkforge.core.config import Config
from chunkforge.core.exceptions import ConfigValidationError
from chunkforge.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_FILENAMES = ("chunkforge.yaml", "chunkforge.yml")

CHUNKING_ENV_OVERRIDES: Dict[str, str] = {
    "CHUNKFORGE_MAX_CHUNK_SIZE": "max_chunk_size",
    "CHUNKFORGE_OVERLAP_SIZE": "overlap_size",
    "CHUNKFORGE_TABLE_MAX_SIZE": "table_max_size",
    "CHUNKFORGE_MIN_CHUNK_SIZE": "min_chunk_size",
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_ENV_PATTERN = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")


def expand_env_vars(value: Any) -> Any:
    """Recursively expand environment variables in config values.

    Strings may use ${VAR_NAME} or ${VAR_NAME:default}; dictionaries and
    lists are walked recursively. Other values are returned unchanged.
    """
    if isinstance(value, str):

        def replace_env_var(match: re.Match) -> str:
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return _ENV_PATTERN.sub(replace_env_var, value)
    elif isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value


def get_env_int(name: str, min_value: Optional[int] = None) -> Optional[int]:
    """Read an integer environment variable.

    Invalid values are logged and ignored; values below min_value are clamped.
    """
    value = os.environ.get(name)
    if value is None or not value.strip():
        return None

    try:
        int_value = int(value)
    except ValueError:
        logger.warning(f"Invalid integer value for {name}={value}, ignoring")
        return None

    if min_value is not None and int_value < min_value:
        return min_value
    return int_value


def _apply_env_overrides(config: Config) -> Config:
    """Apply environment variable overrides to configuration."""
    overrides: Dict[str, int] = {}
    for env_name, field_name in CHUNKING_ENV_OVERRIDES.items():
        min_value = 1 if field_name in ("max_chunk_size", "table_max_size") else 0
        env_value = get_env_int(env_name, min_value=min_value)
        if env_value is not None:
            overrides[field_name] = env_value

    if overrides:
        config.chunking = config.chunking.with_overrides(**overrides)

    log_level = os.environ.get("CHUNKFORGE_LOG_LEVEL", "").strip().upper()
    if log_level in LOG_LEVELS:
        config.logging = replace(config.logging, level=log_level)
    elif log_level:
        logger.warning(f"Unknown log level '{log_level}', ignoring")

    return config


def _find_config_file(base_path: Path) -> Optional[Path]:
    for filename in DEFAULT_CONFIG_FILENAMES:
        candidate = base_path / filename
        if candidate.exists():
            return candidate
    return None


def load_config(
    config_path: Optional[Path] = None, base_path: Optional[Path] = None
) -> Config:
    """
    Load configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to config file. Defaults to chunkforge.yaml in base_path.
        base_path: Directory searched for the default file. Defaults to cwd.

    Returns:
        Config object with all settings.

    Raises:
        ConfigValidationError: If the file is not valid YAML or holds invalid values
    """
    if config_path is None:
        config_path = _find_config_file(base_path or Path.cwd())
        if config_path is None:
            return _apply_env_overrides(Config())
    elif not config_path.exists():
        logger.warning(f"Config file not found: {config_path}, using defaults")
        return _apply_env_overrides(Config())

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigValidationError(
            f"Could not parse {config_path.name}: {e}", value=str(config_path)
        ) from e

    config = Config.from_dict(expand_env_vars(data))
    logger.debug("Loaded configuration", path=config_path.name)
    return _apply_env_overrides(config)


def save_config(config: Config, config_path: Path) -> None:
    """Save configuration to a YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config.to_dict(), f, sort_keys=False)

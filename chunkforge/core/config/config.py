"""
Main configuration class for ChunkForge.

Aggregates the chunking, preprocessing and logging sections and builds
them from the plain dictionaries produced by the YAML loader.

    chunkforge.yaml
           ↓
    load_config() → Config object
           ↓
    Passed to: SemanticChunker, preprocess_text, CLI commands

Example chunkforge.yaml:

    chunking:
      max_chunk_size: 1000
      overlap_size: 200
      table_max_size: 2000
      min_chunk_size: 100
    preprocess:
      fix_ocr: false
    logging:
      level: ${CHUNKFORGE_LOG_LEVEL:INFO}
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

from chunkforge.core.config.chunking import ChunkingConfig, PreprocessOptions
from chunkforge.core.exceptions import ConfigValidationError


@dataclass
class LoggingConfig:
    """Logging section of the configuration file."""

    level: str = "INFO"
    file: Optional[str] = None

    @property
    def file_path(self) -> Optional[Path]:
        return Path(self.file).expanduser() if self.file else None


@dataclass
class Config:
    """Main ChunkForge configuration."""

    chunking: ChunkingConfig = field(default_factory=ChunkingConfig)
    preprocess: PreprocessOptions = field(default_factory=PreprocessOptions)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Config":
        """Build a Config from a parsed YAML mapping.

        Unknown sections and keys are ignored.
        """
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigValidationError(
                "Configuration root must be a mapping", value=data
            )

        chunking = ChunkingConfig(
            **_coerce_section(data.get("chunking"), ChunkingConfig, int, "chunking")
        )
        preprocess = PreprocessOptions(
            **_coerce_section(
                data.get("preprocess"), PreprocessOptions, _to_bool, "preprocess"
            )
        )
        logging_data = _section(data.get("logging"), "logging")
        logging_config = LoggingConfig(
            level=str(logging_data.get("level", "INFO")).upper(),
            file=logging_data.get("file") or None,
        )

        return cls(chunking=chunking, preprocess=preprocess, logging=logging_config)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chunking": self.chunking.to_dict(),
            "preprocess": self.preprocess.to_dict(),
            "logging": {"level": self.logging.level, "file": self.logging.file},
        }


def _section(value: Any, name: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigValidationError(
            f"Section '{name}' must be a mapping", field=name, value=value
        )
    return value


def _coerce_section(value: Any, target: type, convert: Any, name: str) -> Dict[str, Any]:
    """Keep the known keys of a section and convert their values."""
    section = _section(value, name)
    known = {f.name for f in fields(target)}
    result: Dict[str, Any] = {}
    for key, raw in section.items():
        if key not in known:
            continue
        try:
            result[key] = convert(raw)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(
                f"Invalid value for {name}.{key}: {raw!r}",
                field=f"{name}.{key}",
                value=raw,
            ) from e
    return result


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "yes", "on", "1"):
            return True
        if lowered in ("false", "no", "off", "0"):
            return False
    if isinstance(value, int):
        return bool(value)
    raise ValueError(f"not a boolean: {value!r}")

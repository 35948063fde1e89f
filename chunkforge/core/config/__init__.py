"""
Configuration Management for ChunkForge.

Configuration is organized into domain-specific modules:

    config/
    ├── chunking.py      # ChunkingConfig, PreprocessOptions, DEFAULT_CONFIG
    └── config.py        # Main Config class, LoggingConfig

Usage Example
-------------
    from chunkforge.core.config import ChunkingConfig
    from chunkforge.core.config_loaders import load_config

    config = load_config()
    chunks = semantic_chunk(text, config=config.chunking)
"""

from chunkforge.core.config.chunking import (
    CHUNKER_PREPROCESS_OPTIONS,
    DEFAULT_CONFIG,
    ChunkingConfig,
    PreprocessOptions,
)
from chunkforge.core.config.config import Config, LoggingConfig

__all__ = [
    "Config",
    "LoggingConfig",
    "ChunkingConfig",
    "PreprocessOptions",
    "DEFAULT_CONFIG",
    "CHUNKER_PREPROCESS_OPTIONS",
]

# NOTE: load_config lives in chunkforge.core.config_loaders to keep the
# dataclasses importable without PyYAML on the import path.

"""
Structured Logging for ChunkForge.

Every module logs through a StructuredLogger obtained from get_logger():

    from chunkforge.core.logging import get_logger
    logger = get_logger(__name__)

    logger.debug("Segmented text", blocks=12)
    # -> "Segmented text | blocks=12"

Keyword fields (and fields bound once with bind()) are rendered after the
message as ``key=value`` pairs. Console output goes through rich's
RichHandler on stderr, so stdout stays free for command output (JSON,
cleaned text). A log file can be added with configure_logging().

The chunking code logs counts and decisions at DEBUG and never logs
document content.

PipelineLogger times the stages of one document run for the CLI:

    plog = PipelineLogger("resume.txt")
    plog.start_stage("read")
    plog.start_stage("chunk")
    plog.finish(success=True, chunks=7)
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.logging import RichHandler

FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
FIELD_SEPARATOR = " | "


@dataclass
class LogConfig:
    """Handler settings shared by every StructuredLogger."""

    level: str = "INFO"
    file_path: Optional[Path] = None
    console: bool = True

    @property
    def numeric_level(self) -> int:
        return getattr(logging, self.level.upper(), logging.INFO)


def format_fields(message: str, fields: Dict[str, Any]) -> str:
    """Append ``key=value`` pairs to a message."""
    if not fields:
        return message
    rendered = [f"{key}={value}" for key, value in fields.items()]
    return FIELD_SEPARATOR.join([message, *rendered])


def _build_handlers(config: LogConfig) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if config.console:
        handlers.append(
            RichHandler(
                console=Console(stderr=True),
                show_path=False,
                markup=False,
                rich_tracebacks=True,
            )
        )
    if config.file_path:
        config.file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(config.file_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        handlers.append(file_handler)
    for handler in handlers:
        handler.setLevel(config.numeric_level)
    return handlers


class StructuredLogger:
    """Wraps a stdlib logger and renders keyword fields into the message."""

    def __init__(self, name: str, config: Optional[LogConfig] = None) -> None:
        self.logger = logging.getLogger(name)
        self.config = config or _default_config
        self._context: Dict[str, Any] = {}
        self._apply_config()

    def _apply_config(self) -> None:
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()
        self.logger.setLevel(self.config.numeric_level)
        for handler in _build_handlers(self.config):
            self.logger.addHandler(handler)

    def reconfigure(self, config: LogConfig) -> None:
        self.config = config
        self._apply_config()

    def bind(self, **fields: Any) -> "StructuredLogger":
        """Attach fields that appear in every later message."""
        self._context.update(fields)
        return self

    def unbind(self, *keys: str) -> "StructuredLogger":
        for key in keys:
            self._context.pop(key, None)
        return self

    def is_enabled_for(self, level: int) -> bool:
        return self.logger.isEnabledFor(level)

    def _log(self, level: int, message: str, fields: Dict[str, Any], **kwargs: Any) -> None:
        # Fields are only formatted for enabled levels
        if self.logger.isEnabledFor(level):
            merged = {**self._context, **fields}
            self.logger.log(level, format_fields(message, merged), **kwargs)

    def debug(self, message: str, **fields: Any) -> None:
        self._log(logging.DEBUG, message, fields)

    def info(self, message: str, **fields: Any) -> None:
        self._log(logging.INFO, message, fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._log(logging.WARNING, message, fields)

    def error(self, message: str, **fields: Any) -> None:
        self._log(logging.ERROR, message, fields)

    def exception(self, message: str, **fields: Any) -> None:
        """Log at ERROR with the active exception's traceback."""
        self._log(logging.ERROR, message, fields, exc_info=True)


_default_config = LogConfig()
_loggers: Dict[str, StructuredLogger] = {}


def get_logger(name: str, config: Optional[LogConfig] = None) -> StructuredLogger:
    """
    Get or create a structured logger.

    Args:
        name: Logger name (typically __name__)
        config: Settings for a new logger; defaults to the global config

    Returns:
        The cached StructuredLogger for name
    """
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name, config)
    return _loggers[name]


def configure_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    console: bool = True,
) -> None:
    """
    Set the global logging configuration.

    Loggers created earlier are reconfigured in place; later ones pick up
    the new settings.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_file: Also write log records to this file
        console: Emit records through the rich console handler
    """
    global _default_config
    _default_config = LogConfig(level=level, file_path=log_file, console=console)
    logging.getLogger().setLevel(_default_config.numeric_level)
    for structured in _loggers.values():
        structured.reconfigure(_default_config)


class PipelineLogger:
    """Stage timer for one document run."""

    def __init__(self, document: str) -> None:
        self.document = document
        self.logger = get_logger("chunkforge.pipeline")
        self.stage_durations: Dict[str, float] = {}
        self._current_stage: Optional[str] = None
        self._stage_started = 0.0

    @property
    def current_stage(self) -> Optional[str]:
        return self._current_stage

    def start_stage(self, stage: str) -> None:
        self._close_stage()
        self._current_stage = stage
        self._stage_started = time.perf_counter()
        self.logger.debug("Starting stage", document=self.document, stage=stage)

    def _close_stage(self) -> None:
        if self._current_stage is None:
            return
        elapsed = time.perf_counter() - self._stage_started
        self.stage_durations[self._current_stage] = elapsed
        self.logger.debug(
            "Completed stage",
            document=self.document,
            stage=self._current_stage,
            duration_sec=f"{elapsed:.3f}",
        )
        self._current_stage = None

    def log_progress(self, message: str, **fields: Any) -> None:
        self.logger.debug(
            message, document=self.document, stage=self._current_stage, **fields
        )

    def finish(self, success: bool, chunks: int = 0, error: Optional[str] = None) -> None:
        """Close the open stage and log the outcome of the run."""
        self._close_stage()
        if success:
            self.logger.info(
                "Chunking completed", document=self.document, chunks_created=chunks
            )
        else:
            self.logger.error("Chunking failed", document=self.document, error=error)

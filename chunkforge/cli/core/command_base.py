"""Base class for all CLI commands.

Every command is a class with an ``execute()`` method that returns an exit
code, plus a thin typer function that builds the command and raises
``typer.Exit`` on failure. Errors never escape ``execute()``: they are
rendered by ErrorRenderer and turned into exit code 1.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console

from chunkforge.cli.console import ErrorRenderer, get_console, is_verbose_mode
from chunkforge.core.config import ChunkingConfig, Config
from chunkforge.core.config_loaders import load_config
from chunkforge.core.exceptions import ExtractionError
from chunkforge.core.logging import configure_logging
from chunkforge.ingest.csv_text import csv_to_text

CSV_SUFFIXES = (".csv", ".tsv")


class ChunkForgeCommand(ABC):
    """Abstract base class for ChunkForge CLI commands.

    Provides common functionality:
    - Console output
    - Configuration loading (chunkforge.yaml + CHUNKFORGE_* overrides)
    - Input reading for text and CSV files
    - Error rendering

    Example:
        class MyCommand(ChunkForgeCommand):
            def execute(self, path: Path) -> int:
                text = self.read_input(path)
                return 0  # Success
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize command.

        Args:
            console: Rich console (for testing, inject one with a file)
        """
        self.console = console or get_console()

    @abstractmethod
    def execute(self, *args: Any, **kwargs: Any) -> int:
        """Execute the command and return an exit code (0 = success)."""
        pass

    # === Configuration ===

    def load_config(self, config_path: Optional[Path] = None) -> Config:
        """Load configuration and apply its logging section.

        --verbose keeps DEBUG logging regardless of the configured level.
        """
        config = load_config(config_path)
        level = "DEBUG" if is_verbose_mode() else config.logging.level
        configure_logging(level=level, log_file=config.logging.file_path)
        return config

    def chunking_config(
        self, config: Config, **overrides: Optional[int]
    ) -> ChunkingConfig:
        """Apply command-line size overrides on top of the loaded config."""
        return config.chunking.with_overrides(**overrides)

    # === Input / Output ===

    def read_input(self, path: Path) -> str:
        """Read a text or CSV file as chunkable text.

        CSV files are rendered one row per line as ``key: value`` pairs.

        Raises:
            FileNotFoundError: If the path does not exist
            ExtractionError: If the file holds no text
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        if not path.is_file():
            raise ExtractionError(f"Not a file: {path.name}")

        content = path.read_text(encoding="utf-8")
        if path.suffix.lower() in CSV_SUFFIXES:
            content = csv_to_text(content).text

        if not content.strip():
            raise ExtractionError(f"No text content found in {path.name}")
        return content

    def write_output(self, path: Path, content: str, quiet: bool = False) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        if not quiet:
            self.print_success(f"Wrote {path.name}")

    def to_json(self, data: Any) -> str:
        return json.dumps(data, indent=2, ensure_ascii=False)

    def print_json(self, data: Any) -> None:
        """Print JSON without rich markup or wrapping."""
        typer.echo(self.to_json(data))

    # === Output Methods ===

    def print_success(self, message: str) -> None:
        self.console.print(f"[green][OK][/green] {message}")

    def print_warning(self, message: str) -> None:
        self.console.print(f"[yellow][WARN][/yellow] {message}")

    def print_info(self, message: str) -> None:
        self.console.print(f"[blue][INFO][/blue] {message}")

    # === Error Handling ===

    def handle_error(self, error: Exception, context: str = "") -> int:
        """Render the error and return exit code 1."""
        ErrorRenderer.render(error, context=context, console=self.console)
        return 1

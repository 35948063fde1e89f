"""Classify command - Show how a document is segmented into blocks."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.table import Table

from chunkforge.cli.commands.chunk import preview
from chunkforge.cli.core.command_base import ChunkForgeCommand
from chunkforge.core.config import CHUNKER_PREPROCESS_OPTIONS
from chunkforge.ingest.refiners.element_classifier import ContentBlock, segment_into_blocks
from chunkforge.ingest.refiners.text_cleaners import preprocess_text


class ClassifyCommand(ChunkForgeCommand):
    """Segment a document and show each block's type and confidence."""

    def execute(
        self,
        input_file: Path,
        as_json: bool = False,
        config_path: Optional[Path] = None,
    ) -> int:
        try:
            self.load_config(config_path)
            text = self.read_input(input_file)
            blocks = segment_into_blocks(preprocess_text(text, CHUNKER_PREPROCESS_OPTIONS))

            if as_json:
                self.print_json([block.to_dict() for block in blocks])
            else:
                self._display_blocks(blocks)
                self.print_info(f"{len(blocks)} blocks in {input_file.name}")
            return 0

        except Exception as e:
            return self.handle_error(e, f"While classifying {input_file.name}")

    def _display_blocks(self, blocks: List[ContentBlock]) -> None:
        table = Table(title="Content blocks")
        table.add_column("Lines", justify="right", style="cyan")
        table.add_column("Type", style="magenta")
        table.add_column("Confidence", justify="right")
        table.add_column("Preview", style="dim")

        for block in blocks:
            table.add_row(
                f"{block.start_line}-{block.end_line}",
                block.type.value,
                f"{block.confidence:.2f}",
                preview(block.text),
            )

        self.console.print(table)


# Typer command wrapper
def command(
    input_file: Path = typer.Argument(..., help="Text, markdown or CSV file"),
    as_json: bool = typer.Option(False, "--json", help="Print blocks as JSON"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (default: ./chunkforge.yaml)"
    ),
) -> None:
    """Show the heading/table/list/text blocks detected in a document.

    Uses the same cleanup the chunker applies. Header/footer noise is
    dropped and does not appear in the output.

    Examples:
        chunkforge classify resume.txt
        chunkforge classify report.md --json
    """
    cmd = ClassifyCommand()
    exit_code = cmd.execute(input_file, as_json, config_path)
    if exit_code != 0:
        raise typer.Exit(code=exit_code)

"""Chunk command - Split a document into retrieval chunks.

Reads a text, markdown or CSV file, runs the semantic chunker and shows
the chunks as a table or JSON records.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.table import Table

from chunkforge.chunking import Chunk, SemanticChunker
from chunkforge.cli.console import tip
from chunkforge.cli.core.command_base import ChunkForgeCommand
from chunkforge.core.exceptions import ChunkingError
from chunkforge.core.logging import PipelineLogger

PREVIEW_LENGTH = 60


def preview(text: str, length: int = PREVIEW_LENGTH) -> str:
    flat = " ".join(text.split())
    return flat if len(flat) <= length else flat[: length - 3] + "..."


class ChunkCommand(ChunkForgeCommand):
    """Chunk a document with the semantic strategy."""

    def execute(
        self,
        input_file: Path,
        page: Optional[int] = None,
        max_chunk_size: Optional[int] = None,
        overlap_size: Optional[int] = None,
        table_max_size: Optional[int] = None,
        min_chunk_size: Optional[int] = None,
        config_path: Optional[Path] = None,
        as_json: bool = False,
        output: Optional[Path] = None,
    ) -> int:
        """Chunk a file and display or save the result.

        Args:
            input_file: Text, markdown or CSV file
            page: Page number stamped on every chunk
            max_chunk_size: Override for chunking.max_chunk_size
            overlap_size: Override for chunking.overlap_size
            table_max_size: Override for chunking.table_max_size
            min_chunk_size: Override for chunking.min_chunk_size
            config_path: Configuration file (defaults to ./chunkforge.yaml)
            as_json: Print JSON records instead of a table
            output: Write JSON records to this file

        Returns:
            0 on success, 1 on error
        """
        plog = PipelineLogger(input_file.name)
        try:
            plog.start_stage("configure")
            config = self.load_config(config_path)
            chunking = self.chunking_config(
                config,
                max_chunk_size=max_chunk_size,
                overlap_size=overlap_size,
                table_max_size=table_max_size,
                min_chunk_size=min_chunk_size,
            )

            plog.start_stage("read")
            text = self.read_input(input_file)

            plog.start_stage("chunk")
            chunks = SemanticChunker(chunking).chunk(text, page_number=page)
            if not chunks:
                raise ChunkingError(
                    f"Could not create meaningful chunks from {input_file.name}"
                )
            plog.finish(success=True, chunks=len(chunks))

            records = [chunk.to_dict() for chunk in chunks]
            if output:
                self.write_output(output, self.to_json(records), quiet=as_json)

            if as_json:
                self.print_json(records)
            else:
                self._display_chunks(chunks)
                self.print_success(f"Created {len(chunks)} chunks from {input_file.name}")
                if not output:
                    tip("Use --json or --output to see full chunk content", self.console)

            return 0

        except Exception as e:
            plog.finish(success=False, error=str(e))
            return self.handle_error(e, f"While chunking {input_file.name}")

    def _display_chunks(self, chunks: List[Chunk]) -> None:
        table = Table(title="Chunks", show_lines=False)
        table.add_column("#", justify="right", style="cyan")
        table.add_column("Type", style="magenta")
        table.add_column("Confidence")
        table.add_column("Length", justify="right")
        table.add_column("Overlap", justify="center")
        table.add_column("Preview", style="dim")

        for chunk in chunks:
            meta = chunk.metadata
            table.add_row(
                str(meta.chunk_index),
                meta.content_type.value,
                meta.confidence.value,
                str(len(chunk.content)),
                "yes" if meta.has_overlap else "",
                preview(chunk.content),
            )

        self.console.print(table)


# Typer command wrapper
def command(
    input_file: Path = typer.Argument(..., help="Text, markdown or CSV file to chunk"),
    page: Optional[int] = typer.Option(
        None, "--page", "-p", min=1, help="Page number stamped on every chunk"
    ),
    max_chunk_size: Optional[int] = typer.Option(
        None, "--max-chunk-size", min=1, help="Max characters for text/list/heading chunks"
    ),
    overlap_size: Optional[int] = typer.Option(
        None, "--overlap-size", min=0, help="Characters of overlap between chunks"
    ),
    table_max_size: Optional[int] = typer.Option(
        None, "--table-max-size", min=1, help="Max characters for table chunks"
    ),
    min_chunk_size: Optional[int] = typer.Option(
        None, "--min-chunk-size", min=0, help="Drop chunks shorter than this"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (default: ./chunkforge.yaml)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print chunks as JSON"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write chunks as JSON to this file"
    ),
) -> None:
    """Split a document into retrieval chunks.

    Tables are split between rows and keep their header, lists between
    items, and prose between sentences. Consecutive chunks share up to
    --overlap-size characters of context.

    Examples:
        # Chunk a resume and show a summary table
        chunkforge chunk resume.txt

        # Smaller chunks, JSON to a file
        chunkforge chunk report.md --max-chunk-size 500 -o chunks.json

        # CSV export, rows rendered as "column: value"
        chunkforge chunk employees.csv --json
    """
    cmd = ChunkCommand()
    exit_code = cmd.execute(
        input_file,
        page,
        max_chunk_size,
        overlap_size,
        table_max_size,
        min_chunk_size,
        config_path,
        as_json,
        output,
    )
    if exit_code != 0:
        raise typer.Exit(code=exit_code)

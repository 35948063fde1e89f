"""Stats command - Chunk a file and summarize the result."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from chunkforge.chunking import ChunkingStats, SemanticChunker, get_chunking_stats
from chunkforge.cli.core.command_base import ChunkForgeCommand


class StatsCommand(ChunkForgeCommand):
    """Report chunk count, sizes and type/confidence distributions."""

    def execute(
        self,
        input_file: Path,
        page: Optional[int] = None,
        as_json: bool = False,
        config_path: Optional[Path] = None,
    ) -> int:
        try:
            config = self.load_config(config_path)
            text = self.read_input(input_file)
            chunks = SemanticChunker(config.chunking).chunk(text, page_number=page)
            stats = get_chunking_stats(chunks)

            if as_json:
                self.print_json(stats.to_dict())
            else:
                self._display_stats(stats, input_file.name)
            return 0

        except Exception as e:
            return self.handle_error(e, f"While analyzing {input_file.name}")

    def _display_stats(self, stats: ChunkingStats, name: str) -> None:
        table = Table(title=f"Chunking stats: {name}", show_header=False)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row("Total chunks", str(stats.total_chunks))
        table.add_row("Average size", str(stats.avg_chunk_size))
        table.add_row("Min size", str(stats.min_chunk_size))
        table.add_row("Max size", str(stats.max_chunk_size))
        for kind, count in sorted(stats.content_types.items()):
            table.add_row(f"Type: {kind}", str(count))
        for level, count in sorted(stats.confidence_levels.items()):
            table.add_row(f"Confidence: {level}", str(count))

        self.console.print(table)


# Typer command wrapper
def command(
    input_file: Path = typer.Argument(..., help="Text, markdown or CSV file"),
    page: Optional[int] = typer.Option(None, "--page", "-p", min=1, help="Page number"),
    as_json: bool = typer.Option(False, "--json", help="Print stats as JSON"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (default: ./chunkforge.yaml)"
    ),
) -> None:
    """Chunk a document and report size and type statistics.

    Useful for tuning chunk sizes. A document made only of header/footer
    noise reports zeros; an empty file is an extraction error.

    Examples:
        chunkforge stats resume.txt
        chunkforge stats report.md --json
    """
    cmd = StatsCommand()
    exit_code = cmd.execute(input_file, page, as_json, config_path)
    if exit_code != 0:
        raise typer.Exit(code=exit_code)

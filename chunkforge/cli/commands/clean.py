"""Clean command - Run the preprocessing pipeline on a file.

Shows what chunking sees after cleanup: normalized whitespace and list
markers, with PDF artifacts, page numbers, standalone links and running
headers/footers removed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from chunkforge.cli.core.command_base import ChunkForgeCommand
from chunkforge.core.config import PreprocessOptions
from chunkforge.ingest.refinement import RefinedText
from chunkforge.ingest.refiners.text_cleaners import TextCleanerRefiner, quick_clean


class CleanCommand(ChunkForgeCommand):
    """Clean and normalize extracted text."""

    def execute(
        self,
        input_file: Path,
        output: Optional[Path] = None,
        fix_ocr: bool = False,
        keep_links: bool = False,
        keep_page_numbers: bool = False,
        keep_repeated: bool = False,
        quick: bool = False,
        config_path: Optional[Path] = None,
    ) -> int:
        """Clean a file and print or save the result.

        Flags switch stages relative to the ``preprocess`` section of the
        configuration file.

        Returns:
            0 on success, 1 on error
        """
        try:
            config = self.load_config(config_path)
            text = self.read_input(input_file)

            if quick:
                result = RefinedText(original=text, refined=quick_clean(text))
            else:
                options = self._build_options(
                    config.preprocess, fix_ocr, keep_links, keep_page_numbers, keep_repeated
                )
                result = TextCleanerRefiner(options).refine(text)

            if output:
                self.write_output(output, result.refined)
                self._report(result)
            else:
                typer.echo(result.refined)

            return 0

        except Exception as e:
            return self.handle_error(e, f"While cleaning {input_file.name}")

    @staticmethod
    def _build_options(
        base: PreprocessOptions,
        fix_ocr: bool,
        keep_links: bool,
        keep_page_numbers: bool,
        keep_repeated: bool,
    ) -> PreprocessOptions:
        return PreprocessOptions(
            remove_repeated=base.remove_repeated and not keep_repeated,
            remove_page_numbers=base.remove_page_numbers and not keep_page_numbers,
            fix_ocr=base.fix_ocr or fix_ocr,
            remove_links=base.remove_links and not keep_links,
        )

    def _report(self, result: RefinedText) -> None:
        original, refined = len(result.original), len(result.refined)
        reduction = (original - refined) / original * 100 if original else 0.0
        self.print_info(
            f"Original: {original} chars, cleaned: {refined} chars ({reduction:.1f}% smaller)"
        )
        for change in result.changes:
            self.console.print(f"  - {change}")


# Typer command wrapper
def command(
    input_file: Path = typer.Argument(..., help="Text, markdown or CSV file to clean"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write cleaned text to this file"
    ),
    fix_ocr: bool = typer.Option(
        False, "--fix-ocr", help="Fix OCR confusables (l/0/1); lossy"
    ),
    keep_links: bool = typer.Option(
        False, "--keep-links", help="Keep lines that are only a URL or email"
    ),
    keep_page_numbers: bool = typer.Option(
        False, "--keep-page-numbers", help="Keep standalone page-number lines"
    ),
    keep_repeated: bool = typer.Option(
        False, "--keep-repeated", help="Keep lines repeated more than twice"
    ),
    quick: bool = typer.Option(
        False, "--quick", help="Only normalize whitespace and strip PDF artifacts"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (default: ./chunkforge.yaml)"
    ),
) -> None:
    """Clean and normalize extracted text.

    Examples:
        # Preview the cleaned text
        chunkforge clean resume.txt

        # OCR output, saved to a file
        chunkforge clean scan.txt --fix-ocr -o clean.txt

        # Cheap pass only
        chunkforge clean dump.txt --quick
    """
    cmd = CleanCommand()
    exit_code = cmd.execute(
        input_file,
        output,
        fix_ocr,
        keep_links,
        keep_page_numbers,
        keep_repeated,
        quick,
        config_path,
    )
    if exit_code != 0:
        raise typer.Exit(code=exit_code)

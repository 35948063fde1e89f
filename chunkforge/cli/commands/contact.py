"""Contact command - Extract contact details from a resume."""

from __future__ import annotations

from pathlib import Path

import typer

from chunkforge.cli.core.command_base import ChunkForgeCommand
from chunkforge.ingest.contact_info import extract_contact_info


class ContactCommand(ChunkForgeCommand):
    """Print name, email, phone and skills as JSON."""

    def execute(self, input_file: Path) -> int:
        try:
            text = self.read_input(input_file)
            self.print_json(extract_contact_info(text).to_dict())
            return 0
        except Exception as e:
            return self.handle_error(e, f"While reading {input_file.name}")


# Typer command wrapper
def command(
    input_file: Path = typer.Argument(..., help="Resume text file"),
) -> None:
    """Extract contact information (name, email, phone, skills) as JSON.

    Examples:
        chunkforge contact resume.txt
    """
    cmd = ContactCommand()
    exit_code = cmd.execute(input_file)
    if exit_code != 0:
        raise typer.Exit(code=exit_code)

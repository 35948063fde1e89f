"""CLI commands.

Each module exposes a Command class with ``execute()`` and a typer
``command`` function registered by ``chunkforge.cli.main``.
"""

from chunkforge.cli.commands.chunk import command as chunk_command
from chunkforge.cli.commands.classify import command as classify_command
from chunkforge.cli.commands.clean import command as clean_command
from chunkforge.cli.commands.contact import command as contact_command
from chunkforge.cli.commands.stats import command as stats_command

__all__ = [
    "chunk_command",
    "classify_command",
    "clean_command",
    "contact_command",
    "stats_command",
]

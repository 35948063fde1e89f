"""Console output helpers.

The shared rich console, the --verbose flag, and ErrorRenderer, which
turns any exception into a panel titled with its error code:

    +-------- Error: CF-PROC-002 --------+
    | While chunking notes.txt           |
    |                                    |
    | Could not create meaningful chunks |
    |                                    |
    | Why it happened:                   |
    |   Every block was noise or ...     |
    |                                    |
    | How to fix:                        |
    |   - Lower min_chunk_size ...       |
    +------------------------------------+
"""

from __future__ import annotations

import traceback
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from chunkforge.core.exceptions import get_error_info, get_root_cause

_console: Console | None = None
_verbose_mode: bool = False


def get_console() -> Console:
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_verbose_mode(enabled: bool) -> None:
    """Show full tracebacks under error panels (--verbose)."""
    global _verbose_mode
    _verbose_mode = enabled


def is_verbose_mode() -> bool:
    return _verbose_mode


def tip(message: str, console: Optional[Console] = None) -> None:
    (console or get_console()).print(f"  [dim]Tip: {message}[/dim]")


class ErrorRenderer:
    """Renders exceptions as "Why it happened" / "How to fix" panels."""

    @classmethod
    def render(
        cls,
        exc: BaseException,
        context: str = "",
        console: Optional[Console] = None,
        show_traceback: Optional[bool] = None,
    ) -> None:
        """Print the error panel, plus the traceback in verbose mode.

        Args:
            exc: Exception to render
            context: Leading line such as "While chunking resume.txt"
            console: Target console; defaults to the shared one
            show_traceback: Overrides the --verbose setting when not None
        """
        out = console or get_console()
        info = get_error_info(exc)

        root = get_root_cause(exc)
        root_message = str(root) if root is not exc else ""
        if root_message == str(exc):
            root_message = ""

        body = cls._panel_body(
            str(exc), context, info["why_it_happened"], info["how_to_fix"], root_message
        )
        out.print(
            Panel(
                body,
                title=f"[bold red]Error: {info['error_code']}[/bold red]",
                border_style="red",
                padding=(1, 2),
            )
        )

        verbose = is_verbose_mode() if show_traceback is None else show_traceback
        if verbose:
            cls._print_traceback(exc, out)

    @staticmethod
    def _panel_body(
        message: str,
        context: str,
        why: str,
        fixes: List[str],
        root_message: str,
    ) -> Text:
        body = Text()
        if context:
            body.append(f"{context}\n\n", style="dim")
        body.append(f"{message}\n\n", style="bold red")
        if root_message:
            body.append("Root cause: ", style="bold yellow")
            body.append(f"{root_message}\n\n", style="yellow")
        body.append("Why it happened:\n", style="bold cyan")
        body.append(f"  {why}\n\n", style="cyan")
        body.append("How to fix:\n", style="bold green")
        for fix in fixes:
            body.append(f"  - {fix}\n", style="green")
        return body

    @staticmethod
    def _print_traceback(exc: BaseException, out: Console) -> None:
        lines = traceback.format_exception(type(exc), exc, exc.__traceback__)
        out.print()
        out.print("[dim]--- Traceback (--verbose mode) ---[/dim]")
        out.print("".join(lines), style="dim", markup=False, highlight=False)

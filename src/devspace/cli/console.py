"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of Rich so the
bootstrap paths (``--help``, ``--version``) and error reporting keep
working even when Rich is not installed.
"""

from __future__ import annotations

import sys
import traceback
from typing import Any

from devspace.exceptions import DevSpaceError


def _load_rich_console_class() -> type[Any] | None:
    """Return ``rich.console.Console`` or ``None`` when Rich is missing."""
    try:
        from rich.console import Console
    except ModuleNotFoundError:
        return None
    return Console


def get_rich_console() -> Any | None:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    if console_class is None:
        return None
    return console_class(stderr=True, highlight=False, soft_wrap=True)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain stderr print."""
        rich_console = get_rich_console()
        if rich_console is None:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects)

    def print_error(self, exc: BaseException, *, verbose: bool = False) -> None:
        """Render *exc* for the user.

        Terse mode prints one ``Error:`` line (plus a hint for devspace
        errors).  Verbose mode prints the full traceback including the
        ``__cause__`` chain.
        """
        if verbose:
            self._print_traceback(exc)
            return

        message = str(exc) or type(exc).__name__
        hint = exc.hint if isinstance(exc, DevSpaceError) else None
        rich_console = get_rich_console()
        if rich_console is None:
            print(f"Error: {message}", file=sys.stderr)
            if hint:
                print(f"Hint: {hint}", file=sys.stderr)
            return

        from rich.markup import escape

        rich_console.print(f"[bold red]Error:[/bold red] {escape(message)}")
        if hint:
            rich_console.print(f"[yellow]Hint:[/yellow] {escape(hint)}")

    @staticmethod
    def _print_traceback(exc: BaseException) -> None:
        rich_console = get_rich_console()
        if rich_console is None:
            traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)
            return

        from rich.traceback import Traceback

        rich_console.print(
            Traceback.from_exception(type(exc), exc, exc.__traceback__, show_locals=False),
        )


console = _ConsoleProxy()

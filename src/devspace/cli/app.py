"""CLI application entry point and execution governor for devspace.

This module is the **sole error boundary** and the only place that
translates outcomes into process exit codes.

Flow of one invocation
----------------------
1. Build the command tree once and stamp the build version on the root.
2. Parse the command line into the shared :class:`GlobalFlags`.
3. Run the ordered startup steps (log level, version check, config).
4. Run the selected command body.
5. Report the outcome to analytics exactly once, success or failure.
6. Render a command error tersely, or with full detail under
   ``--debug``, and map it to a non-zero exit code.

Unexpected exceptions are *panics*: they are forwarded to analytics by
:func:`report_panics` and then handled by :func:`execute`.
"""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

from devspace.cli import exit_codes
from devspace.cli.command import CommandContext, CommandNode, build_parser, help_text, selected_node
from devspace.cli.console import console
from devspace.cli.flags import GlobalFlags
from devspace.cli.registry import build_root_command
from devspace.cli.startup import Startup, run_startup
from devspace.core.protocols import AnalyticsReporter, UpgradeSource
from devspace.exceptions import DevSpaceError
from devspace.infra.analytics import load_analytics
from devspace.infra.config_loader import home_directory
from devspace.infra.upgrade import DistributionUpgradeSource
from devspace.utils.log import ensure_configured, get_logger

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------

@dataclass
class Runtime:
    """External collaborators used by one invocation."""

    upgrade: UpgradeSource
    analytics: AnalyticsReporter
    environ: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))
    home_dir: Callable[[], Path] = home_directory

    @classmethod
    def default(cls) -> Runtime:
        return cls(upgrade=DistributionUpgradeSource(), analytics=load_analytics())


@contextmanager
def report_panics(analytics: AnalyticsReporter) -> Iterator[None]:
    """Forward any unexpected exception to *analytics*, then re-raise it."""
    try:
        yield
    except Exception as exc:
        try:
            analytics.report_panic(exc)
        except Exception:  # noqa: BLE001
            logger.debug("analytics.report_panic failed", exc_info=True)
        raise


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def _parse(parser: argparse.ArgumentParser, argv: list[str] | None) -> argparse.Namespace | None:
    """Parse *argv*; ``None`` means ``--help``/``--version`` already answered."""
    try:
        return parser.parse_args(argv)
    except SystemExit as exc:
        if exc.code in (0, None):
            return None
        raise


def _run(
    root: CommandNode,
    flags: GlobalFlags,
    argv: list[str] | None,
    runtime: Runtime,
) -> DevSpaceError | None:
    """Parse, start up and dispatch; return the command error, if any."""
    try:
        namespace = _parse(build_parser(root), argv)
        if namespace is None:
            return None
        flags.update_from(namespace)

        settings = run_startup(
            Startup(
                flags=flags,
                upgrade=runtime.upgrade,
                environ=runtime.environ,
                home_dir=runtime.home_dir,
            )
        )

        node = selected_node(namespace)
        if node.action is None:
            sys.stdout.write(help_text(namespace))
            return None
        node.action(
            CommandContext(path=node.path, args=namespace, flags=flags, settings=settings),
        )
    except DevSpaceError as exc:
        return exc
    return None


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None, *, runtime: Runtime | None = None) -> int:
    """Run the devspace CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.
    runtime:
        Collaborators to use.  Defaults to the installed ones.

    Returns
    -------
    int
        OS process exit code.
    """
    ensure_configured()
    runtime = runtime or Runtime.default()

    flags = GlobalFlags()
    root = build_root_command(flags)
    root.version = runtime.upgrade.get_version()

    with report_panics(runtime.analytics):
        error = _run(root, flags, argv, runtime)

    runtime.analytics.send_command_event(error)

    if error is None:
        return exit_codes.SUCCESS
    console.print_error(error, verbose=flags.debug)
    return exit_codes.GENERAL_ERROR


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def execute() -> None:
    """Top-level entry invoked by the ``devspace`` console script.

    Wraps :func:`main` and is the only place that terminates the
    process.
    """
    try:
        code = main()
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
    sys.exit(code)

"""Global flags shared by every devspace command.

One :class:`GlobalFlags` instance is created per invocation and handed
by reference to every command factory.  Argument parsing writes into it
once; afterwards everything downstream only reads it.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field, fields

from devspace.exceptions import UsageError

VARS_DEST: str = "vars"


def vars_dest(depth: int) -> str:
    """Namespace attribute holding the ``--var`` values given at *depth*.

    argparse copies a subparser's namespace over its parent's, so each
    parser level keeps its own list and :meth:`GlobalFlags.update_from`
    joins them root first.
    """
    return VARS_DEST if depth == 0 else f"{VARS_DEST}_at_{depth}"


def _vars_depth(attribute: str) -> int | None:
    if attribute == VARS_DEST:
        return 0
    prefix = f"{VARS_DEST}_at_"
    if attribute.startswith(prefix) and attribute[len(prefix):].isdigit():
        return int(attribute[len(prefix):])
    return None


@dataclass(eq=False)
class GlobalFlags:
    silent: bool = False
    debug: bool = False
    no_warn: bool = False
    namespace: str | None = None
    kube_context: str | None = None
    profile: str | None = None
    config_path: str | None = None
    vars: list[str] = field(default_factory=list)

    def update_from(self, namespace: argparse.Namespace) -> None:
        """Copy parsed global options from *namespace* into this record."""
        for flag in fields(self):
            if flag.name != VARS_DEST and hasattr(namespace, flag.name):
                setattr(self, flag.name, getattr(namespace, flag.name))

        levels = sorted(
            (depth, values)
            for attribute, values in vars(namespace).items()
            if (depth := _vars_depth(attribute)) is not None
        )
        if levels:
            self.vars = [raw for _, values in levels for raw in values or ()]

    def parsed_vars(self) -> dict[str, str]:
        """Return ``--var KEY=VALUE`` overrides as a dict.

        Raises
        ------
        UsageError
            If an entry has no ``=`` or an empty key.
        """
        result: dict[str, str] = {}
        for raw in self.vars:
            key, sep, value = raw.partition("=")
            if not sep or not key.strip():
                raise UsageError(
                    f"Invalid --var {raw!r}",
                    hint="Use the form --var NAME=VALUE",
                )
            result[key.strip()] = value
        return result


def add_global_arguments(parser: argparse.ArgumentParser, *, depth: int = 0) -> None:
    """Register the global options on *parser*.

    Subcommand parsers (``depth > 0``) suppress their defaults so a flag
    given before the subcommand name is not reset by the subparser.
    """

    def default(value: object) -> object:
        return argparse.SUPPRESS if depth else value

    group = parser.add_argument_group("global options")
    group.add_argument(
        "--silent",
        action="store_true",
        default=default(False),
        help="Run in silent mode and suppress all log output except fatal errors",
    )
    group.add_argument(
        "--debug",
        action="store_true",
        default=default(False),
        help="Print the full error trace if an error occurs",
    )
    group.add_argument(
        "--no-warn",
        dest="no_warn",
        action="store_true",
        default=default(False),
        help="Do not warn when deploying into a different namespace or kube-context than before",
    )
    group.add_argument(
        "-n",
        "--namespace",
        default=default(None),
        help="The kubernetes namespace to use",
    )
    group.add_argument(
        "--kube-context",
        dest="kube_context",
        default=default(None),
        help="The kubernetes context to use",
    )
    group.add_argument(
        "-p",
        "--profile",
        default=default(None),
        help="The devspace profile to use (if there is any)",
    )
    group.add_argument(
        "--var",
        dest=vars_dest(depth),
        action="append",
        default=default([]),
        metavar="NAME=VALUE",
        help="Variable to override during execution (repeatable)",
    )
    group.add_argument(
        "--config",
        dest="config_path",
        default=default(None),
        metavar="PATH",
        help="Config file to use instead of ~/.devspace",
    )

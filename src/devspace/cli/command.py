"""Command tree primitives and their mapping onto argparse.

A :class:`CommandNode` is a named unit of CLI behaviour with an optional
action and any number of children.  The tree is assembled once by the
registry, then turned into a single :class:`argparse.ArgumentParser` by
:func:`build_parser`.
"""

from __future__ import annotations

import argparse
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import NoReturn

from devspace.cli.flags import GlobalFlags, add_global_arguments
from devspace.core.settings import Settings
from devspace.exceptions import UsageError

_NODE_DEST = "_devspace_node"
_PARSER_DEST = "_devspace_parser"


@dataclass(frozen=True)
class CommandContext:
    """Everything a command body receives."""

    path: tuple[str, ...]
    args: argparse.Namespace
    flags: GlobalFlags
    settings: Settings


Action = Callable[[CommandContext], None]
Configure = Callable[[argparse.ArgumentParser], None]


@dataclass(eq=False)
class CommandNode:
    """A named, described command with optional body and children.

    Sibling names are unique and a node belongs to at most one parent,
    so the tree stays acyclic.  Violations raise :class:`ValueError`
    while the tree is assembled.
    """

    name: str
    short: str
    long: str = ""
    action: Action | None = None
    configure: Configure | None = None
    flags: GlobalFlags | None = None
    children: list[CommandNode] = field(default_factory=list)
    version: str = ""
    parent: CommandNode | None = field(default=None, repr=False)

    def add_command(self, *nodes: CommandNode) -> None:
        for node in nodes:
            if node.parent is not None:
                raise ValueError(f"command {node.name!r} is already attached to {node.parent.name!r}")
            if node is self or node in self.ancestors():
                raise ValueError(f"command {node.name!r} cannot be its own descendant")
            if any(child.name == node.name for child in self.children):
                raise ValueError(f"duplicate command {node.name!r} under {self.name!r}")
            node.parent = self
            self.children.append(node)

    def ancestors(self) -> Iterator[CommandNode]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    @property
    def path(self) -> tuple[str, ...]:
        """Command names from below the root down to this node."""
        names = [self.name, *(n.name for n in self.ancestors())]
        return tuple(reversed(names[:-1]))

    def walk(self) -> Iterator[CommandNode]:
        """Yield this node and every descendant, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, *names: str) -> CommandNode | None:
        node: CommandNode | None = self
        for name in names:
            if node is None:
                return None
            node = next((c for c in node.children if c.name == name), None)
        return node


# ---------------------------------------------------------------------------
# argparse mapping
# ---------------------------------------------------------------------------

class CommandParser(argparse.ArgumentParser):
    """Argument parser that raises :class:`UsageError` instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(
            f"{self.prog}: {message}",
            hint=f"Run '{self.prog} --help' for usage.",
        )


def build_parser(root: CommandNode) -> CommandParser:
    """Translate the command tree rooted at *root* into an argparse parser."""
    parser = CommandParser(
        prog=root.name,
        description=root.long or root.short,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {root.version or 'dev'}",
    )
    add_global_arguments(parser)
    _attach(parser, root)
    return parser


def _attach(parser: argparse.ArgumentParser, node: CommandNode, depth: int = 0) -> None:
    parser.set_defaults(**{_NODE_DEST: node, _PARSER_DEST: parser})
    if node.configure is not None:
        node.configure(parser)
    if not node.children:
        return

    subparsers = parser.add_subparsers(title="commands", metavar="<command>")
    for child in node.children:
        sub = subparsers.add_parser(
            child.name,
            help=child.short,
            description=child.long or child.short,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        add_global_arguments(sub, depth=depth + 1)
        _attach(sub, child, depth + 1)


def selected_node(namespace: argparse.Namespace) -> CommandNode:
    """Return the command node chosen by the parsed command line."""
    return getattr(namespace, _NODE_DEST)


def help_text(namespace: argparse.Namespace) -> str:
    """Render the ``--help`` output of the command chosen in *namespace*."""
    parser: argparse.ArgumentParser = getattr(namespace, _PARSER_DEST)
    return parser.format_help()

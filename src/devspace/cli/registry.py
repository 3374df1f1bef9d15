"""Command registry: assembles the full devspace command tree.

The list of subcommands is fixed and known statically.  Every factory
receives the same :class:`~devspace.cli.flags.GlobalFlags` instance, so
all commands observe one consistent set of global options.
"""

from __future__ import annotations

from devspace.cli import commands
from devspace.cli.command import CommandNode
from devspace.cli.commands import CommandFactory
from devspace.cli.flags import GlobalFlags

ROOT_NAME: str = "devspace"

ROOT_SHORT: str = "Welcome to the DevSpace!"

ROOT_LONG: str = """\
DevSpace accelerates developing, deploying and debugging applications
with Docker and Kubernetes. Get started by running the init command in
one of your projects:

    devspace init"""

SUBCOMMAND_FACTORIES: tuple[CommandFactory, ...] = (
    # Resource lifecycle
    commands.new_add_command,
    commands.new_cleanup_command,
    commands.new_connect_command,
    commands.new_create_command,
    commands.new_list_command,
    commands.new_remove_command,
    commands.new_reset_command,
    commands.new_set_command,
    commands.new_status_command,
    commands.new_use_command,
    commands.new_update_command,
    # Workflow
    commands.new_init_command,
    commands.new_dev_command,
    commands.new_build_command,
    commands.new_sync_command,
    commands.new_purge_command,
    commands.new_upgrade_command,
    commands.new_deploy_command,
    commands.new_enter_command,
    commands.new_login_command,
    commands.new_analyze_command,
    commands.new_logs_command,
    commands.new_open_command,
    commands.new_ui_command,
    commands.new_run_command,
    commands.new_attach_command,
)


def build_root_command(
    flags: GlobalFlags,
    factories: tuple[CommandFactory, ...] = SUBCOMMAND_FACTORIES,
) -> CommandNode:
    """Build the root command with every subcommand attached.

    Construction is pure assembly.  A factory that fails, or two
    factories producing the same name, is a programming error and
    raises immediately.
    """
    root = CommandNode(
        name=ROOT_NAME,
        short=ROOT_SHORT,
        long=ROOT_LONG,
        flags=flags,
    )
    root.add_command(*(factory(flags) for factory in factories))
    return root

"""Factories for every devspace subcommand.

Each ``new_<name>_command`` factory takes the shared
:class:`~devspace.cli.flags.GlobalFlags` and returns a
:class:`~devspace.cli.command.CommandNode`.  This module only declares
names, help texts and arguments; the work behind a leaf command is done
by a plugin registered in the ``devspace.commands`` entry-point group
under the command's dotted path (``deploy``, ``add.port``).
"""

from __future__ import annotations

import argparse
from collections.abc import Callable

from devspace.cli.command import CommandContext, CommandNode, Configure
from devspace.cli.flags import GlobalFlags
from devspace.exceptions import CommandUnavailableError
from devspace.infra.plugins import COMMANDS_GROUP, load_plugin
from devspace.utils.log import get_logger

logger = get_logger(__name__)

CommandFactory = Callable[[GlobalFlags], CommandNode]


# ---------------------------------------------------------------------------
# Plugin dispatch
# ---------------------------------------------------------------------------

def plugin_key(path: tuple[str, ...]) -> str:
    return ".".join(path)


def run_plugin(ctx: CommandContext) -> None:
    """Hand *ctx* to the installed implementation of the command."""
    key = plugin_key(ctx.path)
    implementation = load_plugin(COMMANDS_GROUP, key)
    if implementation is None:
        raise CommandUnavailableError(
            f"'devspace {' '.join(ctx.path)}' is not available in this installation.",
            hint=f"Install a plugin that registers {key!r} in the {COMMANDS_GROUP!r} entry-point group.",
        )
    logger.debug("command.dispatch", command=key)
    implementation(ctx)


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def _leaf(
    name: str,
    short: str,
    flags: GlobalFlags,
    *,
    long: str = "",
    options: Configure | None = None,
) -> CommandNode:
    def configure(parser: argparse.ArgumentParser) -> None:
        if options is not None:
            options(parser)
        parser.add_argument("args", nargs="*", help="Arguments passed to the command")

    return CommandNode(
        name=name,
        short=short,
        long=long,
        action=run_plugin,
        configure=configure,
        flags=flags,
    )


def _group(
    name: str,
    short: str,
    flags: GlobalFlags,
    children: dict[str, str],
    *,
    long: str = "",
) -> CommandNode:
    node = CommandNode(name=name, short=short, long=long, flags=flags)
    node.add_command(*(_leaf(child, help_, flags) for child, help_ in children.items()))
    return node


def _selector_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-c", "--container", help="Container name within the selected pod")
    parser.add_argument("--pod", help="Pod to use")
    parser.add_argument("-l", "--label-selector", dest="label_selector", help="Comma separated key=value selector list")
    parser.add_argument("--pick", action="store_true", help="Select a pod interactively")


# ---------------------------------------------------------------------------
# Resource-lifecycle commands
# ---------------------------------------------------------------------------

def new_add_command(flags: GlobalFlags) -> CommandNode:
    return _group(
        "add",
        "Change the DevSpace configuration",
        flags,
        {
            "deployment": "Add a deployment",
            "image": "Add an image",
            "package": "Add a helm chart",
            "port": "Add a new port forward configuration",
            "provider": "Add a new cloud provider to the configuration",
            "selector": "Add a selector",
            "sync": "Add a sync path",
        },
        long="Adds config sections to devspace.yaml.",
    )


def new_cleanup_command(flags: GlobalFlags) -> CommandNode:
    return _group(
        "cleanup",
        "Clean up resources",
        flags,
        {"images": "Delete all locally created images from docker"},
    )


def new_connect_command(flags: GlobalFlags) -> CommandNode:
    return _group(
        "connect",
        "Connect an external cluster to DevSpace Cloud",
        flags,
        {"cluster": "Connect an existing cluster to DevSpace Cloud"},
    )


def new_create_command(flags: GlobalFlags) -> CommandNode:
    return _group(
        "create",
        "Create spaces in the cloud",
        flags,
        {"space": "Create a new cloud space"},
    )


def new_list_command(flags: GlobalFlags) -> CommandNode:
    return _group(
        "list",
        "List configuration",
        flags,
        {
            "commands": "List all custom DevSpace commands",
            "contexts": "List kubernetes contexts",
            "deployments": "List and show the status of all deployments",
            "packages": "List all added packages",
            "ports": "List port forwarding configurations",
            "profiles": "List all DevSpace profiles",
            "providers": "List all cloud providers",
            "selectors": "List all selectors",
            "spaces": "List all cloud spaces",
            "syncs": "List sync configurations",
            "vars": "List variable values",
        },
    )


def new_remove_command(flags: GlobalFlags) -> CommandNode:
    return _group(
        "remove",
        "Change the DevSpace configuration",
        flags,
        {
            "context": "Remove a kubernetes context",
            "deployment": "Remove one or all deployments from the config",
            "image": "Remove one or all images from the config",
            "package": "Remove a helm chart",
            "port": "Remove port forwarding configuration",
            "provider": "Remove a cloud provider from the configuration",
            "selector": "Remove one or all selectors",
            "space": "Remove a cloud space",
            "sync": "Remove sync paths from the config",
        },
    )


def new_reset_command(flags: GlobalFlags) -> CommandNode:
    return _group(
        "reset",
        "Reset configuration",
        flags,
        {
            "dependencies": "Reset the dependencies cache",
            "key": "Reset a cluster key",
            "vars": "Reset the saved variables",
        },
    )


def new_set_command(flags: GlobalFlags) -> CommandNode:
    return _group(
        "set",
        "Make global configuration changes",
        flags,
        {
            "analytics": "Update analytics settings",
            "var": "Set a variable value",
        },
    )


def new_status_command(flags: GlobalFlags) -> CommandNode:
    return _group(
        "status",
        "Show the current status",
        flags,
        {"sync": "Show the sync status"},
    )


def new_use_command(flags: GlobalFlags) -> CommandNode:
    return _group(
        "use",
        "Use specific config",
        flags,
        {
            "context": "Use a specific kube context",
            "namespace": "Use a specific namespace",
            "profile": "Use a specific DevSpace profile",
            "provider": "Change the default cloud provider",
            "space": "Use an existing space for the current configuration",
        },
    )


def new_update_command(flags: GlobalFlags) -> CommandNode:
    return _group(
        "update",
        "Update the current config",
        flags,
        {
            "config": "Convert the active config to the current config version",
            "dependencies": "Force update all dependencies",
        },
    )


# ---------------------------------------------------------------------------
# Workflow commands
# ---------------------------------------------------------------------------

def new_init_command(flags: GlobalFlags) -> CommandNode:
    def options(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("-r", "--reconfigure", action="store_true", help="Change existing configuration")
        parser.add_argument("--dockerfile", default="./Dockerfile", help="Path to the Dockerfile")
        parser.add_argument("--context", default="", help="Build context path")

    return _leaf(
        "init",
        "Initialize DevSpace in the current folder",
        flags,
        long="Creates a devspace.yaml with the basic configuration for the project.",
        options=options,
    )


def new_dev_command(flags: GlobalFlags) -> CommandNode:
    def options(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("-b", "--force-build", dest="force_build", action="store_true", help="Force rebuild of all images")
        parser.add_argument("-d", "--force-deploy", dest="force_deploy", action="store_true", help="Force redeploy of all deployments")
        parser.add_argument("--skip-pipeline", dest="skip_pipeline", action="store_true", help="Skip build and deployment")
        parser.add_argument("-i", "--interactive", action="store_true", help="Enter an interactive terminal after startup")

    return _leaf(
        "dev",
        "Start the development mode",
        flags,
        long="Builds and deploys the project, then starts port forwarding, sync and log streaming.",
        options=options,
    )


def new_build_command(flags: GlobalFlags) -> CommandNode:
    def options(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("-b", "--force-build", dest="force_build", action="store_true", help="Force rebuild of all images")
        parser.add_argument("--skip-push", dest="skip_push", action="store_true", help="Skip pushing images to the registry")
        parser.add_argument("-t", "--tag", dest="tags", action="append", default=[], help="Tag to apply to built images")

    return _leaf("build", "Build all defined images and push them", flags, options=options)


def new_sync_command(flags: GlobalFlags) -> CommandNode:
    def options(parser: argparse.ArgumentParser) -> None:
        _selector_options(parser)
        parser.add_argument("--local-path", dest="local_path", default=".", help="Local path to sync")
        parser.add_argument("--container-path", dest="container_path", default="", help="Container path to sync")
        parser.add_argument("-e", "--exclude", action="append", default=[], help="Exclude pattern")

    return _leaf(
        "sync",
        "Start a bi-directional sync between a container and a local path",
        flags,
        options=options,
    )


def new_purge_command(flags: GlobalFlags) -> CommandNode:
    def options(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("-d", "--deployments", default="", help="Comma separated deployments to delete")
        parser.add_argument("--all", dest="purge_all", action="store_true", help="Also purge dependencies")

    return _leaf("purge", "Delete deployed resources", flags, options=options)


def new_upgrade_command(flags: GlobalFlags) -> CommandNode:
    def options(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--version", dest="target_version", default="", help="Version to upgrade to")

    return _leaf("upgrade", "Upgrade the DevSpace CLI to the newest version", flags, options=options)


def new_deploy_command(flags: GlobalFlags) -> CommandNode:
    def options(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("-b", "--force-build", dest="force_build", action="store_true", help="Force rebuild of all images")
        parser.add_argument("-d", "--force-deploy", dest="force_deploy", action="store_true", help="Force redeploy of all deployments")
        parser.add_argument("--skip-push", dest="skip_push", action="store_true", help="Skip pushing images to the registry")
        parser.add_argument("--deployments", default="", help="Comma separated deployments to deploy")

    return _leaf(
        "deploy",
        "Deploy the project",
        flags,
        long="Builds images if necessary and deploys the project to the target namespace.",
        options=options,
    )


def new_enter_command(flags: GlobalFlags) -> CommandNode:
    return _leaf("enter", "Open a shell in a container", flags, options=_selector_options)


def new_login_command(flags: GlobalFlags) -> CommandNode:
    def options(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--key", default="", help="Access key to use")
        parser.add_argument("--provider", default="", help="Cloud provider to log into")

    return _leaf("login", "Log into DevSpace Cloud", flags, options=options)


def new_analyze_command(flags: GlobalFlags) -> CommandNode:
    def options(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--wait", action="store_true", help="Wait for pods to become ready")
        parser.add_argument("--timeout", type=int, default=120, help="Seconds to wait for pods")

    return _leaf(
        "analyze",
        "Analyze a kubernetes namespace and check for potential problems",
        flags,
        options=options,
    )


def new_logs_command(flags: GlobalFlags) -> CommandNode:
    def options(parser: argparse.ArgumentParser) -> None:
        _selector_options(parser)
        parser.add_argument("-f", "--follow", action="store_true", help="Attach to the logs afterwards")
        parser.add_argument("--lines", type=int, default=200, help="Max number of lines to print")

    return _leaf("logs", "Print the logs of a pod and attach to it", flags, options=options)


def new_open_command(flags: GlobalFlags) -> CommandNode:
    def options(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--port", type=int, default=None, help="Local port to open")

    return _leaf("open", "Open the space in the browser", flags, options=options)


def new_ui_command(flags: GlobalFlags) -> CommandNode:
    def options(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--port", type=int, default=None, help="Port the UI server listens on")

    return _leaf("ui", "Open the localhost UI in the browser", flags, options=options)


def new_run_command(flags: GlobalFlags) -> CommandNode:
    return _leaf(
        "run",
        "Run a predefined command",
        flags,
        long="Executes a command defined in the commands section of devspace.yaml.",
    )


def new_attach_command(flags: GlobalFlags) -> CommandNode:
    return _leaf("attach", "Attach to a container", flags, options=_selector_options)

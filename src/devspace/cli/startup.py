"""Ordered startup steps run before every command body.

The order is part of the CLI contract and fixed by :data:`STARTUP_STEPS`:

1. apply the log level chosen by ``--silent`` / ``--debug``;
2. check for a newer release and warn (before any command output);
3. resolve the configuration, so command bodies can rely on it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from devspace.cli.flags import GlobalFlags
from devspace.core.models import ConfigResolution, ConfigStatus, Disposition, VersionCheck
from devspace.core.protocols import UpgradeSource
from devspace.core.settings import Settings
from devspace.core.version_check import VersionNotifier
from devspace.infra.config_loader import home_directory, resolve_config
from devspace.utils.log import get_logger, set_level

logger = get_logger(__name__)


@dataclass
class Startup:
    """State threaded through the startup steps of one invocation."""

    flags: GlobalFlags
    upgrade: UpgradeSource
    environ: Mapping[str, str]
    home_dir: Callable[[], Path] = home_directory
    version_check: VersionCheck | None = None
    config: ConfigResolution | None = None
    completed: list[str] = field(default_factory=list)

    @property
    def settings(self) -> Settings:
        if self.config is None:
            return Settings(environ=self.environ)
        return self.config.settings


def apply_log_level(startup: Startup) -> None:
    if startup.flags.silent:
        set_level(logging.CRITICAL)
    elif startup.flags.debug:
        set_level(logging.DEBUG)
    else:
        set_level(logging.INFO)


def notify_newer_version(startup: Startup) -> None:
    check = VersionNotifier(startup.upgrade).check()
    startup.version_check = check
    if check.warning is not None:
        logger.warning(check.warning)
    else:
        logger.debug("version.check", status=check.status.value)


def load_config(startup: Startup) -> None:
    resolution = resolve_config(
        startup.flags.config_path,
        environ=startup.environ,
        home_dir=startup.home_dir,
    )
    startup.config = resolution

    if resolution.disposition is Disposition.FATAL and resolution.error is not None:
        raise resolution.error
    if resolution.status is ConfigStatus.LOADED:
        logger.info("Using config file", path=str(resolution.path))
    elif resolution.status is ConfigStatus.MALFORMED:
        logger.warning(
            "Ignoring malformed config file",
            path=str(resolution.path),
            error=str(resolution.error),
        )


STARTUP_STEPS: tuple[Callable[[Startup], None], ...] = (
    apply_log_level,
    notify_newer_version,
    load_config,
)


def run_startup(startup: Startup) -> Settings:
    """Run every startup step in order and return the resolved settings."""
    for step in STARTUP_STEPS:
        step(startup)
        startup.completed.append(step.__name__)
    return startup.settings

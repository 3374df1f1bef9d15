"""Domain models for devspace startup.

The startup steps never signal policy through logging alone: each one
returns a value object carrying a :class:`Disposition`, so callers and
tests can assert on *what the policy decided* rather than on side
channels.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path

from devspace.core.settings import Settings
from devspace.exceptions import DevSpaceError


# ---------------------------------------------------------------------------
# Policy
# ---------------------------------------------------------------------------

class Disposition(enum.Enum):
    """How startup continues after a step."""

    PROCEED = "proceed"
    """The step succeeded."""

    PROCEED_WITH_DEFAULTS = "proceed-with-defaults"
    """The step failed recoverably; defaults stand in for its result."""

    PROCEED_SILENTLY = "proceed-silently"
    """The step was skipped; the user is not told."""

    FATAL = "fatal"
    """Startup must not continue."""


# ---------------------------------------------------------------------------
# Version check
# ---------------------------------------------------------------------------

class VersionStatus(enum.Enum):
    NEWER_AVAILABLE = "newer-available"
    UP_TO_DATE = "up-to-date"
    SKIPPED_DEV_BUILD = "skipped-dev-build"
    LOOKUP_FAILED = "lookup-failed"
    UNPARSEABLE = "unparseable"


UPGRADE_COMMAND: str = "devspace upgrade"


@dataclass(frozen=True, slots=True)
class VersionCheck:
    """Outcome of one version-freshness check."""

    status: VersionStatus

    current: str | None = None
    """Version of the running build, ``None`` when undeterminable."""

    latest: str | None = None
    """Latest published stable version, ``None`` when undeterminable."""

    @property
    def disposition(self) -> Disposition:
        if self.status in (VersionStatus.NEWER_AVAILABLE, VersionStatus.UP_TO_DATE):
            return Disposition.PROCEED
        return Disposition.PROCEED_SILENTLY

    @property
    def warning(self) -> str | None:
        """User-facing upgrade notice, or ``None`` when nothing to say."""
        if self.status is not VersionStatus.NEWER_AVAILABLE:
            return None
        latest = (self.latest or "").lstrip("v")
        return (
            f"There is a newer version of DevSpace: v{latest}. "
            f"Run `{UPGRADE_COMMAND}` to upgrade to the newest version."
        )


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

class ConfigStatus(enum.Enum):
    LOADED = "loaded"
    NOT_FOUND = "not-found"
    MALFORMED = "malformed"
    HOME_UNAVAILABLE = "home-unavailable"


_CONFIG_DISPOSITIONS: dict[ConfigStatus, Disposition] = {
    ConfigStatus.LOADED: Disposition.PROCEED,
    ConfigStatus.NOT_FOUND: Disposition.PROCEED_WITH_DEFAULTS,
    ConfigStatus.MALFORMED: Disposition.PROCEED_WITH_DEFAULTS,
    ConfigStatus.HOME_UNAVAILABLE: Disposition.FATAL,
}


@dataclass(frozen=True, slots=True)
class ConfigResolution:
    """Outcome of config resolution for one run.

    ``settings`` is always usable: on any non-fatal outcome it holds the
    defaults plus environment overrides.
    """

    status: ConfigStatus
    settings: Settings = field(default_factory=Settings)

    path: Path | None = None
    """The file that was chosen (or would have been), if any."""

    error: DevSpaceError | None = None
    """The parse or lookup error behind a MALFORMED/HOME_UNAVAILABLE status."""

    @property
    def disposition(self) -> Disposition:
        return _CONFIG_DISPOSITIONS[self.status]

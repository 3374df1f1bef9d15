"""Core layer: startup policy and configuration values.

Rules
-----
* No ``print()`` calls and no logging.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
"""

from devspace.core.models import (
    ConfigResolution,
    ConfigStatus,
    Disposition,
    VersionCheck,
    VersionStatus,
)
from devspace.core.protocols import AnalyticsReporter, UpgradeSource
from devspace.core.settings import Settings
from devspace.core.version_check import VersionNotifier

__all__: list[str] = [
    "AnalyticsReporter",
    "ConfigResolution",
    "ConfigStatus",
    "Disposition",
    "Settings",
    "UpgradeSource",
    "VersionCheck",
    "VersionNotifier",
    "VersionStatus",
]

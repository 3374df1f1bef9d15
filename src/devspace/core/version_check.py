"""Core version-freshness check.

Compares the running build against the latest published stable version.
It depends on an :class:`~devspace.core.protocols.UpgradeSource`
injected at construction time and never raises: every failure mode is
folded into a :class:`~devspace.core.models.VersionCheck` status.

Guarantees
----------
* No output: rendering the warning is the caller's job.
* No lookup is attempted for development builds (empty version).
* Nothing is cached across calls.
* Build metadata (``+build.5``) never affects precedence.
"""

from __future__ import annotations

import semver

from devspace.core.models import VersionCheck, VersionStatus
from devspace.core.protocols import UpgradeSource


def parse_version(raw: str) -> semver.Version | None:
    """Parse *raw* as a semantic version, ``None`` when it is not one.

    A leading ``v`` is accepted and a missing minor or patch part is
    read as ``0`` (``v1.2`` is ``1.2.0``).
    """
    try:
        text = raw.strip()
        if text[:1] in ("v", "V"):
            text = text[1:]
        return semver.Version.parse(text, optional_minor_and_patch=True)
    except (ValueError, TypeError, AttributeError):
        return None


class VersionNotifier:
    """Decides whether the user should be told to upgrade.

    Parameters
    ----------
    source:
        Any object satisfying the :class:`UpgradeSource` protocol.
    """

    def __init__(self, source: UpgradeSource) -> None:
        self._source: UpgradeSource = source

    def check(self) -> VersionCheck:
        current = self._source.get_version()
        if not current:
            return VersionCheck(VersionStatus.SKIPPED_DEV_BUILD)

        try:
            latest = self._source.check_for_newer_version()
        except Exception:  # noqa: BLE001
            # The lookup must never fail the primary command.
            return VersionCheck(VersionStatus.LOOKUP_FAILED, current=current)

        current_version = parse_version(current)
        latest_version = parse_version(latest)
        if current_version is None or latest_version is None:
            return VersionCheck(VersionStatus.UNPARSEABLE, current=current, latest=latest)

        if latest_version.compare(current_version) > 0:
            return VersionCheck(VersionStatus.NEWER_AVAILABLE, current=current, latest=latest)
        return VersionCheck(VersionStatus.UP_TO_DATE, current=current, latest=latest)

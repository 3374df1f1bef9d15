"""Infrastructure implementation of :class:`~devspace.core.protocols.UpgradeSource`.

The running version comes from the installed distribution metadata;
running from a source checkout without installing counts as a
development build and yields an empty version.

The latest published version is provided by a plugin registered under
the ``devspace.upgrade`` entry-point group as ``latest``: a callable
taking no arguments and returning a version string.
"""

from __future__ import annotations

from importlib import metadata

from devspace.exceptions import VersionCheckError
from devspace.infra.plugins import UPGRADE_GROUP, load_plugin

DISTRIBUTION_NAME: str = "devspace"


class DistributionUpgradeSource:
    """Concrete :class:`UpgradeSource` backed by package metadata and plugins."""

    def __init__(self, distribution: str = DISTRIBUTION_NAME) -> None:
        self._distribution = distribution

    def get_version(self) -> str:
        try:
            return metadata.version(self._distribution)
        except metadata.PackageNotFoundError:
            return ""

    def check_for_newer_version(self) -> str:
        lookup = load_plugin(UPGRADE_GROUP, "latest")
        if lookup is None:
            raise VersionCheckError("No release source is installed.")

        latest = lookup()
        if not isinstance(latest, str) or not latest.strip():
            raise VersionCheckError(
                f"Release source returned no usable version: {latest!r}",
            )
        return latest.strip()

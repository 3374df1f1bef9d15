"""Infrastructure: entry-point plugin discovery.

Command bodies, the latest-version lookup and the analytics backend are
shipped by separate distributions and found through
:mod:`importlib.metadata` entry points.

Rules
-----
* Plugins are loaded lazily, only when first needed.
* Import failures of a plugin surface as
  :class:`~devspace.exceptions.CommandUnavailableError`.
"""

from __future__ import annotations

from importlib import metadata
from typing import Any

from devspace.exceptions import CommandUnavailableError

COMMANDS_GROUP: str = "devspace.commands"
UPGRADE_GROUP: str = "devspace.upgrade"
ANALYTICS_GROUP: str = "devspace.analytics"


def find_entry_point(group: str, name: str) -> metadata.EntryPoint | None:
    """Return the entry point *name* in *group*, or ``None``."""
    matches = metadata.entry_points().select(group=group, name=name)
    for entry_point in sorted(matches, key=lambda ep: ep.value):
        return entry_point
    return None


def load_plugin(group: str, name: str) -> Any | None:
    """Load the object behind entry point *name* in *group*.

    Returns ``None`` when no such entry point is installed.
    """
    entry_point = find_entry_point(group, name)
    if entry_point is None:
        return None
    try:
        return entry_point.load()
    except (ImportError, AttributeError) as exc:
        dist = getattr(entry_point, "dist", None)
        dist_name = dist.name if dist is not None else "unknown"
        raise CommandUnavailableError(
            f"Plugin {name!r} from {dist_name} could not be loaded: {exc}",
            hint=f"Reinstall the package that provides it: pip install --force-reinstall {dist_name}",
        ) from exc

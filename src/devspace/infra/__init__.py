"""Infrastructure layer: filesystem, package metadata and plugins.

Every failure that crosses this boundary is either folded into a result
object or raised as a :class:`~devspace.exceptions.DevSpaceError`
subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output beyond structured logging.
"""

from devspace.infra.analytics import LoggingAnalytics, load_analytics
from devspace.infra.config_loader import home_directory, resolve_config
from devspace.infra.upgrade import DistributionUpgradeSource

__all__: list[str] = [
    "DistributionUpgradeSource",
    "LoggingAnalytics",
    "home_directory",
    "load_analytics",
    "resolve_config",
]

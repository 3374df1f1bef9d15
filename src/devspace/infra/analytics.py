"""Infrastructure: analytics reporter selection.

A plugin registered as ``reporter`` in the ``devspace.analytics``
entry-point group supplies the real backend (a zero-argument factory
returning an :class:`~devspace.core.protocols.AnalyticsReporter`).
Without one, events are only written to the debug log.
"""

from __future__ import annotations

from devspace.core.protocols import AnalyticsReporter
from devspace.infra.plugins import ANALYTICS_GROUP, load_plugin
from devspace.utils.log import get_logger

logger = get_logger(__name__)


class LoggingAnalytics:
    """Fallback :class:`AnalyticsReporter` that records to the debug log."""

    def report_panic(self, exc: BaseException) -> None:
        logger.debug("analytics.panic", error=f"{type(exc).__name__}: {exc}")

    def send_command_event(self, error: BaseException | None) -> None:
        logger.debug(
            "analytics.command",
            success=error is None,
            error=str(error) if error is not None else None,
        )


def load_analytics() -> AnalyticsReporter:
    """Return the installed analytics backend, or :class:`LoggingAnalytics`."""
    factory = load_plugin(ANALYTICS_GROUP, "reporter")
    if factory is None:
        return LoggingAnalytics()
    return factory()

"""Protocols (interfaces) consumed by the devspace core.

These define the contracts that infrastructure adapters and plugins
must satisfy.  Core and CLI code depend ONLY on these protocols, never
on concrete implementations, so tests can inject fakes.
"""

from __future__ import annotations

from typing import Protocol


class UpgradeSource(Protocol):
    """Contract for version lookups used by the startup version check."""

    def get_version(self) -> str:
        """Return the version embedded in the running build.

        An empty string means a local/development build, for which the
        version check is skipped entirely.
        """
        ...  # pragma: no cover

    def check_for_newer_version(self) -> str:
        """Return the latest published stable version string.

        May block on network I/O under the implementation's own
        timeout policy.

        Raises
        ------
        VersionCheckError
            When the latest version cannot be determined.  Callers must
            also tolerate any other exception.
        """
        ...  # pragma: no cover


class AnalyticsReporter(Protocol):
    """Contract for usage analytics backends."""

    def report_panic(self, exc: BaseException) -> None:
        """Record an unexpected crash before the process exits."""
        ...  # pragma: no cover

    def send_command_event(self, error: BaseException | None) -> None:
        """Record the outcome of one invocation (``None`` on success)."""
        ...  # pragma: no cover

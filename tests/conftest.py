"""Shared pytest fixtures and configuration for the devspace test suite.

Guidelines
----------
* No internet access in any test.
* Collaborators (upgrade source, analytics, home directory) are faked at
  the protocol boundary.
* Tests must not read the real ``~/.devspace``.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from devspace.cli.app import Runtime
from devspace.exceptions import VersionCheckError
from devspace.utils.log import configure_logging


class FakeUpgradeSource:
    """In-memory :class:`UpgradeSource` that counts lookups."""

    def __init__(self, current: str = "", latest: str | Exception = "") -> None:
        self.current = current
        self.latest = latest
        self.lookups = 0

    def get_version(self) -> str:
        return self.current

    def check_for_newer_version(self) -> str:
        self.lookups += 1
        if isinstance(self.latest, Exception):
            raise self.latest
        return self.latest


class FakeAnalytics:
    """Records every analytics call."""

    def __init__(self) -> None:
        self.events: list[BaseException | None] = []
        self.panics: list[BaseException] = []

    def report_panic(self, exc: BaseException) -> None:
        self.panics.append(exc)

    def send_command_event(self, error: BaseException | None) -> None:
        self.events.append(error)


@pytest.fixture(autouse=True)
def _logging() -> Iterator[None]:
    configure_logging()
    yield
    structlog.reset_defaults()


@pytest.fixture()
def home(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture()
def upgrade() -> FakeUpgradeSource:
    return FakeUpgradeSource(current="", latest=VersionCheckError("offline"))


@pytest.fixture()
def analytics() -> FakeAnalytics:
    return FakeAnalytics()


@pytest.fixture()
def runtime(upgrade: FakeUpgradeSource, analytics: FakeAnalytics, home: Path) -> Runtime:
    return Runtime(
        upgrade=upgrade,
        analytics=analytics,
        environ={},
        home_dir=lambda: home,
    )

"""Tests for the ordered startup steps (cli/startup.py)."""

from __future__ import annotations

from pathlib import Path

import pytest

from conftest import FakeUpgradeSource
from devspace.cli.flags import GlobalFlags
from devspace.cli.startup import STARTUP_STEPS, Startup, run_startup
from devspace.core.models import ConfigStatus, VersionStatus
from devspace.exceptions import HomeDirectoryError
from devspace.utils.log import get_logger


def _startup(home: Path, **flag_values: object) -> Startup:
    return Startup(
        flags=GlobalFlags(**flag_values),  # type: ignore[arg-type]
        upgrade=FakeUpgradeSource(current="1.2.0", latest="1.3.0"),
        environ={},
        home_dir=lambda: home,
    )


class TestOrder:
    def test_steps_are_fixed(self) -> None:
        assert [step.__name__ for step in STARTUP_STEPS] == [
            "apply_log_level",
            "notify_newer_version",
            "load_config",
        ]

    def test_run_records_completed_steps(self, home: Path) -> None:
        startup = _startup(home)
        run_startup(startup)

        assert startup.completed == ["apply_log_level", "notify_newer_version", "load_config"]
        assert startup.version_check is not None
        assert startup.version_check.status is VersionStatus.NEWER_AVAILABLE
        assert startup.config is not None
        assert startup.config.status is ConfigStatus.NOT_FOUND

    def test_version_checked_before_fatal_config(self, home: Path) -> None:
        startup = _startup(home)

        def _no_home() -> Path:
            raise HomeDirectoryError("no home")

        startup.home_dir = _no_home

        with pytest.raises(HomeDirectoryError):
            run_startup(startup)
        assert startup.completed == ["apply_log_level", "notify_newer_version"]
        assert startup.version_check is not None


class TestLogLevel:
    @pytest.mark.parametrize(
        ("flag_values", "emitted"),
        [
            ({}, ["info-event", "warning-event", "critical-event"]),
            ({"debug": True}, ["debug-event", "info-event", "warning-event", "critical-event"]),
            ({"silent": True}, ["critical-event"]),
            ({"silent": True, "debug": True}, ["critical-event"]),
        ],
    )
    def test_level_from_flags(
        self, home: Path, flag_values: dict[str, bool], emitted: list[str],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        startup = _startup(home, **flag_values)
        startup.upgrade = FakeUpgradeSource(current="")
        run_startup(startup)
        capsys.readouterr()

        logger = get_logger("devspace.test")
        logger.debug("debug-event")
        logger.info("info-event")
        logger.warning("warning-event")
        logger.critical("critical-event")

        err = capsys.readouterr().err
        for event in ("debug-event", "info-event", "warning-event", "critical-event"):
            assert (event in err) is (event in emitted)


class TestSettings:
    def test_settings_reflect_loaded_file(self, home: Path) -> None:
        (home / ".devspace").write_text("profile: staging\n", encoding="utf-8")

        settings = run_startup(_startup(home))
        assert settings.get("profile") == "staging"

    def test_explicit_config_path_from_flags(self, home: Path, tmp_path: Path) -> None:
        explicit = tmp_path / "cfg.yaml"
        explicit.write_text("profile: explicit\n", encoding="utf-8")
        (home / ".devspace").write_text("profile: home\n", encoding="utf-8")

        settings = run_startup(_startup(home, config_path=str(explicit)))
        assert settings.get("profile") == "explicit"

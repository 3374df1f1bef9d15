"""Tests for config resolution (infra/config_loader.py, core/settings.py).

All files live under ``tmp_path``; the home directory is injected.

Coverage:
* Explicit path wins and bypasses the home directory entirely.
* Home-directory search, including extension variants.
* Missing, malformed and home-less outcomes and their dispositions.
* Environment overrides always beat file values.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from devspace.core.models import ConfigStatus, Disposition
from devspace.core.settings import Settings, env_key
from devspace.exceptions import ConfigError, HomeDirectoryError
from devspace.infra.config_loader import (
    CONFIG_NAME,
    default_candidates,
    home_directory,
    read_config_file,
    resolve_config,
)


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

class TestSettings:
    def test_env_key(self) -> None:
        assert env_key("kube-context") == "KUBE_CONTEXT"
        assert env_key("cloud.provider") == "CLOUD_PROVIDER"

    def test_file_value_beats_default(self) -> None:
        settings = Settings({"namespace": "file"}, defaults={"namespace": "default"})
        assert settings.get("namespace") == "file"

    def test_environment_beats_file(self) -> None:
        settings = Settings({"namespace": "file"}, environ={"NAMESPACE": "env"})
        assert settings.get("namespace") == "env"

    def test_environment_applies_without_file_value(self) -> None:
        settings = Settings(environ={"KUBE_CONTEXT": "minikube"})
        assert settings.get("kube-context") == "minikube"
        assert "kube-context" in settings

    def test_missing_option_uses_call_default(self) -> None:
        assert Settings().get("nothing", "fallback") == "fallback"
        assert "nothing" not in Settings()

    def test_keys_are_normalised(self) -> None:
        settings = Settings({"Kube-Context": "docker-desktop"})
        assert settings.get("kube_context") == "docker-desktop"

    def test_as_dict_reports_effective_values(self) -> None:
        settings = Settings(
            {"namespace": "file", "profile": "dev"},
            environ={"PROFILE": "prod"},
            defaults={"namespace": "default", "analytics": True},
        )
        assert settings.as_dict() == {
            "namespace": "file",
            "analytics": True,
            "profile": "prod",
        }


# ---------------------------------------------------------------------------
# read_config_file
# ---------------------------------------------------------------------------

class TestReadConfigFile:
    def test_reads_yaml_mapping(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "cfg", "namespace: team-a\nanalytics: false\n")
        assert read_config_file(path) == {"namespace": "team-a", "analytics": False}

    def test_reads_json(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "cfg.json", '{"namespace": "team-b"}')
        assert read_config_file(path) == {"namespace": "team-b"}

    def test_empty_file_is_empty_mapping(self, tmp_path: Path) -> None:
        assert read_config_file(_write(tmp_path / "cfg", "")) == {}

    def test_missing_file_raises_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read_config_file(tmp_path / "absent")

    def test_invalid_yaml_raises_config_error(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "cfg", "namespace: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid config file"):
            read_config_file(path)

    def test_non_mapping_raises_config_error(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "cfg", "- a\n- b\n")
        with pytest.raises(ConfigError, match="expected a mapping"):
            read_config_file(path)


# ---------------------------------------------------------------------------
# resolve_config
# ---------------------------------------------------------------------------

class TestResolveConfig:
    def test_explicit_path_ignores_home_file(self, tmp_path: Path, home: Path) -> None:
        _write(home / CONFIG_NAME, "namespace: from-home\n")
        explicit = _write(tmp_path / "explicit.yaml", "namespace: from-explicit\n")

        result = resolve_config(explicit, environ={}, home_dir=lambda: home)

        assert result.status is ConfigStatus.LOADED
        assert result.path == explicit
        assert result.settings.get("namespace") == "from-explicit"

    def test_explicit_path_never_looks_up_home(self, tmp_path: Path) -> None:
        explicit = _write(tmp_path / "explicit.yaml", "namespace: x\n")

        def _no_home() -> Path:
            raise AssertionError("home directory must not be consulted")

        result = resolve_config(explicit, environ={}, home_dir=_no_home)
        assert result.status is ConfigStatus.LOADED

    def test_missing_explicit_path_is_not_found(self, tmp_path: Path, home: Path) -> None:
        _write(home / CONFIG_NAME, "namespace: from-home\n")

        result = resolve_config(tmp_path / "absent", environ={}, home_dir=lambda: home)

        assert result.status is ConfigStatus.NOT_FOUND
        assert result.settings.get("namespace") is None

    def test_home_file_is_loaded(self, home: Path) -> None:
        _write(home / CONFIG_NAME, "namespace: from-home\n")

        result = resolve_config(None, environ={}, home_dir=lambda: home)

        assert result.status is ConfigStatus.LOADED
        assert result.path == home / ".devspace"
        assert result.disposition is Disposition.PROCEED

    def test_extension_variant_is_found(self, home: Path) -> None:
        _write(home / ".devspace.yaml", "profile: staging\n")

        result = resolve_config(None, environ={}, home_dir=lambda: home)

        assert result.path == home / ".devspace.yaml"
        assert result.settings.get("profile") == "staging"

    def test_extensionless_name_is_preferred(self, home: Path) -> None:
        _write(home / ".devspace", "profile: plain\n")
        _write(home / ".devspace.yaml", "profile: yaml\n")

        result = resolve_config(None, environ={}, home_dir=lambda: home)
        assert result.settings.get("profile") == "plain"

    def test_state_directory_is_skipped(self, home: Path) -> None:
        (home / CONFIG_NAME).mkdir()
        _write(home / ".devspace.yaml", "profile: staging\n")

        result = resolve_config(None, environ={}, home_dir=lambda: home)

        assert result.status is ConfigStatus.LOADED
        assert result.path == home / ".devspace.yaml"
        assert result.settings.get("profile") == "staging"

    def test_state_directory_alone_is_not_found(self, home: Path) -> None:
        (home / CONFIG_NAME).mkdir()

        result = resolve_config(None, environ={}, home_dir=lambda: home)

        assert result.status is ConfigStatus.NOT_FOUND
        assert result.error is None

    def test_explicit_directory_is_not_found(self, tmp_path: Path) -> None:
        result = resolve_config(tmp_path, environ={}, home_dir=lambda: tmp_path)
        assert result.status is ConfigStatus.NOT_FOUND

    def test_no_file_proceeds_with_defaults(self, home: Path) -> None:
        result = resolve_config(
            None,
            environ={"NAMESPACE": "env-ns"},
            home_dir=lambda: home,
            defaults={"analytics": True},
        )

        assert result.status is ConfigStatus.NOT_FOUND
        assert result.disposition is Disposition.PROCEED_WITH_DEFAULTS
        assert result.error is None
        assert result.settings.get("analytics") is True
        assert result.settings.get("namespace") == "env-ns"

    def test_malformed_file_is_reported_not_raised(self, home: Path) -> None:
        _write(home / CONFIG_NAME, "namespace: [unclosed\n")

        result = resolve_config(None, environ={}, home_dir=lambda: home)

        assert result.status is ConfigStatus.MALFORMED
        assert result.disposition is Disposition.PROCEED_WITH_DEFAULTS
        assert isinstance(result.error, ConfigError)
        assert result.settings.get("namespace") is None

    def test_home_failure_is_fatal(self) -> None:
        def _broken_home() -> Path:
            raise HomeDirectoryError("no home")

        result = resolve_config(None, environ={}, home_dir=_broken_home)

        assert result.status is ConfigStatus.HOME_UNAVAILABLE
        assert result.disposition is Disposition.FATAL
        assert isinstance(result.error, HomeDirectoryError)

    def test_environment_overrides_file(self, home: Path) -> None:
        _write(home / CONFIG_NAME, "namespace: from-file\nprofile: dev\n")

        result = resolve_config(
            None, environ={"NAMESPACE": "from-env"}, home_dir=lambda: home,
        )

        assert result.settings.get("namespace") == "from-env"
        assert result.settings.get("profile") == "dev"


class TestHomeDirectory:
    def test_returns_path_home(self, monkeypatch: pytest.MonkeyPatch, home: Path) -> None:
        monkeypatch.setattr("devspace.infra.config_loader.Path.home", lambda: home)
        assert home_directory() == home

    def test_lookup_failure_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _fail() -> Path:
            raise RuntimeError("Could not determine home directory.")

        monkeypatch.setattr("devspace.infra.config_loader.Path.home", _fail)
        with pytest.raises(HomeDirectoryError):
            home_directory()

    def test_default_candidates_order(self, home: Path) -> None:
        names = [p.name for p in default_candidates(home)]
        assert names == [".devspace", ".devspace.yaml", ".devspace.yml", ".devspace.json"]

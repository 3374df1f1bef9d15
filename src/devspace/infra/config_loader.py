"""Infrastructure: locate and read the user config file.

Resolution order
----------------
1. An explicit ``--config`` path is the *only* candidate when given.
2. Otherwise ``~/.devspace`` (no extension), then the ``.yaml``,
   ``.yml`` and ``.json`` variants of that name.

Only regular files count as candidates; a ``~/.devspace/`` state
directory is skipped.

Environment overrides are layered on top by
:class:`~devspace.core.settings.Settings`.  A missing file is not an
error; a malformed one is reported in the result and otherwise ignored.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import yaml

from devspace.core.models import ConfigResolution, ConfigStatus
from devspace.core.settings import Settings
from devspace.exceptions import ConfigError, HomeDirectoryError

CONFIG_NAME: str = ".devspace"
CONFIG_EXTENSIONS: tuple[str, ...] = ("", ".yaml", ".yml", ".json")


def home_directory() -> Path:
    """Return the invoking user's home directory.

    Raises
    ------
    HomeDirectoryError
        When neither ``$HOME`` nor the password database yields one.
    """
    try:
        home = Path.home()
    except (RuntimeError, KeyError, OSError) as exc:
        raise HomeDirectoryError(
            f"Cannot determine the home directory: {exc}",
            hint="Set the HOME environment variable or pass --config.",
        ) from exc
    if not str(home) or str(home) == "~":
        raise HomeDirectoryError(
            "Cannot determine the home directory.",
            hint="Set the HOME environment variable or pass --config.",
        )
    return home


def default_candidates(home: Path) -> list[Path]:
    return [home / f"{CONFIG_NAME}{ext}" for ext in CONFIG_EXTENSIONS]


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse *path* as YAML (JSON is accepted as a YAML subset).

    Raises
    ------
    FileNotFoundError
        When *path* does not exist.
    ConfigError
        When the file cannot be read or is not a mapping.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid config file {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Invalid config file {path}: expected a mapping, got {type(data).__name__}",
        )
    return {str(key): value for key, value in data.items()}


def resolve_config(
    explicit_path: str | os.PathLike[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    home_dir: Callable[[], Path] = home_directory,
    defaults: Mapping[str, Any] | None = None,
) -> ConfigResolution:
    """Choose, read and layer the configuration for this run.

    Never raises: every outcome, including the fatal one, is returned as
    a :class:`ConfigResolution`.
    """
    env = dict(os.environ if environ is None else environ)

    if explicit_path:
        candidates = [Path(explicit_path).expanduser()]
    else:
        try:
            home = home_dir()
        except HomeDirectoryError as exc:
            return ConfigResolution(ConfigStatus.HOME_UNAVAILABLE, error=exc)
        candidates = default_candidates(home)

    for candidate in candidates:
        if not candidate.is_file():
            continue
        try:
            values = read_config_file(candidate)
        except FileNotFoundError:
            continue
        except ConfigError as exc:
            return ConfigResolution(
                ConfigStatus.MALFORMED,
                settings=Settings(environ=env, defaults=defaults),
                path=candidate,
                error=exc,
            )
        return ConfigResolution(
            ConfigStatus.LOADED,
            settings=Settings(values, environ=env, defaults=defaults),
            path=candidate,
        )

    return ConfigResolution(
        ConfigStatus.NOT_FOUND,
        settings=Settings(environ=env, defaults=defaults),
        path=candidates[0],
    )

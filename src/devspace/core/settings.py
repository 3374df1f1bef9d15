"""Layered configuration values.

Three layers, highest precedence first:

1. environment variables named after the option
   (``kube-context`` → ``KUBE_CONTEXT``),
2. values read from the config file,
3. built-in defaults.

The environment always wins over the file, never the other way round.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def env_key(option: str) -> str:
    """Return the environment variable name that overrides *option*."""
    return option.replace("-", "_").replace(".", "_").upper()


def _normalise(option: str) -> str:
    return env_key(option).lower()


class Settings:
    """Read-only view over defaults, file values and environment overrides.

    Parameters
    ----------
    values:
        Mapping parsed from the config file (may be empty).
    environ:
        Environment to take overrides from.  Captured at construction.
    defaults:
        Built-in fallback values.
    """

    def __init__(
        self,
        values: Mapping[str, Any] | None = None,
        *,
        environ: Mapping[str, str] | None = None,
        defaults: Mapping[str, Any] | None = None,
    ) -> None:
        self._values: dict[str, Any] = {
            _normalise(key): value for key, value in (values or {}).items()
        }
        self._defaults: dict[str, Any] = {
            _normalise(key): value for key, value in (defaults or {}).items()
        }
        self._environ: dict[str, str] = dict(environ or {})

    def get(self, option: str, default: Any = None) -> Any:
        """Return the effective value of *option*."""
        name = env_key(option)
        if name in self._environ:
            return self._environ[name]
        key = _normalise(option)
        if key in self._values:
            return self._values[key]
        return self._defaults.get(key, default)

    def __contains__(self, option: object) -> bool:
        if not isinstance(option, str):
            return False
        key = _normalise(option)
        return (
            env_key(option) in self._environ
            or key in self._values
            or key in self._defaults
        )

    def as_dict(self) -> dict[str, Any]:
        """Effective values for every option known from defaults or the file."""
        keys = [*self._defaults, *(k for k in self._values if k not in self._defaults)]
        return {key: self.get(key) for key in keys}

    @property
    def file_values(self) -> dict[str, Any]:
        return dict(self._values)

    def __repr__(self) -> str:
        return f"Settings({self.as_dict()!r})"

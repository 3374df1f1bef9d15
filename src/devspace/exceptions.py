"""Custom exception hierarchy for devspace.

Every error a command body wants to surface to the user must inherit
from :class:`DevSpaceError`.  The execution governor treats exactly
these as *command errors* (reported, rendered, exit code 1); anything
else escaping a command is a crash and takes the panic path.

Hierarchy
---------
DevSpaceError
├── UsageError
├── HomeDirectoryError
├── ConfigError
├── VersionCheckError
├── CommandUnavailableError
└── CommandFailedError
"""

from __future__ import annotations


class DevSpaceError(Exception):
    """Base exception for all devspace errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI can render a clean message without
    leaking internal stack traces (unless ``--debug`` is given).
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Command line ----------------------------------------------------------

class UsageError(DevSpaceError):
    """Raised when the command line cannot be parsed."""


# --- Configuration ---------------------------------------------------------

class HomeDirectoryError(DevSpaceError):
    """Raised when the invoking user's home directory cannot be determined."""


class ConfigError(DevSpaceError):
    """Raised when a config file exists but cannot be parsed."""


# --- Version check ---------------------------------------------------------

class VersionCheckError(DevSpaceError):
    """Raised when the latest published version cannot be determined."""


# --- Commands --------------------------------------------------------------

class CommandUnavailableError(DevSpaceError):
    """Raised when no implementation is installed for a command."""


class CommandFailedError(DevSpaceError):
    """Raised by command implementations when their work fails."""

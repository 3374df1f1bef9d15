"""Package version."""

from __future__ import annotations

__version__: str = "4.0.0"

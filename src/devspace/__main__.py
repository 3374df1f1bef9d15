"""Allow ``python -m devspace`` invocation.

This module simply delegates to the CLI entry point so that
``python -m devspace`` behaves identically to the ``devspace`` console
script.
"""

from __future__ import annotations

from devspace.cli.app import execute

if __name__ == "__main__":
    execute()

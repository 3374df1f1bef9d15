"""devspace: develop, deploy and debug applications on Kubernetes.

This distribution ships the command-line core: command registration,
configuration precedence, the startup version check and the top-level
exit policy.  Command bodies are provided by plugins.
"""

from devspace.version import __version__

__all__: list[str] = ["__version__"]

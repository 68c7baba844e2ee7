"""secboot CLI Module.

Interactive shell, batch runner and architecture launcher.
"""

from .commands import app
from .commands import cli_main as main

__all__ = ["app", "main"]

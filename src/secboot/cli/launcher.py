"""Architecture launcher.

Reads ``x8664`` / ``arm64`` / ``exit`` and runs the chosen edition as a child
process (``python -m secboot shell --arch <edition>``), waiting for it to
finish. SIGINT only sets ``stop_requested``; the loop checks it around each
prompt.
"""

from __future__ import annotations

import logging
import signal
import subprocess
import sys
import threading
from collections.abc import Sequence

from rich.console import Console

from secboot.cli.display import show_launcher_splash
from secboot.cli.session import SecbootPromptSession
from secboot.core.instructions import ARCHITECTURES

logger = logging.getLogger(__name__)

LAUNCHER_PROMPT = "secboot>"


def build_child_command(arch: str, start_mode: str = "uefi", extra_args: Sequence[str] = ()) -> list[str]:
    """Command line for an edition's simulator process."""
    return [
        sys.executable,
        "-m",
        "secboot",
        "shell",
        "--arch",
        arch,
        "--start-mode",
        start_mode,
        *extra_args,
    ]


class Launcher:
    """Interactive edition picker.

    Args:
        console: Output console
        session: Line input
        start_mode: Mode the child simulators start in
        extra_args: Extra CLI arguments passed to each child
    """

    def __init__(
        self,
        console: Console,
        session: SecbootPromptSession,
        start_mode: str = "uefi",
        extra_args: Sequence[str] = (),
    ):
        self.console = console
        self.session = session
        self.start_mode = start_mode
        self.extra_args = tuple(extra_args)
        self.stop_requested = threading.Event()

    def install_signal_handler(self):
        """Route SIGINT to ``stop_requested``. Returns the previous handler."""

        def _on_sigint(signum, frame):
            self.stop_requested.set()

        return signal.signal(signal.SIGINT, _on_sigint)

    def spawn(self, arch: str) -> int | None:
        """Run one edition and wait for it.

        Returns:
            Child exit code, or None if the process could not be started
        """
        command = build_child_command(arch, self.start_mode, self.extra_args)
        logger.info(f"Launching {arch}: {' '.join(command)}")
        try:
            completed = subprocess.run(command, check=False)
        except OSError as e:
            logger.error(f"Failed to launch {arch}: {e}")
            self.console.print(f"[bold red]Failed to execute {arch}: {e}[/bold red]")
            return None
        logger.debug(f"{arch} exited with {completed.returncode}")
        return completed.returncode

    def handle(self, token: str) -> bool:
        """Act on one launcher token.

        Returns:
            False when the launcher should exit
        """
        if token == "exit":
            self.console.print("Exiting...")
            return False
        if token in ARCHITECTURES:
            self.console.print()
            self.spawn(token)
        elif token:
            self.console.print(f"[dim]Unknown option '{token}'. Options: {', '.join(ARCHITECTURES)}, exit[/dim]")
        return True

    def run(self) -> int:
        show_launcher_splash(self.console, ARCHITECTURES)

        while not self.stop_requested.is_set():
            try:
                line = self.session.prompt(LAUNCHER_PROMPT)
            except KeyboardInterrupt:
                self.stop_requested.set()
                continue
            except EOFError:
                break
            # A piped input() retries after SIGINT, so the flag can be set by now
            if self.stop_requested.is_set():
                break
            if not self.handle(line.strip()):
                break
        return 0

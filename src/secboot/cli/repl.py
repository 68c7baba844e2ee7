"""secboot REPL - Interactive boot shell.

The loop blocks only on the next input line. Ctrl-C never touches the mode
or the verification flags: it sets ``stop_requested``, which the loop checks
before every prompt.
"""

from __future__ import annotations

import logging
import threading

from rich.console import Console

from secboot.cli.display import (
    PROMPT_COLORS,
    make_emitter,
    prompt_label,
    render_result,
    show_splash,
)
from secboot.cli.session import SecbootPromptSession
from secboot.core.engine import SHELL_COMMANDS, SecureBootEngine
from secboot.core.modes import Mode
from secboot.core.processor import TRANSITION_COMMANDS
from secboot.core.settings import SecbootSettings

logger = logging.getLogger(__name__)


class ShellREPL:
    """Interactive read-process-print loop around a ``SecureBootEngine``.

    Usage:
        repl = ShellREPL.from_settings(settings, console)
        repl.run()
    """

    def __init__(
        self,
        engine: SecureBootEngine,
        console: Console,
        session: SecbootPromptSession,
        show_banner: bool = True,
    ):
        self.engine = engine
        self.console = console
        self.session = session
        self.show_banner = show_banner
        self.stop_requested = threading.Event()

    @classmethod
    def from_settings(
        cls,
        settings: SecbootSettings,
        console: Console,
        session: SecbootPromptSession | None = None,
    ) -> "ShellREPL":
        """Build the engine and prompt session described by ``settings``."""
        engine_ref: list[SecureBootEngine] = []
        emit = make_emitter(console, lambda: engine_ref[0].mode)
        engine = SecureBootEngine(
            settings.arch,
            emit,
            initial_mode=settings.start_mode,
            policy=settings.duplicate_policy,
        )
        engine_ref.append(engine)

        if session is None:
            words = [*TRANSITION_COMMANDS, *SHELL_COMMANDS, *engine.registry.list_names()]
            session = SecbootPromptSession(words=words, history_file=settings.history_file)
        return cls(engine, console, session, show_banner=settings.show_banner)

    @property
    def mode(self) -> Mode:
        return self.engine.mode

    def request_stop(self) -> None:
        self.stop_requested.set()

    def run(self) -> int:
        """Run until ``exit``, end of input or Ctrl-C.

        Returns:
            Process exit code (always 0: every command error is recoverable)
        """
        if self.show_banner:
            show_splash(self.console, self.engine.arch)

        while not self.stop_requested.is_set():
            mode = self.engine.mode
            try:
                line = self.session.prompt(prompt_label(mode), PROMPT_COLORS[mode])
            except KeyboardInterrupt:
                logger.debug("Interrupt received, stopping shell")
                self.request_stop()
                continue
            except EOFError:
                break

            result = self.engine.handle_line(line)
            render_result(self.console, self.engine, result)
            if result.exit_requested:
                break

        self.console.print("[yellow]Goodbye![/yellow]")
        return 0

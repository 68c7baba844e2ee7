"""secboot Prompt Session - Line input using prompt-toolkit."""

import sys
from pathlib import Path
from typing import Iterable

from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import FileHistory, InMemoryHistory
from prompt_toolkit.styles import Style


class SecbootPromptSession:
    """Prompt session with history and completion.

    Features:
    - Persistent command history (``~/.secboot/history`` by default)
    - Tab completion for commands and instruction names
    - Auto-suggestions from history
    - Falls back to ``input()`` when stdin is not a terminal (piped scripts)
    """

    def __init__(
        self,
        words: Iterable[str] = (),
        history_file: str | Path | None = None,
        enable_history: bool = True,
    ):
        """Initialize the prompt session.

        Args:
            words: Completion vocabulary
            history_file: Path to history file; in-memory history when None
            enable_history: Persist history to ``history_file``
        """
        self.words = sorted(set(words))
        self.history_file = Path(history_file) if history_file else None
        self.enable_history = enable_history and self.history_file is not None
        self._session: PromptSession | None = None
        self._init_session()

    @property
    def interactive(self) -> bool:
        return self._session is not None

    def _init_session(self) -> None:
        # Piped input gets plain input()
        if not sys.stdin.isatty():
            return

        if self.enable_history:
            self.history_file.parent.mkdir(parents=True, exist_ok=True)
            history = FileHistory(str(self.history_file))
        else:
            history = InMemoryHistory()

        self._session = PromptSession(
            history=history,
            completer=WordCompleter(self.words, sentence=True),
            auto_suggest=AutoSuggestFromHistory(),
            complete_while_typing=False,
        )

    def prompt(self, label: str, color: str = "") -> str:
        """Read one line.

        Args:
            label: Prompt text, e.g. ``UEFI>>``
            color: prompt_toolkit colour for the label

        Returns:
            The line as typed

        Raises:
            EOFError: End of input
            KeyboardInterrupt: Ctrl-C
        """
        if self._session is None:
            return input(label + " ")

        style = Style.from_dict({"label": f"{color} bold" if color else "bold"})
        return self._session.prompt([("class:label", label), ("", " ")], style=style)

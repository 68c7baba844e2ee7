"""Input Parser - Read command scripts for batch runs.

Blank lines and ``#`` comments are skipped.
"""

from pathlib import Path
from typing import Iterable


def strip_comment(line: str) -> str:
    """Remove a trailing ``#`` comment."""
    index = line.find("#")
    if index >= 0:
        line = line[:index]
    return line.strip()


def iter_script_lines(lines: Iterable[str]) -> list[str]:
    """Filter script lines down to commands.

    Args:
        lines: Raw lines of a command script

    Returns:
        Non-empty, comment-stripped lines in order
    """
    commands = []
    for raw in lines:
        line = strip_comment(raw)
        if line:
            commands.append(line)
    return commands


def load_script(path: Path) -> list[str]:
    """Read a command script file.

    Raises:
        OSError: If the file cannot be read
    """
    return iter_script_lines(Path(path).read_text(encoding="utf-8").splitlines())

"""Built-in transition commands.

``CommandProcessor`` owns the explicit mode-changing commands. Each consumes
its token even when refused; anything else comes back as
``CommandResult.UNKNOWN_COMMAND`` so the caller can fall through to
shell-level commands and instruction dispatch.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from secboot.core.exceptions import NotVerifiedError
from secboot.core.machine import BootModeMachine
from secboot.core.modes import Mode
from secboot.core.verification import Artifact


class CommandResult(str, Enum):
    SUCCESS = "success"
    NOT_VERIFIED = "not_verified"
    UNKNOWN_COMMAND = "unknown_command"


# token -> (target mode, gating artifact)
TRANSITION_COMMANDS: dict[str, tuple[Mode, Artifact | None]] = {
    "shutdown": (Mode.OFF, None),
    "load_hypervisor": (Mode.HYPERVISOR, Artifact.HYPERVISOR),
    "load_kernel": (Mode.KERNEL, Artifact.KERNEL),
    "load_application": (Mode.USER, Artifact.APPLICATION),
}

SHUTDOWN_NARRATION = (
    "ACPI shutdown received.",
    "Shredding sensitive data.",
    "Encrypting disk and memory.",
    "System shutting down...",
)

_LOADED = {
    Mode.HYPERVISOR: "Hypervisor loaded.",
    Mode.KERNEL: "Kernel loaded.",
    Mode.USER: "Application loaded.",
}

_REFUSED = {
    Artifact.HYPERVISOR: "Hypervisor not verified. Aborting.",
    Artifact.KERNEL: "Kernel not verified. Aborting.",
    Artifact.APPLICATION: "Application not verified. Aborting.",
}


class CommandProcessor:
    """Applies transition commands to a ``BootModeMachine``.

    Args:
        machine: Mode owner
        emit: Sink for narration lines
    """

    def __init__(self, machine: BootModeMachine, emit: Callable[[str], None]) -> None:
        self.machine = machine
        self.emit = emit

    def is_builtin(self, token: str) -> bool:
        return token in TRANSITION_COMMANDS

    def process(self, token: str) -> CommandResult:
        if token not in TRANSITION_COMMANDS:
            return CommandResult.UNKNOWN_COMMAND

        target, required = TRANSITION_COMMANDS[token]
        try:
            self.machine.transition_to(target, required)
        except NotVerifiedError as e:
            self.emit(_REFUSED.get(e.artifact, str(e)))
            return CommandResult.NOT_VERIFIED

        if target is Mode.OFF:
            for line in SHUTDOWN_NARRATION:
                self.emit(line)
        else:
            self.emit(_LOADED[target])
        return CommandResult.SUCCESS

"""Secure boot engine: one object wiring the core together.

``handle_line`` implements the whole command surface in this order:

1. Built-in transition commands (``CommandProcessor``)
2. Shell-level commands: ``hint``, ``instructions``, ``status``, ``help``,
   ``powerup``, ``exit``
3. Generic instruction dispatch (``InstructionDispatcher``)

Only the first whitespace-separated token of a line is interpreted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from secboot.core.dispatcher import DispatchOutcome, InstructionDispatcher
from secboot.core.instructions import DuplicatePolicy, build_instruction_registry
from secboot.core.machine import AdvanceResult, BootModeMachine
from secboot.core.modes import Mode
from secboot.core.processor import CommandProcessor, CommandResult
from secboot.core.verification import VerificationRegistry

logger = logging.getLogger(__name__)

Emit = Callable[[str], None]

MODE_HINTS = {
    Mode.OFF: "Hint: Type 'powerup' to start the board",
    Mode.UEFI: "Hint: Run 'verify_hypervisor', then 'load_hypervisor' to load Hypervisor mode",
    Mode.HYPERVISOR: "Hint: Run 'verify_kernel', then 'load_kernel' to load the Kernel mode",
    Mode.KERNEL: "Hint: Run 'verify_application', then 'load_application' to start user space",
    Mode.USER: "Hint: Execute user-level instructions like 'ADD', 'SUB', etc.",
}

SHELL_COMMANDS = ("hint", "instructions", "status", "help", "powerup", "exit")


class LineKind(str, Enum):
    EMPTY = "empty"
    TRANSITION = "transition"
    POWERUP = "powerup"
    HINT = "hint"
    INSTRUCTIONS = "instructions"
    STATUS = "status"
    HELP = "help"
    EXIT = "exit"
    DISPATCH = "dispatch"


@dataclass(frozen=True)
class LineResult:
    """What handling one input line did."""

    kind: LineKind
    token: str = ""
    command: CommandResult | None = None
    advance: AdvanceResult | None = None
    outcome: DispatchOutcome | None = None

    @property
    def exit_requested(self) -> bool:
        return self.kind is LineKind.EXIT


class SecureBootEngine:
    """A complete simulator session for one edition.

    Args:
        arch: Edition name (``x8664`` or ``arm64``)
        emit: Sink for narration lines
        initial_mode: Starting mode
        policy: Duplicate instruction policy for the registry build

    Example:
        lines = []
        engine = SecureBootEngine("x8664", lines.append)
        engine.handle_line("powerup")
        assert engine.mode is Mode.UEFI
    """

    def __init__(
        self,
        arch: str,
        emit: Emit,
        initial_mode: Mode = Mode.OFF,
        policy: DuplicatePolicy = DuplicatePolicy.OVERRIDE,
    ) -> None:
        self.arch = arch
        self.emit = emit
        self.verification = VerificationRegistry()
        self.machine = BootModeMachine(self.verification, initial=initial_mode)
        self.registry = build_instruction_registry(arch, self.verification, emit, policy)
        self.processor = CommandProcessor(self.machine, emit)
        self.dispatcher = InstructionDispatcher(self.registry, self.machine)
        logger.debug(f"Engine ready: {arch} edition, starting in {initial_mode.label}")

    @property
    def mode(self) -> Mode:
        return self.machine.current()

    def handle_line(self, line: str) -> LineResult:
        parts = line.split()
        if not parts:
            return LineResult(LineKind.EMPTY)
        token = parts[0]

        result = self.processor.process(token)
        if result is not CommandResult.UNKNOWN_COMMAND:
            return LineResult(LineKind.TRANSITION, token, command=result)

        if token == "hint":
            self.emit(MODE_HINTS[self.mode])
            return LineResult(LineKind.HINT, token)
        if token == "instructions":
            return LineResult(LineKind.INSTRUCTIONS, token)
        if token == "status":
            return LineResult(LineKind.STATUS, token)
        if token == "help":
            return LineResult(LineKind.HELP, token)
        if token == "powerup":
            return LineResult(LineKind.POWERUP, token, advance=self.powerup())
        if token == "exit":
            return LineResult(LineKind.EXIT, token)

        return LineResult(LineKind.DISPATCH, token, outcome=self.dispatcher.execute(token))

    def powerup(self) -> AdvanceResult:
        step = self.machine.advance()
        if step.advanced:
            self.emit(f"Switched to {step.current.label} mode")
        else:
            self.emit("Already in User mode")
        return step

"""Generic instruction dispatch.

``execute`` looks the name up, compares the instruction's required mode with
the machine's current mode and runs the handler only on a match. Outcomes are
values; nothing here raises for a bad name or a wrong mode.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from secboot.core.instructions import InstructionRegistry
from secboot.core.machine import BootModeMachine
from secboot.core.modes import Mode

logger = logging.getLogger(__name__)


class DispatchStatus(str, Enum):
    EXECUTED = "executed"
    MODE_MISMATCH = "mode_mismatch"
    UNKNOWN_INSTRUCTION = "unknown_instruction"


@dataclass(frozen=True)
class DispatchOutcome:
    """Result classification of one dispatch attempt."""

    status: DispatchStatus
    name: str
    required: Mode | None = None
    actual: Mode | None = None

    @classmethod
    def executed(cls, name: str) -> "DispatchOutcome":
        return cls(DispatchStatus.EXECUTED, name)

    @classmethod
    def mode_mismatch(cls, name: str, required: Mode, actual: Mode) -> "DispatchOutcome":
        return cls(DispatchStatus.MODE_MISMATCH, name, required=required, actual=actual)

    @classmethod
    def unknown(cls, name: str) -> "DispatchOutcome":
        return cls(DispatchStatus.UNKNOWN_INSTRUCTION, name)

    @property
    def ok(self) -> bool:
        return self.status is DispatchStatus.EXECUTED

    @property
    def message(self) -> str:
        """Human readable report for failures; empty for EXECUTED."""
        if self.status is DispatchStatus.MODE_MISMATCH:
            return (
                f"Cannot access '{self.name}' in {self.actual.label} mode "
                f"(requires {self.required.label} mode)"
            )
        if self.status is DispatchStatus.UNKNOWN_INSTRUCTION:
            return f"Unknown instruction: '{self.name}'"
        return ""


class InstructionDispatcher:
    """Runs registered instructions against a ``BootModeMachine``."""

    def __init__(self, registry: InstructionRegistry, machine: BootModeMachine) -> None:
        self.registry = registry
        self.machine = machine

    def execute(self, name: str) -> DispatchOutcome:
        instruction = self.registry.lookup(name)
        if instruction is None:
            logger.debug(f"dispatch {name!r}: unknown")
            return DispatchOutcome.unknown(name)

        current = self.machine.current()
        if instruction.required_mode is not current:
            logger.debug(
                f"dispatch {name!r}: requires {instruction.required_mode.label}, "
                f"current {current.label}"
            )
            return DispatchOutcome.mode_mismatch(name, instruction.required_mode, current)

        instruction.handler()
        logger.debug(f"dispatch {name!r}: executed in {current.label}")
        return DispatchOutcome.executed(name)

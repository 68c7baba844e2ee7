"""Core simulator: modes, verification flags, instructions and dispatch."""

from secboot.core.dispatcher import DispatchOutcome, DispatchStatus, InstructionDispatcher
from secboot.core.engine import LineKind, LineResult, SecureBootEngine
from secboot.core.instructions import (
    ARCHITECTURES,
    DuplicatePolicy,
    Instruction,
    InstructionRegistry,
    build_instruction_registry,
)
from secboot.core.machine import AdvanceResult, BootModeMachine
from secboot.core.modes import Mode
from secboot.core.processor import CommandProcessor, CommandResult
from secboot.core.verification import Artifact, VerificationRegistry

__all__ = [
    "ARCHITECTURES",
    "AdvanceResult",
    "Artifact",
    "BootModeMachine",
    "CommandProcessor",
    "CommandResult",
    "DispatchOutcome",
    "DispatchStatus",
    "DuplicatePolicy",
    "Instruction",
    "InstructionDispatcher",
    "InstructionRegistry",
    "LineKind",
    "LineResult",
    "Mode",
    "SecureBootEngine",
    "VerificationRegistry",
    "build_instruction_registry",
]

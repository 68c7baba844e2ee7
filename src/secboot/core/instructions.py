"""Instruction registry and per-architecture instruction tables.

Each instruction is one record ``(name, handler, required_mode)``. Handlers
take no arguments and only emit narration through the ``emit`` callback
they were built with; ``verify_*`` handlers additionally set a flag in the
``VerificationRegistry`` they close over. No handler changes the mode.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum

from secboot.core.exceptions import (
    DuplicateInstructionError,
    RegistrySealedError,
    UnknownArchitectureError,
)
from secboot.core.modes import Mode
from secboot.core.verification import Artifact, VerificationRegistry

logger = logging.getLogger(__name__)

Handler = Callable[[], None]
Emit = Callable[[str], None]


class DuplicatePolicy(str, Enum):
    """What to do when an instruction name is registered twice."""

    OVERRIDE = "override"  # last registration wins
    REJECT = "reject"


@dataclass(frozen=True)
class Instruction:
    """A named, mode-gated, synchronous action."""

    name: str
    handler: Handler
    required_mode: Mode


class InstructionRegistry:
    """Mapping from instruction name to ``Instruction``.

    Filled during startup, then sealed. Lookups after sealing are pure reads.

    Args:
        policy: Duplicate-name policy applied by ``register``
    """

    def __init__(self, policy: DuplicatePolicy = DuplicatePolicy.OVERRIDE) -> None:
        self.policy = policy
        self._instructions: dict[str, Instruction] = {}
        self._sealed = False

    def register(self, name: str, handler: Handler, required_mode: Mode) -> Instruction:
        """Add an instruction.

        Raises:
            RegistrySealedError: If called after ``seal()``
            DuplicateInstructionError: If ``name`` exists and the policy is REJECT
        """
        if self._sealed:
            raise RegistrySealedError(f"Cannot register '{name}': registry is sealed")
        if name in self._instructions:
            if self.policy is DuplicatePolicy.REJECT:
                raise DuplicateInstructionError(name)
            previous = self._instructions[name]
            logger.warning(
                f"Instruction '{name}' re-registered: "
                f"{previous.required_mode.label} -> {required_mode.label}"
            )
        instruction = Instruction(name=name, handler=handler, required_mode=required_mode)
        self._instructions[name] = instruction
        return instruction

    def seal(self) -> None:
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def lookup(self, name: str) -> Instruction | None:
        return self._instructions.get(name)

    def list_names(self) -> Iterator[str]:
        """Lazily yield registered names. Callers must not rely on the order."""
        yield from self._instructions

    def __iter__(self) -> Iterator[Instruction]:
        return iter(list(self._instructions.values()))

    def __contains__(self, name: object) -> bool:
        return name in self._instructions

    def __len__(self) -> int:
        return len(self._instructions)


# ============================================
# Instruction tables
# ============================================
GENERAL_PURPOSE = {
    "x8664": (
        "ADD", "SUB", "MUL", "DIV", "XOR", "AND", "OR", "MOV", "JMP",
        "CMP", "INC", "DEC", "PUSH", "POP", "CALL", "RET", "NOP", "LEA",
    ),
    "arm64": (
        "ADD", "SUB", "MUL", "SDIV", "UDIV", "EOR", "AND", "ORR", "MOV",
        "B", "BL", "CMP", "LDR", "STR", "RET", "NOP", "ADR", "CBZ",
    ),
}

ARCHITECTURES = tuple(GENERAL_PURPOSE)

# Display-only system instructions: name -> (required mode, confirmation)
SYSTEM_ACTIONS: dict[str, tuple[Mode, str]] = {
    "init_initial_hw": (Mode.UEFI, "Initialized UEFI firmware mode"),
    "init_full_hw": (Mode.HYPERVISOR, "Hypervisor managed hardware"),
    "start_user_space": (Mode.KERNEL, "User space started"),
}

# Verification instructions: name -> (required mode, artifact)
VERIFY_ACTIONS: dict[str, tuple[Mode, Artifact]] = {
    "verify_bootloader": (Mode.UEFI, Artifact.BOOTLOADER),
    "verify_hypervisor": (Mode.UEFI, Artifact.HYPERVISOR),
    "verify_kernel": (Mode.HYPERVISOR, Artifact.KERNEL),
    "verify_filesystem": (Mode.KERNEL, Artifact.FILESYSTEM),
    "verify_application": (Mode.KERNEL, Artifact.APPLICATION),
}


def _narrate(emit: Emit, message: str) -> Handler:
    def handler() -> None:
        emit(message)

    return handler


def _verify(emit: Emit, verification: VerificationRegistry, artifact: Artifact) -> Handler:
    def handler() -> None:
        verification.set(artifact)
        emit(f"Verified {artifact.label}")

    return handler


def build_instruction_registry(
    arch: str,
    verification: VerificationRegistry,
    emit: Emit,
    policy: DuplicatePolicy = DuplicatePolicy.OVERRIDE,
) -> InstructionRegistry:
    """Build and seal the instruction registry for an edition.

    Args:
        arch: Edition name, one of ``ARCHITECTURES``
        verification: Registry the ``verify_*`` handlers write to
        emit: Sink for handler confirmations
        policy: Duplicate-name policy

    Returns:
        Sealed registry with the edition's user instructions and the shared
        privileged instructions

    Raises:
        UnknownArchitectureError: If ``arch`` has no table
    """
    if arch not in GENERAL_PURPOSE:
        raise UnknownArchitectureError(arch, list(ARCHITECTURES))

    registry = InstructionRegistry(policy=policy)

    for name in GENERAL_PURPOSE[arch]:
        registry.register(name, _narrate(emit, f"Executed {name} instruction"), Mode.USER)

    for name, (mode, message) in SYSTEM_ACTIONS.items():
        registry.register(name, _narrate(emit, message), mode)

    for name, (mode, artifact) in VERIFY_ACTIONS.items():
        registry.register(name, _verify(emit, verification, artifact), mode)

    registry.seal()
    logger.debug(f"Built {arch} instruction registry with {len(registry)} instructions")
    return registry

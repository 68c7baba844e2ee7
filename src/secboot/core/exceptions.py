"""Exception hierarchy for the secure boot simulator.

Only construction-time problems (bad edition, rejected duplicate) and the
refused mode transition are exceptions. Dispatch results are plain values,
see ``secboot.core.dispatcher``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from secboot.core.modes import Mode
    from secboot.core.verification import Artifact


class SecbootError(Exception):
    """Base class for all simulator errors."""


class ModeTransitionError(SecbootError):
    """A requested mode transition could not be applied."""


class NotVerifiedError(ModeTransitionError):
    """Transition refused because the gating artifact is not verified."""

    def __init__(self, target: "Mode", artifact: "Artifact") -> None:
        self.target = target
        self.artifact = artifact
        super().__init__(f"Cannot enter {target.label} mode: {artifact.label} not verified")


class DuplicateInstructionError(SecbootError):
    """Raised when an instruction name is registered twice under the reject policy."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Instruction '{name}' is already registered")


class UnknownArchitectureError(SecbootError):
    """Raised for an edition name with no instruction table."""

    def __init__(self, arch: str, known: list[str]) -> None:
        self.arch = arch
        self.known = known
        super().__init__(f"Unknown architecture '{arch}'. Options: {', '.join(known)}")


class RegistrySealedError(SecbootError):
    """Raised when registering into an instruction registry after startup."""

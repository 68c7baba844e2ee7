"""Boot mode state machine.

``BootModeMachine`` is the single owner of the current mode. Two channels
change it:

- ``advance()``: the ``powerup`` ladder, one stage forward, no gating.
- ``transition_to()``: explicit loads and ``shutdown``, optionally gated by a
  verification flag.

Instruction handlers never touch the mode.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from secboot.core.exceptions import NotVerifiedError
from secboot.core.modes import Mode
from secboot.core.verification import Artifact, VerificationRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdvanceResult:
    """Outcome of a powerup step."""

    previous: Mode
    current: Mode

    @property
    def advanced(self) -> bool:
        """False when the machine was already in USER mode."""
        return self.previous is not self.current


class BootModeMachine:
    """Holds the current mode and applies the transition rules.

    Args:
        verification: Registry consulted by gated transitions
        initial: Starting mode (OFF, or UEFI for launcher-provided sessions)
    """

    def __init__(self, verification: VerificationRegistry, initial: Mode = Mode.OFF) -> None:
        self._verification = verification
        self._current = initial

    def current(self) -> Mode:
        return self._current

    def advance(self) -> AdvanceResult:
        """Step one stage along ``OFF -> UEFI -> HYPERVISOR -> KERNEL -> USER``.

        A no-op in USER mode.
        """
        previous = self._current
        self._current = previous.next
        if previous is self._current:
            logger.debug("powerup ignored: already in User mode")
        else:
            logger.info(f"Mode {previous.label} -> {self._current.label} (powerup)")
        return AdvanceResult(previous=previous, current=self._current)

    def transition_to(self, target: Mode, required: Artifact | None = None) -> Mode:
        """Move to ``target`` if the gating artifact (if any) is verified.

        Args:
            target: Mode to enter
            required: Artifact whose verification flag gates the transition

        Returns:
            The new current mode

        Raises:
            NotVerifiedError: If ``required`` is not verified. The mode is unchanged.
        """
        if required is not None and not self._verification.is_verified(required):
            logger.info(
                f"Refused {self._current.label} -> {target.label}: {required.label} not verified"
            )
            raise NotVerifiedError(target, required)

        previous = self._current
        self._current = target
        logger.info(f"Mode {previous.label} -> {target.label}")
        return target

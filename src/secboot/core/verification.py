"""Verification flags for bootable artifacts.

Each artifact has one boolean flag. Flags start ``False``, are set by the
matching ``verify_*`` instruction and are never cleared: there is no
revocation or re-lock in the simulator. A single lock guards the whole
registry.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum

logger = logging.getLogger(__name__)


class Artifact(str, Enum):
    """Verifiable artifact kinds."""

    BOOTLOADER = "bootloader"
    HYPERVISOR = "hypervisor"
    KERNEL = "kernel"
    FILESYSTEM = "filesystem"
    APPLICATION = "application"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    Artifact.BOOTLOADER: "Bootloader",
    Artifact.HYPERVISOR: "Hypervisor",
    Artifact.KERNEL: "Guest OS kernel",
    Artifact.FILESYSTEM: "Filesystem",
    Artifact.APPLICATION: "Application",
}


class VerificationRegistry:
    """Monotonic set of verified artifacts.

    Example:
        registry = VerificationRegistry()
        registry.set(Artifact.HYPERVISOR)
        assert registry.is_verified(Artifact.HYPERVISOR)
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._flags: dict[Artifact, bool] = {artifact: False for artifact in Artifact}

    def set(self, artifact: Artifact) -> None:
        """Mark ``artifact`` verified. Idempotent."""
        with self._lock:
            already = self._flags[artifact]
            self._flags[artifact] = True
        if already:
            logger.debug(f"{artifact.label} already verified")
        else:
            logger.info(f"{artifact.label} verified")

    def is_verified(self, artifact: Artifact) -> bool:
        with self._lock:
            return self._flags[artifact]

    def snapshot(self) -> dict[Artifact, bool]:
        """Copy of all flags, in declaration order."""
        with self._lock:
            return dict(self._flags)

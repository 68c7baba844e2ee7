"""Boot modes.

Modes are ordered by boot-stage precedence:
``OFF < UEFI < HYPERVISOR < KERNEL < USER``.
"""

from __future__ import annotations

from enum import IntEnum


class Mode(IntEnum):
    """Privilege/boot stage. Exactly one is current at any time."""

    OFF = 0
    UEFI = 1
    HYPERVISOR = 2
    KERNEL = 3
    USER = 4

    @property
    def label(self) -> str:
        """Human readable name used in prompts and messages."""
        return _LABELS[self]

    @property
    def next(self) -> "Mode":
        """Next stage on the powerup ladder. USER is its own successor."""
        if self is Mode.USER:
            return Mode.USER
        return Mode(self + 1)

    @classmethod
    def parse(cls, value: "str | Mode") -> "Mode":
        """Parse a mode from a config string (case-insensitive name or label).

        Raises:
            ValueError: If ``value`` names no mode.
        """
        if isinstance(value, Mode):
            return value
        key = str(value).strip().lower()
        for mode in cls:
            if key in (mode.name.lower(), mode.label.lower()):
                return mode
        options = ", ".join(m.label for m in cls)
        raise ValueError(f"Unknown mode '{value}'. Options: {options}")

    def __str__(self) -> str:
        return self.label


_LABELS = {
    Mode.OFF: "Off",
    Mode.UEFI: "UEFI",
    Mode.HYPERVISOR: "Hypervisor",
    Mode.KERNEL: "Kernel",
    Mode.USER: "User",
}

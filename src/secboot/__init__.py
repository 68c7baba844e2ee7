"""
secboot v0.3 - Secure Boot Simulator
Verify each boot stage before loading the next
"""

__version__ = "0.3.0"


def __getattr__(name: str):
    """Lazy import so ``secboot --help`` does not build the core."""
    if name in ("SecureBootEngine", "LineKind", "LineResult"):
        from secboot.core.engine import LineKind, LineResult, SecureBootEngine

        return locals()[name]

    if name in ("Mode", "Artifact"):
        from secboot.core.modes import Mode
        from secboot.core.verification import Artifact

        return locals()[name]

    if name == "SecbootSettings":
        from secboot.core.settings import SecbootSettings

        return locals()[name]

    raise AttributeError(f"module 'secboot' has no attribute {name!r}")


__all__ = [
    # Version
    "__version__",
    # Core
    "SecureBootEngine",
    "LineKind",
    "LineResult",
    "Mode",
    "Artifact",
    # Settings
    "SecbootSettings",
]

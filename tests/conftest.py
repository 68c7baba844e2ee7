"""Pytest configuration and shared fixtures.

Adds `src/` to `sys.path` so tests can import the project package
without requiring installation.
"""

import logging
import os
import sys

import pytest

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_PATH = os.path.join(PROJECT_ROOT, "src")
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)

from secboot.core.engine import SecureBootEngine  # noqa: E402
from secboot.core.machine import BootModeMachine  # noqa: E402
from secboot.core.verification import VerificationRegistry  # noqa: E402


@pytest.fixture(autouse=True)
def clean_secboot_env(monkeypatch):
    """Keep SECBOOT_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.upper().startswith("SECBOOT_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def emitted() -> list[str]:
    """Collects narration lines."""
    return []


@pytest.fixture
def verification() -> VerificationRegistry:
    return VerificationRegistry()


@pytest.fixture
def machine(verification) -> BootModeMachine:
    return BootModeMachine(verification)


@pytest.fixture
def engine(emitted) -> SecureBootEngine:
    """x8664 engine starting in Off mode."""
    return SecureBootEngine("x8664", emitted.append)


@pytest.fixture(autouse=True)
def reset_secboot_logger():
    """Undo setup_logging() so caplog sees secboot records in every test."""
    yield
    secboot_logger = logging.getLogger("secboot")
    for handler in list(secboot_logger.handlers):
        secboot_logger.removeHandler(handler)
        handler.close()
    secboot_logger.setLevel(logging.NOTSET)
    secboot_logger.propagate = True

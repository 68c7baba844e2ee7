"""
Unit tests for built-in transition commands.
"""

import pytest

from secboot.core.machine import BootModeMachine
from secboot.core.modes import Mode
from secboot.core.processor import (
    SHUTDOWN_NARRATION,
    TRANSITION_COMMANDS,
    CommandProcessor,
    CommandResult,
)
from secboot.core.verification import Artifact


@pytest.fixture
def processor(machine, emitted):
    return CommandProcessor(machine, emitted.append)


class TestCommandProcessor:
    """Tests for CommandProcessor.process."""

    @pytest.mark.parametrize("token", ["powerup", "hint", "instructions", "exit", "ADD", ""])
    def test_other_tokens_are_unknown(self, processor, machine, token):
        """Test non-built-ins fall through untouched."""
        assert processor.process(token) is CommandResult.UNKNOWN_COMMAND
        assert machine.current() is Mode.OFF

    @pytest.mark.parametrize(
        "token,artifact,label",
        [
            ("load_hypervisor", Artifact.HYPERVISOR, "Hypervisor"),
            ("load_kernel", Artifact.KERNEL, "Kernel"),
            ("load_application", Artifact.APPLICATION, "Application"),
        ],
    )
    def test_load_refused_without_verification(self, processor, machine, emitted, token, artifact, label):
        """Test loads are refused and narrated when the flag is unset."""
        machine.advance()

        assert processor.process(token) is CommandResult.NOT_VERIFIED
        assert machine.current() is Mode.UEFI
        assert emitted == [f"{label} not verified. Aborting."]

    @pytest.mark.parametrize(
        "token,artifact,target",
        [
            ("load_hypervisor", Artifact.HYPERVISOR, Mode.HYPERVISOR),
            ("load_kernel", Artifact.KERNEL, Mode.KERNEL),
            ("load_application", Artifact.APPLICATION, Mode.USER),
        ],
    )
    def test_load_succeeds_with_verification(self, processor, machine, verification, token, artifact, target):
        """Test loads apply once the matching flag is set."""
        verification.set(artifact)

        assert processor.process(token) is CommandResult.SUCCESS
        assert machine.current() is target

    def test_load_reads_only_its_own_flag(self, processor, machine, verification):
        """Test load_kernel ignores the hypervisor flag."""
        verification.set(Artifact.HYPERVISOR)

        assert processor.process("load_kernel") is CommandResult.NOT_VERIFIED
        assert machine.current() is Mode.OFF

    @pytest.mark.parametrize("start", list(Mode))
    def test_shutdown_from_any_mode(self, verification, emitted, start):
        """Test shutdown always succeeds and narrates."""
        machine = BootModeMachine(verification, initial=start)
        processor = CommandProcessor(machine, emitted.append)

        assert processor.process("shutdown") is CommandResult.SUCCESS
        assert machine.current() is Mode.OFF
        assert emitted == list(SHUTDOWN_NARRATION)

    def test_shutdown_keeps_flags(self, processor, verification):
        """Test shutdown clears no verification flags."""
        verification.set(Artifact.APPLICATION)

        processor.process("shutdown")

        assert verification.is_verified(Artifact.APPLICATION) is True

    def test_is_builtin(self, processor):
        """Test the recognized built-in set."""
        assert all(processor.is_builtin(token) for token in TRANSITION_COMMANDS)
        assert not processor.is_builtin("powerup")

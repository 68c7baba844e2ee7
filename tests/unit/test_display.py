"""
Unit tests for display module.
"""

from io import StringIO

import pytest
from rich.console import Console

from secboot.cli.display import (
    MODE_COLORS,
    PROMPT_COLORS,
    build_help_table,
    build_instruction_table,
    build_status_table,
    make_emitter,
    prompt_label,
    render_result,
    show_launcher_splash,
    show_splash,
)
from secboot.core.engine import SecureBootEngine
from secboot.core.modes import Mode


@pytest.fixture
def console():
    return Console(file=StringIO(), width=120, color_system=None)


def _output(console) -> str:
    return console.file.getvalue()


class TestBranding:
    """Tests for banners and prompt labels."""

    def test_splash_edition(self, console):
        show_splash(console, "arm64")

        text = _output(console)
        assert "Secure booter 0" in text
        assert "** arm64 Edition **" in text
        assert "type powerup once to start" in text

    def test_launcher_splash(self, console):
        show_launcher_splash(console, ("x8664", "arm64"))

        text = _output(console)
        assert "Architecture options:" in text
        assert "x8664" in text and "arm64" in text

    @pytest.mark.parametrize("mode", list(Mode))
    def test_prompt_label(self, mode):
        assert prompt_label(mode) == f"{mode.label}>>"

    def test_every_mode_has_colors(self):
        assert set(MODE_COLORS) == set(Mode)
        assert set(PROMPT_COLORS) == set(Mode)


class TestEmitter:
    """Tests for make_emitter."""

    def test_emits_lines(self, console):
        emit = make_emitter(console)
        emit("Verified Hypervisor")

        assert "Verified Hypervisor" in _output(console)

    def test_mode_source_is_read_at_emit_time(self, console):
        """Test the emitter tolerates an engine created after it."""
        ref = []
        emit = make_emitter(console, lambda: ref[0].mode)
        engine = SecureBootEngine("x8664", emit)
        ref.append(engine)

        engine.handle_line("powerup")

        assert "Switched to UEFI mode" in _output(console)


class TestTables:
    """Tests for table builders."""

    def test_instruction_table_lists_everything(self, console):
        engine = SecureBootEngine("x8664", lambda text: None)

        console.print(build_instruction_table(engine))

        text = _output(console)
        for name in engine.registry.list_names():
            assert name in text

    def test_status_table(self, console):
        engine = SecureBootEngine("x8664", lambda text: None)
        engine.handle_line("powerup")
        engine.handle_line("verify_hypervisor")

        console.print(build_status_table(engine))

        text = _output(console)
        assert "UEFI" in text
        assert "verified" in text
        assert "not verified" in text

    def test_help_table(self, console):
        console.print(build_help_table())

        assert "load_application" in _output(console)


class TestRenderResult:
    """Tests for render_result."""

    @pytest.fixture
    def engine(self):
        return SecureBootEngine("x8664", lambda text: None)

    def test_mode_mismatch(self, console, engine):
        engine.handle_line("powerup")
        render_result(console, engine, engine.handle_line("ADD"))

        assert "Cannot access 'ADD' in UEFI mode" in _output(console)

    def test_unknown(self, console, engine):
        render_result(console, engine, engine.handle_line("FOO"))

        assert "Unknown instruction: 'FOO'" in _output(console)

    def test_not_verified_reports_mode(self, console, engine):
        engine.handle_line("powerup")
        render_result(console, engine, engine.handle_line("load_hypervisor"))

        assert "Mode unchanged: UEFI" in _output(console)

    def test_success_prints_nothing_extra(self, console, engine):
        render_result(console, engine, engine.handle_line("shutdown"))

        assert _output(console) == ""

"""
Unit tests for input_parser module.
"""

import pytest

from secboot.cli.input_parser import (
    iter_script_lines,
    load_script,
    strip_comment,
)


class TestScripts:
    """Tests for script handling."""

    def test_strip_comment(self):
        assert strip_comment("powerup  # start the board") == "powerup"

    def test_comment_only_line(self):
        assert strip_comment("# nothing") == ""

    def test_iter_script_lines(self):
        """Test blank and comment lines are dropped, order kept."""
        lines = ["# boot", "powerup", "", "  verify_hypervisor  ", "load_hypervisor # go"]

        assert iter_script_lines(lines) == ["powerup", "verify_hypervisor", "load_hypervisor"]

    def test_load_script(self, tmp_path):
        """Test reading a script file."""
        script = tmp_path / "boot.txt"
        script.write_text("powerup\n\n# hv\nverify_hypervisor\n", encoding="utf-8")

        assert load_script(script) == ["powerup", "verify_hypervisor"]

    def test_load_missing_script(self, tmp_path):
        with pytest.raises(OSError):
            load_script(tmp_path / "missing.txt")

"""secboot CLI Display Components.

Rich-based UI pieces shared by the interactive shell and batch runs:
- Splash banner and edition label
- Per-mode prompt colours
- Rendering of line results (refusals, instruction table, status, help)
"""

from __future__ import annotations

from collections.abc import Callable

from rich.console import Console
from rich.table import Table
from rich.text import Text

from secboot.core.dispatcher import DispatchStatus
from secboot.core.engine import LineKind, LineResult, SecureBootEngine
from secboot.core.modes import Mode
from secboot.core.processor import CommandResult

# ============================================
# Branding
# ============================================
SPLASH_COLOR = "color(197)"

EDITION_LABELS = {
    "x8664": "x8664 Edition",
    "arm64": "arm64 Edition",
}

# 256-colour palette indexes per mode
MODE_COLORS = {
    Mode.OFF: "default",
    Mode.UEFI: "color(14)",
    Mode.HYPERVISOR: "color(13)",
    Mode.KERNEL: "color(10)",
    Mode.USER: "color(11)",
}

# prompt_toolkit understands ansi names, not rich colour indexes
PROMPT_COLORS = {
    Mode.OFF: "",
    Mode.UEFI: "ansibrightcyan",
    Mode.HYPERVISOR: "ansibrightmagenta",
    Mode.KERNEL: "ansibrightgreen",
    Mode.USER: "ansibrightyellow",
}

HELP_ROWS = (
    ("powerup", "Advance one boot stage (Off → UEFI → Hypervisor → Kernel → User)"),
    ("shutdown", "Return to Off from any mode"),
    ("load_hypervisor", "Enter Hypervisor mode (hypervisor must be verified)"),
    ("load_kernel", "Enter Kernel mode (kernel must be verified)"),
    ("load_application", "Enter User mode (application must be verified)"),
    ("hint", "Show guidance for the current mode"),
    ("instructions", "List all registered instructions"),
    ("status", "Show current mode and verification flags"),
    ("help", "Show this command list"),
    ("exit", "Leave the simulator"),
)


def prompt_label(mode: Mode) -> str:
    return f"{mode.label}>>"


def show_splash(console: Console, arch: str) -> None:
    """Print the startup banner for an edition."""
    console.print(Text("  Secure booter 0: A serious game", style=SPLASH_COLOR))
    console.print(Text("    Copyright QVLX LLC 2023", style=SPLASH_COLOR))
    console.print(Text("    All rights reserved.", style=SPLASH_COLOR))
    console.print()
    console.print(f"** {EDITION_LABELS.get(arch, arch)} **", highlight=False)
    console.print("type powerup once to start", highlight=False)
    console.print("type instructions for superset", highlight=False)


def show_launcher_splash(console: Console, architectures: tuple[str, ...]) -> None:
    console.print("Welcome to QVLx Secboot Sim", highlight=False)
    console.print("Architecture options:", highlight=False)
    for arch in architectures:
        console.print(f"  {arch}", highlight=False)


def make_emitter(
    console: Console, engine_mode: Callable[[], Mode] | None = None
) -> Callable[[str], None]:
    """Build an ``emit`` callback printing narration lines.

    Args:
        console: Target console
        engine_mode: Optional zero-argument callable returning the current
            mode; narration is then coloured with that mode's colour
    """

    def emit(text: str) -> None:
        style = MODE_COLORS.get(engine_mode()) if engine_mode else None
        console.print(Text(text, style=style or ""))

    return emit


def build_instruction_table(engine: SecureBootEngine) -> Table:
    """Instructions grouped by required mode."""
    table = Table(title="Available Instructions", border_style="cyan")
    table.add_column("Instruction", style="bold")
    table.add_column("Mode")

    for instruction in sorted(engine.registry, key=lambda i: (i.required_mode, i.name)):
        mode = instruction.required_mode
        table.add_row(instruction.name, Text(mode.label, style=MODE_COLORS[mode]))
    return table


def build_status_table(engine: SecureBootEngine) -> Table:
    table = Table(title="Boot Status", border_style="cyan", show_header=False)
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    table.add_row("Edition", EDITION_LABELS.get(engine.arch, engine.arch))
    table.add_row("Mode", Text(engine.mode.label, style=MODE_COLORS[engine.mode]))
    for artifact, verified in engine.verification.snapshot().items():
        value = Text("verified", style="green") if verified else Text("not verified", style="dim")
        table.add_row(artifact.label, value)
    return table


def build_help_table() -> Table:
    table = Table(title="Commands", border_style="cyan")
    table.add_column("Command", style="cyan")
    table.add_column("Effect")
    for command, effect in HELP_ROWS:
        table.add_row(command, effect)
    return table


def render_result(console: Console, engine: SecureBootEngine, result: LineResult) -> None:
    """Print whatever a handled line needs beyond its narration."""
    if result.kind is LineKind.INSTRUCTIONS:
        console.print(build_instruction_table(engine))
    elif result.kind is LineKind.STATUS:
        console.print(build_status_table(engine))
    elif result.kind is LineKind.HELP:
        console.print(build_help_table())
    elif result.kind is LineKind.TRANSITION and result.command is CommandResult.NOT_VERIFIED:
        console.print(f"[dim]Mode unchanged: {engine.mode.label}[/dim]")
    elif result.kind is LineKind.DISPATCH and result.outcome is not None:
        outcome = result.outcome
        if outcome.status is DispatchStatus.MODE_MISMATCH:
            console.print(Text(outcome.message, style="yellow"))
        elif outcome.status is DispatchStatus.UNKNOWN_INSTRUCTION:
            console.print(Text(outcome.message, style="red"))
            console.print("[dim]Type help for commands, instructions for the instruction set[/dim]")

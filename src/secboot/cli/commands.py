"""secboot CLI - Main Entry Point.

Usage:
    secboot                              # Interactive shell (x8664 edition)
    secboot shell --arch arm64           # Interactive shell, ARM64 edition
    secboot run powerup verify_hypervisor load_hypervisor
    secboot run --script boot.txt        # Batch run from a file
    secboot launch                       # Architecture launcher
    secboot instructions --arch arm64    # Show the instruction table
    secboot config                       # Show effective configuration
"""

from __future__ import annotations

import signal
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table
from rich.text import Text

from secboot.cli.display import (
    build_instruction_table,
    make_emitter,
    prompt_label,
    render_result,
)
from secboot.cli.input_parser import iter_script_lines, load_script
from secboot.cli.launcher import Launcher
from secboot.cli.repl import ShellREPL
from secboot.cli.session import SecbootPromptSession
from secboot.core.engine import SecureBootEngine
from secboot.core.instructions import ARCHITECTURES
from secboot.core.logging_config import setup_logging
from secboot.core.settings import SecbootSettings

# ============================================
# App Definition
# ============================================
app = typer.Typer(
    name="secboot",
    help="Secure boot simulator: verify each stage before loading the next",
    add_completion=False,
    no_args_is_help=False,
)

console = Console()


# ============================================
# Shared Options
# ============================================
ArchOption = Annotated[
    str | None,
    typer.Option("--arch", "-a", help=f"Edition: {', '.join(ARCHITECTURES)}"),
]

StartModeOption = Annotated[
    str | None,
    typer.Option("--start-mode", help="Starting mode: off or uefi"),
]

VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show debug logging"),
]


def _resolve_settings(**overrides) -> SecbootSettings:
    """Load settings with CLI overrides applied on top.

    Raises:
        typer.Exit: If an override fails validation
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return SecbootSettings(**values)
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            console.print(f"[bold red]Invalid {field}: {error['msg']}[/bold red]")
        raise typer.Exit(1) from None


def _configure_logging(settings: SecbootSettings, verbose: bool) -> None:
    setup_logging(verbose=verbose, level=settings.log_level, log_file=settings.log_file)


def _run_shell(settings: SecbootSettings) -> int:
    repl = ShellREPL.from_settings(settings, console)
    return repl.run()


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Start the interactive shell when no subcommand is given."""
    if ctx.invoked_subcommand is None:
        settings = _resolve_settings()
        _configure_logging(settings, verbose=False)
        raise typer.Exit(_run_shell(settings))


@app.command()
def shell(
    arch: ArchOption = None,
    start_mode: StartModeOption = None,
    no_banner: Annotated[bool, typer.Option("--no-banner", help="Skip the splash banner")] = False,
    verbose: VerboseOption = False,
) -> None:
    """Interactive secure boot shell."""
    settings = _resolve_settings(
        arch=arch,
        initial_mode=start_mode,
        show_banner=False if no_banner else None,
    )
    _configure_logging(settings, verbose)
    raise typer.Exit(_run_shell(settings))


@app.command()
def run(
    tokens: Annotated[list[str] | None, typer.Argument(help="Commands to run, one per argument")] = None,
    script: Annotated[
        Path | None,
        typer.Option("--script", "-s", help="File with one command per line (# comments allowed)"),
    ] = None,
    arch: ArchOption = None,
    start_mode: StartModeOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Run commands non-interactively and print the transcript.

    Examples:
        secboot run powerup verify_hypervisor load_hypervisor
        secboot run --script boot.txt --arch arm64
    """
    settings = _resolve_settings(arch=arch, initial_mode=start_mode)
    _configure_logging(settings, verbose)

    lines = iter_script_lines(tokens or [])
    if script is not None:
        try:
            lines.extend(load_script(script))
        except OSError as e:
            console.print(f"[bold red]Cannot read script {script}: {e}[/bold red]")
            raise typer.Exit(1) from None

    if not lines:
        console.print("[yellow]Nothing to run. Pass commands or --script.[/yellow]")
        raise typer.Exit(1)

    engine_ref: list[SecureBootEngine] = []
    emit = make_emitter(console, lambda: engine_ref[0].mode)
    engine = SecureBootEngine(
        settings.arch, emit, initial_mode=settings.start_mode, policy=settings.duplicate_policy
    )
    engine_ref.append(engine)

    for line in lines:
        console.print(Text(f"{prompt_label(engine.mode)} {line}", style="dim"))
        result = engine.handle_line(line)
        render_result(console, engine, result)
        if result.exit_requested:
            break

    console.print(f"[bold]Final mode:[/bold] {engine.mode.label}")


@app.command()
def launch(
    start_mode: Annotated[str, typer.Option("--start-mode", help="Starting mode for launched editions")] = "uefi",
    verbose: VerboseOption = False,
) -> None:
    """Pick an architecture and run its simulator in a child process."""
    settings = _resolve_settings(initial_mode=start_mode)
    _configure_logging(settings, verbose)

    session = SecbootPromptSession(words=[*ARCHITECTURES, "exit"])
    extra_args = ["--verbose"] if verbose else []
    launcher = Launcher(console, session, start_mode=settings.initial_mode, extra_args=extra_args)
    previous = launcher.install_signal_handler()
    try:
        code = launcher.run()
    finally:
        signal.signal(signal.SIGINT, previous)
    raise typer.Exit(code)


@app.command()
def instructions(arch: ArchOption = None) -> None:
    """Show the instruction table for an edition."""
    settings = _resolve_settings(arch=arch)
    engine = SecureBootEngine(settings.arch, lambda text: None)
    console.print(build_instruction_table(engine))


@app.command()
def config() -> None:
    """Display effective configuration."""
    settings = _resolve_settings()
    table = Table(title="secboot Configuration", border_style="cyan")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    config_items = [
        ("Edition", settings.arch),
        ("Start Mode", settings.start_mode.label),
        ("Duplicate Policy", settings.duplicate_policy.value),
        ("History File", str(settings.history_file)),
        ("Show Banner", str(settings.show_banner)),
        ("Log Level", settings.log_level),
        ("Log File", str(settings.log_file) if settings.log_file else "Not set"),
    ]
    for key, value in config_items:
        table.add_row(key, value)

    console.print(table)


@app.command()
def version() -> None:
    """Show secboot version."""
    from secboot import __version__

    console.print(f"secboot [bold]{__version__}[/bold]")


def cli_main() -> None:
    """Console script entry point."""
    app()

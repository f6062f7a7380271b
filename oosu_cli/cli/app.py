"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from oosu_cli import __version__
from oosu_cli.core.config_resolver import ConfigResolver
from oosu_cli.core.orchestrator import Orchestrator
from oosu_cli.exceptions import ElevationError, OosuCliError, UsageError
from oosu_cli.models.config import Mode, RunConfig
from oosu_cli.storage.config_manager import ConfigManager
from oosu_cli.system.elevation import (
    ElevationStatus,
    PrivilegeGuard,
    forward_arguments,
)
from oosu_cli.transfer import Downloader
from oosu_cli.utils.path import default_log_path, get_config_file, get_script_dir

from .formatters import format_error_with_suggestions, format_usage, print_settings

console = Console()

console_handler = RichHandler(
    console=console,
    rich_tracebacks=True,
    show_path=False,
    show_level=False,
    markup=True,
)
logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[console_handler],
)
log = logging.getLogger("oosu_cli")

# Shell convention: 128 + signal number.
EXIT_INTERRUPTED = 130
EXIT_TERMINATED = 143

app = typer.Typer(
    name="oosu-cli",
    help=(
        "Downloads O&O ShutUp10 and a settings file, then applies the settings."
        " Select exactly one of [cyan]--default[/cyan], [cyan]--recommended[/cyan]"
        " or [cyan]--customize[/cyan]."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


class TranscriptFormatter(logging.Formatter):
    """Renders log records as plain text, stripping Rich markup."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        try:
            return Text.from_markup(line).plain
        except Exception:  # noqa: BLE001
            return line


def select_mode(default: bool, recommended: bool, customize: bool) -> Mode:
    """Returns the single selected mode, or raises UsageError."""
    selected = [
        mode
        for mode, chosen in (
            (Mode.DEFAULT, default),
            (Mode.RECOMMENDED, recommended),
            (Mode.CUSTOMIZE, customize),
        )
        if chosen
    ]
    if not selected:
        raise UsageError("No mode selected.")
    if len(selected) > 1:
        names = ", ".join(f"--{mode.value}" for mode in selected)
        raise UsageError(f"Only one mode can be selected, got: {names}.")
    return selected[0]


def configure_console(run_config: RunConfig) -> None:
    """Applies verbosity and silence to console output."""
    console.quiet = run_config.silent
    if run_config.silent:
        console_handler.setLevel(logging.CRITICAL + 1)
    else:
        console_handler.setLevel(logging.DEBUG if run_config.verbose else logging.INFO)
    log.setLevel(logging.DEBUG if run_config.verbose else logging.INFO)


def attach_transcript(log_path: Path, silent: bool = False) -> logging.Handler | None:
    """
    Records every log record of the run, at debug level, into ``log_path``.

    Returns:
        The transcript handler, or None if the file cannot be opened.
    """
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        transcript = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    except OSError as e:
        if not silent:
            print(f"Could not open transcript '{log_path}': {e}", file=sys.stderr)
        return None

    transcript.setLevel(logging.DEBUG)
    transcript.setFormatter(
        TranscriptFormatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
    )
    log.addHandler(transcript)
    log.setLevel(logging.DEBUG)
    log.debug(f"Writing transcript to '{log_path}'.")
    return transcript


def detach_transcript(transcript: logging.Handler | None) -> None:
    if transcript is not None:
        log.removeHandler(transcript)
        transcript.close()


@app.command()
def run(
    default: bool = typer.Option(
        False, "--default", help="Apply the default settings (OOSU10-Default.cfg)."
    ),
    recommended: bool = typer.Option(
        False, "--recommended", help="Apply the recommended settings (OOSU10.cfg)."
    ),
    customize: bool = typer.Option(
        False, "--customize", help="Open O&O ShutUp10 interactively."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show detailed diagnostic output."
    ),
    silent: bool = typer.Option(False, "--silent", "-s", help="Suppress all output."),
    log_enabled: bool = typer.Option(
        False, "--log", help="Save a transcript of the run to a file."
    ),
    log_path: Path | None = typer.Option(
        None,
        "--log-path",
        help="Transcript location (defaults to the desktop). Implies --log.",
        dir_okay=False,
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Settings file to use instead of the default location.",
        dir_okay=False,
    ),
    no_elevate: bool = typer.Option(
        False,
        "--no-elevate",
        help="Skip the administrator check and run with the current rights.",
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the effective settings and exit."
    ),
    write_config: bool = typer.Option(
        False, "--write-config", help="Write a default settings file and exit."
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    script_dir: Path | None = typer.Option(None, "--script-dir", hidden=True),
):
    """Stage O&O ShutUp10 and apply privacy settings."""
    console.quiet = silent
    if version:
        console.print(f"[bold]oosu-cli[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    settings_file = config_file or get_config_file()
    config_manager = ConfigManager(settings_file)

    if write_config:
        try:
            config_manager.save_new_config()
        except OosuCliError as e:
            console.print(format_error_with_suggestions(e))
            raise typer.Exit(code=1) from e
        console.print(f"[green]✓ Settings saved to '{settings_file}'[/green]")
        raise typer.Exit()

    if show_config:
        try:
            print_settings(settings_file, config_manager.load_settings())
        except OosuCliError as e:
            console.print(format_error_with_suggestions(e))
            raise typer.Exit(code=1) from e
        raise typer.Exit()

    try:
        run_config = RunConfig(
            mode=select_mode(default, recommended, customize),
            verbose=verbose,
            silent=silent,
            log=log_enabled,
            log_path=log_path,
        )
    except UsageError as e:
        console.print(format_usage(str(e)))
        raise typer.Exit(code=1) from e

    configure_console(run_config)
    script_dir = script_dir or get_script_dir()
    transcript_path = None
    if run_config.log:
        transcript_path = (run_config.log_path or default_log_path()).resolve()

    transcript = None
    try:
        if not no_elevate:
            _ensure_elevated(script_dir, transcript_path)
        if transcript_path is not None:
            transcript = attach_transcript(transcript_path, run_config.silent)
        _run(run_config, config_manager, script_dir)
    except OosuCliError as e:
        log.debug(f"Run failed: {type(e).__name__}: {e}")
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e
    except KeyboardInterrupt:
        log.debug("Run interrupted from the keyboard.")
        console.print("\n[yellow]⚠️  Operation cancelled by user.[/yellow]")
        raise typer.Exit(code=EXIT_INTERRUPTED) from None
    except asyncio.CancelledError:
        log.debug("Run terminated by signal.")
        console.print(
            "\n[yellow]⚠️  Run terminated; temporary files were removed.[/yellow]"
        )
        raise typer.Exit(code=EXIT_TERMINATED) from None
    finally:
        detach_transcript(transcript)


def _ensure_elevated(script_dir: Path, transcript_path: Path | None):
    argv = forward_arguments(
        sys.argv[1:], script_dir=script_dir, log_path=transcript_path
    )
    status = PrivilegeGuard().ensure_elevated(argv)
    if status is ElevationStatus.RELAUNCHED:
        log.info("[green]✓ Continuing in the elevated process.[/green]")
        raise typer.Exit()
    if status is ElevationStatus.RELAUNCH_FAILED:
        raise ElevationError("Could not relaunch with administrator rights.")


def _run(run_config: RunConfig, config_manager: ConfigManager, script_dir: Path):
    settings = config_manager.load_settings()
    downloader = Downloader.from_settings(settings)
    orchestrator = Orchestrator(
        run_config.mode,
        settings,
        downloader,
        resolver=ConfigResolver(downloader, search_dir=script_dir),
    )

    log.info(f"[bold cyan]Starting in {run_config.mode.value} mode...[/bold cyan]")
    asyncio.run(orchestrator.run())
    log.info("[bold green]✓ Done.[/bold green]")

"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from oosu_cli.models.config import Mode, OosuSettings


def format_error_with_suggestions(
    error: BaseException, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "ConfigurationError": [
            "• Check the settings file for typos or invalid values.",
            "• Run `oosu-cli --write-config` to regenerate a default file.",
        ],
        "ElevationError": [
            "• Accept the administrator prompt when it appears.",
            "• Start the terminal as administrator and run the command again.",
        ],
        "WorkspaceError": [
            "• Check that the temporary directory is writable.",
            "• Free some disk space and try again.",
        ],
        "DownloadError": [
            "• Check your internet connection and proxy settings.",
            "• The download server might be temporarily unavailable.",
            "• Run the command with -v to see why each attempt failed.",
        ],
        "StagingError": [
            "• Place the configuration file next to the script to skip the "
            "download.",
            "• Check that the local configuration file is readable.",
            "• Run the command with -v to see why each attempt failed.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -v for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def format_usage(message: str) -> Panel:
    """Explains the mode switches after an invalid invocation."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()
    table.add_row("--default", "Apply the default settings (OOSU10-Default.cfg).")
    table.add_row("--recommended", "Apply the recommended settings (OOSU10.cfg).")
    table.add_row("--customize", "Open O&O ShutUp10 to choose settings yourself.")

    content = Table.grid(padding=(1, 0))
    content.add_row(Text(message, style="bold red"))
    content.add_row(Text("Select exactly one mode:", style="bold yellow"))
    content.add_row(table)
    content.add_row(
        Text("Example: oosu-cli --recommended --verbose", style="dim")
    )

    return Panel(
        content,
        title="[bold yellow]Usage[/bold yellow]",
        border_style="yellow",
        expand=False,
    )


def print_settings(config_path: Path, settings: OosuSettings) -> None:
    """Displays the effective download settings."""
    console = Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    table.add_row("Tool URL:", settings.tool_url)
    table.add_row(
        f"{Mode.RECOMMENDED.config_filename}:", settings.recommended_config_url
    )
    table.add_row(f"{Mode.DEFAULT.config_filename}:", settings.default_config_url)
    table.add_row("Strategies:", " → ".join(settings.strategies))
    table.add_row("Attempts:", f"{settings.max_attempts} per strategy")
    delay = f"{settings.retry_delay:g}s" if settings.retry_delay else "none"
    table.add_row("Retry Delay:", delay)

    status = "[green]found[/green]" if config_path.is_file() else "[dim]not found[/dim]"
    console.print(
        Panel(
            table,
            title=f"Settings ([dim]{config_path}[/dim], {status})",
            border_style="cyan",
        )
    )

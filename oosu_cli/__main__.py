"""
Main entry point for the oosu-cli application.
This module handles top-level setup, exception handling, and CLI invocation.
"""

import asyncio
import logging
import os
import sys

import typer

from oosu_cli.cli.app import EXIT_INTERRUPTED, EXIT_TERMINATED, app, console
from oosu_cli.cli.formatters import format_error_with_suggestions
from oosu_cli.exceptions import OosuCliError


def main() -> None:
    """Main entry point function."""
    if os.name == "nt":
        try:
            sys.stdout.reconfigure(encoding="utf-8")
            sys.stderr.reconfigure(encoding="utf-8")
        except (TypeError, AttributeError):
            pass

    log = logging.getLogger("oosu_cli")

    try:
        app()
    except (typer.Exit, typer.Abort):
        pass
    except KeyboardInterrupt:
        console.print("\n[yellow]⚠️  Operation cancelled by user.[/yellow]")
        sys.exit(EXIT_INTERRUPTED)
    except asyncio.CancelledError:
        console.print(
            "\n[yellow]⚠️  Run terminated; temporary files were removed.[/yellow]"
        )
        sys.exit(EXIT_TERMINATED)
    except OosuCliError as e:
        console.print()
        console.print(format_error_with_suggestions(e))
        sys.exit(1)
    except Exception as e:
        console.print()
        console.print(format_error_with_suggestions(e, {"type": "Unexpected"}))
        log.debug("Full traceback:", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()

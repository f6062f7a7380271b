"""
Utilities for locating the script, settings and transcript directories.
"""

import os
import sys
from datetime import datetime
from pathlib import Path


def get_script_dir() -> Path:
    """
    Returns the directory containing the running script.

    Local configuration overrides are looked up here, never in the working
    directory or the current directory. A frozen build resolves to the
    directory of its executable.
    """
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(sys.argv[0]).resolve().parent


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "oosu-cli"


def get_config_file() -> Path:
    return get_config_dir() / "config.ini"


def default_log_path() -> Path:
    """Builds the default transcript location on the user's desktop."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return Path.home() / "Desktop" / f"oosu-cli_{timestamp}.log"

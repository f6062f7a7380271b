"""
Manages loading, validation, and creation of the optional INI settings file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from oosu_cli.exceptions import ConfigurationError
from oosu_cli.models.config import OosuSettings

log = logging.getLogger(__name__)


class ConfigManager:
    """Handles all operations related to the application's INI settings file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser(interpolation=None)

    def load_settings(self) -> OosuSettings:
        """
        Loads settings from the INI file and validates them.

        A missing file is not an error: the built-in endpoints and the default
        retry policy are used instead.

        Returns:
            A validated OosuSettings object.

        Raises:
            ConfigurationError: If the file cannot be parsed or validation fails.
        """
        if not self.config_file_path.is_file():
            log.debug(
                f"No settings file at '{self.config_file_path}', using defaults."
            )
            return OosuSettings()

        try:
            self._parser.read(self.config_file_path, encoding="utf-8")
        except configparser.Error as e:
            raise ConfigurationError(f"Error parsing settings file: {e}") from e

        settings_from_file = self._get_settings_as_dict()
        log.debug(
            f"Loaded {len(settings_from_file)} setting(s) from "
            f"'{self.config_file_path}'."
        )

        try:
            return OosuSettings(**settings_from_file)
        except ValidationError as e:
            raise ConfigurationError(f"Settings validation failed:\n{e}") from e

    def save_new_config(self, settings: OosuSettings | None = None) -> None:
        """
        Creates and saves a complete settings file.

        Args:
            settings: The settings to write. Defaults are written when omitted.
        """
        settings = settings or OosuSettings()
        config = configparser.ConfigParser(interpolation=None)
        config["DEFAULT"] = {}

        for key in OosuSettings.get_ini_keys():
            value = getattr(settings, key)
            if isinstance(value, list):
                config["DEFAULT"][key] = ",".join(map(str, value))
            else:
                config["DEFAULT"][key] = str(value)

        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, "w", encoding="utf-8") as configfile:
                config.write(configfile)
        except OSError as e:
            raise ConfigurationError(f"Failed to save settings file: {e}") from e

    def _get_settings_as_dict(self) -> dict[str, Any]:
        """Reads the keys present in the 'DEFAULT' section into a dictionary."""
        section = self._parser["DEFAULT"]
        settings: dict[str, Any] = {}
        for key in OosuSettings.get_ini_keys():
            if key not in section:
                continue
            raw = section.get(key, "")
            if key == "strategies":
                settings[key] = [s.strip() for s in raw.split(",") if s.strip()]
            else:
                settings[key] = raw

        unknown = set(section) - set(OosuSettings.get_ini_keys())
        for key in sorted(unknown):
            log.warning(f"[yellow]Ignoring unknown setting '{key}'.[/yellow]")
        return settings

"""
Pydantic models for the run configuration and the download settings.
Provides robust validation for all settings.
"""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

TOOL_FILENAME = "OOSU10.exe"
QUIET_FLAG = "/quiet"

DEFAULT_TOOL_URL = "https://dl5.oo-software.com/files/ooshutup10/OOSU10.exe"
DEFAULT_RECOMMENDED_CONFIG_URL = (
    "https://raw.githubusercontent.com/oosu-cli/oosu-cli/main/configs/OOSU10.cfg"
)
DEFAULT_DEFAULT_CONFIG_URL = (
    "https://raw.githubusercontent.com/oosu-cli/oosu-cli/main/configs/"
    "OOSU10-Default.cfg"
)

KNOWN_STRATEGIES = ("aiohttp", "httpx", "bits")


class Mode(str, Enum):
    """The operating modes, exactly one of which is selected per run."""

    DEFAULT = "default"
    RECOMMENDED = "recommended"
    CUSTOMIZE = "customize"

    @property
    def config_filename(self) -> str | None:
        """Name of the configuration artifact for this mode, if it needs one."""
        return {
            Mode.DEFAULT: "OOSU10-Default.cfg",
            Mode.RECOMMENDED: "OOSU10.cfg",
        }.get(self)

    @property
    def requires_config(self) -> bool:
        return self.config_filename is not None


class RunConfig(BaseModel):
    """Immutable options for a single run, parsed from the command line."""

    model_config = ConfigDict(frozen=True)

    mode: Mode
    verbose: bool = False
    silent: bool = False
    log: bool = False
    log_path: Path | None = None

    @model_validator(mode="before")
    @classmethod
    def validate_log_options(cls, data: Any) -> Any:
        """A log path without the log switch still asks for a transcript."""
        if isinstance(data, dict) and data.get("log_path") is not None:
            data = {**data, "log": True}
        return data


class OosuSettings(BaseModel):
    """Remote endpoints and the retry policy used to fetch them."""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    tool_url: str = DEFAULT_TOOL_URL
    recommended_config_url: str = DEFAULT_RECOMMENDED_CONFIG_URL
    default_config_url: str = DEFAULT_DEFAULT_CONFIG_URL

    max_attempts: int = 3
    retry_delay: float = 0.0
    strategies: list[str] = Field(default_factory=lambda: list(KNOWN_STRATEGIES))

    @field_validator("tool_url", "recommended_config_url", "default_config_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Only plain HTTP(S) URLs can be handed to every transport."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"URL must start with http:// or https://, got: {v}")
        return v

    @field_validator("max_attempts")
    @classmethod
    def validate_attempts(cls, v: int) -> int:
        if v < 1 or v > 10:
            raise ValueError("max_attempts must be between 1 and 10.")
        return v

    @field_validator("retry_delay")
    @classmethod
    def validate_delay(cls, v: float) -> float:
        if v < 0:
            raise ValueError("retry_delay cannot be negative.")
        return v

    @field_validator("strategies")
    @classmethod
    def validate_strategies(cls, v: list[str]) -> list[str]:
        """Ensures the strategy order names known transports, each once."""
        names = [name.strip().lower() for name in v if name.strip()]
        if not names:
            raise ValueError("At least one download strategy is required.")
        unknown = [name for name in names if name not in KNOWN_STRATEGIES]
        if unknown:
            raise ValueError(
                f"Unknown download strategies: {', '.join(unknown)}. "
                f"Choose from: {', '.join(KNOWN_STRATEGIES)}."
            )
        if len(set(names)) != len(names):
            raise ValueError("Download strategies must not repeat.")
        return names

    def config_url_for(self, mode: Mode) -> str:
        """Returns the fallback download URL for the mode's configuration file."""
        if mode is Mode.DEFAULT:
            return self.default_config_url
        if mode is Mode.RECOMMENDED:
            return self.recommended_config_url
        raise ValueError(f"Mode '{mode.value}' does not use a configuration file.")

    @classmethod
    def get_ini_keys(cls) -> list[str]:
        """Returns all keys that are expected in the INI file, in field order."""
        return list(cls.model_fields)

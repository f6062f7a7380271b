"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class OosuCliError(Exception):
    """Base exception for all application-specific errors."""


class UsageError(OosuCliError):
    """Raised when the command-line switches do not select exactly one mode."""


class ConfigurationError(OosuCliError):
    """Raised for issues related to settings file loading or validation."""


class ElevationError(OosuCliError):
    """Raised when the elevated relaunch of the process cannot be started."""


class WorkspaceError(OosuCliError):
    """Raised when the temporary working directory cannot be created."""


class TransportError(OosuCliError):
    """Raised by a single transport strategy when one download attempt fails."""


class DownloadError(OosuCliError):
    """Raised when every transport strategy failed to fetch the external tool."""


class StagingError(OosuCliError):
    """
    Raised when the configuration artifact can be neither copied from the local
    override nor downloaded.
    """

"""
Host System Layer.

Privilege checks, elevated relaunch and child-process execution.
"""

from .elevation import ElevationStatus, PrivilegeGuard
from .launcher import ProcessLauncher, ToolLauncher

__all__ = ["ElevationStatus", "PrivilegeGuard", "ProcessLauncher", "ToolLauncher"]

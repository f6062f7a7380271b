"""
Data Models Layer.

This package contains Pydantic models that define the run options and the
download settings used throughout the application.
"""

from .config import Mode, OosuSettings, RunConfig

__all__ = ["Mode", "OosuSettings", "RunConfig"]

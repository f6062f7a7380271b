"""
Transfer Layer.

This package is responsible for fetching remote files, trying several
independent transport strategies with retries.
"""

from .downloader import Downloader
from .transports import AiohttpTransport, BitsTransport, HttpxTransport

__all__ = ["Downloader", "AiohttpTransport", "HttpxTransport", "BitsTransport"]

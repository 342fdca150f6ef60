"""Shared utility functions.

This subpackage provides common utility functions used across
the application with no dependencies on other subpackages.

Key modules:
    - paths: Asset path resolution and path safety
    - logging: Logging configuration and key masking
    - protocols: Protocol definitions for dependency injection
"""

from .paths import ensure_within, resolve_asset_path
from .logging import configure_logging, get_logger, sanitize_text
from .protocols import Provider, ProgressObserver, StreamCallback

__all__ = [
    # paths
    "ensure_within",
    "resolve_asset_path",
    # logging
    "configure_logging",
    "get_logger",
    "sanitize_text",
    # protocols
    "Provider",
    "ProgressObserver",
    "StreamCallback",
]

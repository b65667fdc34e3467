"""
Utilities package for SQLHelper.

Exports shared logging helpers. Keep this package lightweight and free of
connection logic.
"""

from sqlhelper.utils.logging import configure_from_settings, configure_logging, get_logger

__all__ = [
    "configure_from_settings",
    "configure_logging",
    "get_logger",
]

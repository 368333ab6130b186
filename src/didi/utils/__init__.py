"""
Utility helpers for DIDI.
"""

from .logging import configure_logging, get_logger, install_library_defaults, log_context

__all__ = ["configure_logging", "get_logger", "install_library_defaults", "log_context"]

"""Configuration for DIDI tools."""

from .config import DidiConfig

__all__ = ["DidiConfig"]

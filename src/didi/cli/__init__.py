"""DIDI command-line interface."""

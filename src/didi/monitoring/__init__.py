"""Monitoring helpers for DIDI."""

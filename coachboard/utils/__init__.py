"""Shared utilities module."""

__all__ = [
    "cli_common",
    "coach_api",
    "errors",
    "render",
]

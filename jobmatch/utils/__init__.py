"""Shared utilities."""

from .timestamps import format_timestamp, utc_now

__all__ = ["utc_now", "format_timestamp"]

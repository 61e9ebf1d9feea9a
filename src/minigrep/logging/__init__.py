"""Structured logging utilities."""

from .audit import JsonlAuditLogger, SearchEvent, sanitize_arguments, utc_timestamp

__all__ = ["JsonlAuditLogger", "SearchEvent", "sanitize_arguments", "utc_timestamp"]

"""Structured logging utilities."""

from .audit import AuditEvent, JsonlAuditLogger, NullAuditLogger, sanitize_metadata, utc_timestamp

__all__ = [
    "AuditEvent",
    "JsonlAuditLogger",
    "NullAuditLogger",
    "sanitize_metadata",
    "utc_timestamp",
]

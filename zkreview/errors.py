"""
zkreview.errors
===============

Error types raised (or carried inside an ``AssemblyResult``) by the review
pipeline.

Only the two external checks of the assembler can fail at run time
(signature verification and header-field location), plus the caller-side
capacity precheck. Everything in ``zkreview.circuit`` is total: truncation
inside a bounded buffer is a silent data-loss policy, not an error.

Messages are safe to log: they never carry address bytes, review text or key
material, only sizes and reasons.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    SIGNATURE_INVALID = "REVIEW/SIGNATURE_INVALID"
    FIELD_LOCATION_INVALID = "REVIEW/FIELD_LOCATION_INVALID"
    CAPACITY_VIOLATION = "REVIEW/CAPACITY_VIOLATION"
    CONFIG = "REVIEW/CONFIG"


class ReviewError(Exception):
    """Root error for zkreview. ``code`` is machine-stable, ``message`` is for humans."""

    code: ErrorKind = ErrorKind.CONFIG

    def __init__(self, message: str, *, data: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(f"{self.code.value}: {message}")
        self.message = message
        self.data: Dict[str, Any] = dict(data or {})

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view for logs and API bridges."""
        return {"code": self.code.value, "message": self.message, "data": dict(self.data)}


class SignatureInvalid(ReviewError):
    """The header signature does not verify under the signing key."""

    code = ErrorKind.SIGNATURE_INVALID


class FieldLocationInvalid(ReviewError):
    """The header/address spans do not describe a well-formed address field."""

    code = ErrorKind.FIELD_LOCATION_INVALID


class CapacityViolation(ReviewError):
    """An input exceeds the fixed maxima and must be rejected before invocation."""

    code = ErrorKind.CAPACITY_VIOLATION


class ConfigError(ReviewError):
    code = ErrorKind.CONFIG


__all__ = [
    "ErrorKind",
    "ReviewError",
    "SignatureInvalid",
    "FieldLocationInvalid",
    "CapacityViolation",
    "ConfigError",
]

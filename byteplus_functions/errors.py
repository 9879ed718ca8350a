from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    PERMISSION_DENIED = "permission-denied"
    INVALID_ARGUMENT = "invalid-argument"
    NOT_FOUND = "not-found"
    ALREADY_EXISTS = "already-exists"
    INTERNAL = "internal"


class FunctionError(Exception):
    """Typed failure surfaced to synchronous callers."""

    def __init__(self, code: ErrorCode, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details

    def __repr__(self):
        return f"FunctionError(code={self.code.value!r}, message={self.message!r})"

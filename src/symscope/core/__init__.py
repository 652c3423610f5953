"""Core types shared across symscope."""

from symscope.core.errors import (
    ERROR_MESSAGES,
    RECOVERY_HINTS,
    ErrorCode,
    IndexNotReadyError,
    QueryValidationError,
    SymscopeError,
    config_error,
    query_error,
    snapshot_error,
)

__all__ = [
    "ERROR_MESSAGES",
    "ErrorCode",
    "IndexNotReadyError",
    "QueryValidationError",
    "RECOVERY_HINTS",
    "SymscopeError",
    "config_error",
    "query_error",
    "snapshot_error",
]

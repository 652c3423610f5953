"""Symscope Error System.

Provides structured error handling with:
- Numeric error codes for programmatic handling
- User-friendly messages
- Recovery hints for callers and agents
- Context for debugging
"""


from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Numeric error codes organized by category.

    Format: XYYY where X = category, YYY = specific error

    Categories:
        1xxx - Query errors
        2xxx - Index errors
        5xxx - Configuration errors
        6xxx - Runtime errors
        7xxx - IO errors
    """

    # 1xxx - Query Errors
    QUERY_SYMBOL_MISSING = 1001
    QUERY_LINE_RANGE_INVALID = 1002
    QUERY_DEPTH_INVALID = 1003
    QUERY_MEMBER_BLANK = 1004

    # 2xxx - Index Errors
    INDEX_NOT_READY = 2001
    INDEX_SNAPSHOT_INVALID = 2002
    INDEX_ELEMENT_DETACHED = 2003

    # 5xxx - Configuration Errors
    CONFIG_INVALID = 5002

    # 6xxx - Runtime Errors
    RUNTIME_STATE_INVALID = 6001

    # 7xxx - IO Errors
    FILE_NOT_FOUND = 7003

    @property
    def category(self) -> str:
        """Get the error category name."""
        prefix = self.value // 1000
        return {
            1: "query",
            2: "index",
            5: "config",
            6: "runtime",
            7: "io",
        }.get(prefix, "unknown")

    @property
    def is_recoverable(self) -> bool:
        """Whether this error type is typically recoverable."""
        non_recoverable = {
            ErrorCode.CONFIG_INVALID,
            ErrorCode.INDEX_SNAPSHOT_INVALID,
        }
        return self not in non_recoverable


ERROR_MESSAGES: dict[ErrorCode, str] = {
    # Query errors
    ErrorCode.QUERY_SYMBOL_MISSING: "`symbolName` must not be blank",
    ErrorCode.QUERY_LINE_RANGE_INVALID: "Invalid line range: {detail}",
    ErrorCode.QUERY_DEPTH_INVALID: "`responseDepth` must be greater than or equal to 0",
    ErrorCode.QUERY_MEMBER_BLANK: "`{detail}` must not be blank when given",

    # Index errors
    ErrorCode.INDEX_NOT_READY: "Indices are updating. Try again later.",
    ErrorCode.INDEX_SNAPSHOT_INVALID: "Invalid index snapshot '{path}': {detail}",
    ErrorCode.INDEX_ELEMENT_DETACHED: "Resolved {kind} has no containing file.",

    # Config errors
    ErrorCode.CONFIG_INVALID: "Invalid configuration for '{key}': {detail}",

    # Runtime errors
    ErrorCode.RUNTIME_STATE_INVALID: "Invalid runtime state: {detail}",

    # IO errors
    ErrorCode.FILE_NOT_FOUND: "File not found: {path}",
}


RECOVERY_HINTS: dict[ErrorCode, list[str]] = {
    ErrorCode.QUERY_SYMBOL_MISSING: [
        "Pass a fully qualified class name, a short class name, or a resource path",
    ],
    ErrorCode.QUERY_LINE_RANGE_INVALID: [
        "Provide both lineStart and lineEnd, or neither",
        "Line numbers are 1-based",
    ],
    ErrorCode.INDEX_NOT_READY: [
        "Wait for indexing to finish and retry the same request",
    ],
    ErrorCode.INDEX_SNAPSHOT_INVALID: [
        "Check the snapshot against the documented YAML layout",
        "Regenerate the snapshot from the indexer that produced it",
    ],
}


class SymscopeError(Exception):
    """Base error type for all symscope errors.

    Example:
        >>> err = SymscopeError(
        ...     code=ErrorCode.FILE_NOT_FOUND,
        ...     context={"path": "index.yaml"}
        ... )
        >>> print(err)
        [SY-7003] File not found: index.yaml
    """

    def __init__(
        self,
        code: ErrorCode,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        self.code = code
        self.context = context or {}
        self.cause = cause
        super().__init__(str(self))

    @property
    def message(self) -> str:
        """Get the formatted user-friendly message."""
        template = ERROR_MESSAGES.get(self.code, "An error occurred: {detail}")
        try:
            return template.format(**self.context)
        except KeyError:
            return template

    @property
    def recovery_hints(self) -> list[str]:
        """Get recovery suggestions for this error."""
        formatted = []
        for hint in RECOVERY_HINTS.get(self.code, []):
            try:
                formatted.append(hint.format(**self.context))
            except KeyError:
                formatted.append(hint)
        return formatted

    @property
    def is_recoverable(self) -> bool:
        """Whether this error is typically recoverable."""
        return self.code.is_recoverable

    @property
    def category(self) -> str:
        """Get the error category."""
        return self.code.category

    @property
    def error_id(self) -> str:
        """Get the error ID string (e.g., 'SY-1001')."""
        return f"SY-{self.code.value}"

    def __str__(self) -> str:
        return f"[{self.error_id}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, context={self.context!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dict for logging/API responses."""
        return {
            "error_id": self.error_id,
            "code": self.code.value,
            "category": self.category,
            "message": self.message,
            "recoverable": self.is_recoverable,
            "recovery_hints": self.recovery_hints,
            "context": self.context,
        }


class QueryValidationError(SymscopeError, ValueError):
    """A lookup query was rejected before touching the index."""


class IndexNotReadyError(SymscopeError):
    """Raised by an index gate when indices change under a read snapshot."""

    def __init__(self, detail: str = "", cause: Exception | None = None):
        super().__init__(ErrorCode.INDEX_NOT_READY, {"detail": detail}, cause)


# Convenience factory functions

def query_error(code: ErrorCode, detail: str = "") -> QueryValidationError:
    """Create a query validation error."""
    return QueryValidationError(code=code, context={"detail": detail})


def snapshot_error(path: str, detail: str, cause: Exception | None = None) -> SymscopeError:
    """Create an INDEX_SNAPSHOT_INVALID error."""
    return SymscopeError(
        code=ErrorCode.INDEX_SNAPSHOT_INVALID,
        context={"path": path, "detail": detail},
        cause=cause,
    )


def config_error(key: str, detail: str = "") -> SymscopeError:
    """Create a configuration error."""
    return SymscopeError(
        code=ErrorCode.CONFIG_INVALID,
        context={"key": key, "detail": detail},
    )

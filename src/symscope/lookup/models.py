"""Lookup request and response types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from symscope.core.errors import ErrorCode, query_error


class Status(Enum):
    """Outcome of a lookup."""

    OK = "OK"
    NOT_FOUND = "NOT_FOUND"
    INDEXING = "INDEXING"
    ERROR = "ERROR"


class SymbolKind(Enum):
    """What a lookup resolved to."""

    CLASS = "CLASS"
    METHOD = "METHOD"
    FIELD = "FIELD"
    RESOURCE = "RESOURCE"
    FILE = "FILE"
    UNKNOWN = "UNKNOWN"


class Origin(Enum):
    """Where an element's text comes from."""

    SOURCE = "SOURCE"
    DECOMPILED = "DECOMPILED"
    RESOURCE = "RESOURCE"


@dataclass(frozen=True, slots=True)
class Query:
    """A validated lookup request.

    Attributes:
        symbol_name: Fully qualified or short class name, or a resource path.
        method_name: Method to narrow the class to.
        method_param_types: Parameter type names used to pick an overload.
        field_name: Field to narrow the class to.
        module_name: Module whose classpath scopes and ranks the search.
        line_start: First line (1-based, inclusive) of an explicit slice.
        line_end: Last line (1-based, inclusive) of an explicit slice.
        prefer_source: Rank source-backed copies before compiled ones.
        include_inherited: Include inherited methods when matching by name.
        force_decompiled: Render the resolved element itself, never its source mirror.
        allow_resource_lookup: Fall back to classpath resources when no class matches.
        response_depth: Maximum brace nesting kept in the snippet.

    Raises:
        QueryValidationError: On construction, for a blank symbol name, a
            half-specified or non-positive line range, a negative depth,
            or a blank method or field name.
    """

    symbol_name: str
    method_name: str | None = None
    method_param_types: tuple[str, ...] | None = None
    field_name: str | None = None
    module_name: str | None = None
    line_start: int | None = None
    line_end: int | None = None
    prefer_source: bool = True
    include_inherited: bool = True
    force_decompiled: bool = False
    allow_resource_lookup: bool = True
    response_depth: int | None = None

    def __post_init__(self) -> None:
        if not self.symbol_name or not self.symbol_name.strip():
            raise query_error(ErrorCode.QUERY_SYMBOL_MISSING)
        if (self.line_start is None) != (self.line_end is None):
            raise query_error(
                ErrorCode.QUERY_LINE_RANGE_INVALID,
                "lineStart and lineEnd must be given together",
            )
        if self.line_start is not None and (self.line_start < 1 or self.line_end < 1):
            raise query_error(ErrorCode.QUERY_LINE_RANGE_INVALID, "line numbers are 1-based")
        if self.response_depth is not None and self.response_depth < 0:
            raise query_error(ErrorCode.QUERY_DEPTH_INVALID)
        for member, value in (("methodName", self.method_name), ("fieldName", self.field_name)):
            if value is not None and not value.strip():
                raise query_error(ErrorCode.QUERY_MEMBER_BLANK, member)
        if self.method_param_types is not None and not isinstance(self.method_param_types, tuple):
            object.__setattr__(self, "method_param_types", tuple(self.method_param_types))

    @property
    def has_line_range(self) -> bool:
        return self.line_start is not None and self.line_end is not None


@dataclass(frozen=True, slots=True)
class Candidate:
    """One match considered during a lookup."""

    symbol_key: str
    origin: Origin
    module_name: str | None
    classpath_entry: str
    uri: str
    kind: SymbolKind

    def to_dict(self) -> dict[str, Any]:
        return {
            "symbolKey": self.symbol_key,
            "origin": self.origin.value,
            "moduleName": self.module_name,
            "classpathEntry": self.classpath_entry,
            "uri": self.uri,
            "kind": self.kind.value,
        }


@dataclass(frozen=True, slots=True)
class Snippet:
    """Extracted text with 1-based lines (0 = unknown) and offsets (-1 = unknown)."""

    text: str | None
    start_line: int = 0
    end_line: int = 0
    start_offset: int = -1
    end_offset: int = -1


@dataclass(frozen=True, slots=True)
class LookupResult:
    """The single response of a lookup."""

    status: Status
    message: str
    source_text: str | None = None
    uri: str | None = None
    symbol_key: str | None = None
    kind: SymbolKind = SymbolKind.UNKNOWN
    module_name: str | None = None
    origin: Origin | None = None
    start_line: int = 0
    end_line: int = 0
    start_offset: int = -1
    end_offset: int = -1
    alternatives: tuple[Candidate, ...] = ()
    diagnostics: str | None = None

    @property
    def is_ok(self) -> bool:
        return self.status is Status.OK

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase keys of the tool wire format."""
        return {
            "status": self.status.value,
            "humanMessage": self.message,
            "sourceText": self.source_text,
            "uri": self.uri,
            "symbolKey": self.symbol_key,
            "kind": self.kind.value,
            "moduleName": self.module_name,
            "origin": self.origin.value if self.origin else None,
            "startLine": self.start_line,
            "endLine": self.end_line,
            "startOffset": self.start_offset,
            "endOffset": self.end_offset,
            "alternatives": [c.to_dict() for c in self.alternatives],
            "diagnostics": self.diagnostics,
        }

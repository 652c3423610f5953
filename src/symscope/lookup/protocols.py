"""Collaborator contracts consumed by the lookup engine.

The engine never owns an index, a module model or a file system. Embedders
pass implementations of these protocols in a `LookupProject`, so the same
engine runs against an IDE index, a snapshot, or test doubles.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol, TypeVar, runtime_checkable

from symscope.lookup.elements import ClassElement, SourceFile

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class SearchScope:
    """Subset of the index searched for a name.

    ``module_name=None`` means the whole project; otherwise the module plus
    its dependencies and libraries.
    """

    module_name: str | None = None

    @classmethod
    def everything(cls) -> SearchScope:
        return cls()


@runtime_checkable
class LineDocument(Protocol):
    """A live, line-indexed text buffer. Line numbers are 0-based."""

    @property
    def text(self) -> str: ...

    @property
    def line_count(self) -> int: ...

    def line_start_offset(self, line: int) -> int: ...

    def line_end_offset(self, line: int) -> int: ...

    def line_number(self, offset: int) -> int: ...


class ClassRoot(Protocol):
    """A classpath root that files can be looked up under."""

    def find_file(self, relative_path: str) -> SourceFile | None: ...


class SymbolIndex(Protocol):
    """Name to declaration lookup over a pre-built index."""

    def find_exact_name(self, qualified_name: str, scope: SearchScope) -> Sequence[ClassElement]: ...

    def find_by_short_name(self, short_name: str, scope: SearchScope) -> Sequence[ClassElement]: ...


class ClasspathResolver(Protocol):
    """Module and classpath ownership model."""

    def has_module(self, module_name: str) -> bool: ...

    def class_roots(self, module_name: str | None) -> Sequence[ClassRoot]: ...

    def owner_module(self, file: SourceFile) -> str | None: ...

    def classpath_label(self, file: SourceFile) -> str: ...


class DocumentProvider(Protocol):
    """Access to file contents and file-type detection."""

    def get_document(self, file: SourceFile) -> LineDocument | None: ...

    def load_text(self, file: SourceFile) -> str:
        """Return raw file text, raising OSError when it cannot be read."""
        ...

    def is_binary(self, file: SourceFile) -> bool: ...


class IndexGate(Protocol):
    """Index readiness and read-consistency control."""

    def is_index_building(self) -> bool: ...

    def with_read_snapshot(self, fn: Callable[[], T]) -> T:
        """Run ``fn`` under read access, releasing it on every exit path.

        Raises:
            IndexNotReadyError: If the index stops being ready mid-snapshot.
        """
        ...


@dataclass(frozen=True, slots=True)
class LookupProject:
    """Everything the engine needs to know about one project."""

    name: str
    index: SymbolIndex
    classpath: ClasspathResolver
    documents: DocumentProvider
    gate: IndexGate
    base_path: str | None = None

"""Symbol and resource lookup.

Resolves a loosely specified symbol (class name, optional member and
parameter types, module scope, line range, nesting depth) against a
pre-built project index and returns a ranked, bounded source snippet.
"""

from symscope.lookup.document import TextDocument
from symscope.lookup.elements import (
    ClassElement,
    Element,
    FieldElement,
    FileElement,
    MethodElement,
    ResourceElement,
    SourceFile,
    TextRange,
    UnknownElement,
)
from symscope.lookup.engine import SymbolLookup, resolve
from symscope.lookup.models import (
    Candidate,
    LookupResult,
    Origin,
    Query,
    Snippet,
    Status,
    SymbolKind,
)
from symscope.lookup.protocols import (
    ClasspathResolver,
    ClassRoot,
    DocumentProvider,
    IndexGate,
    LineDocument,
    LookupProject,
    SearchScope,
    SymbolIndex,
)
from symscope.lookup.truncation import truncate_by_depth

__all__ = [
    "Candidate",
    "ClassElement",
    "ClassRoot",
    "ClasspathResolver",
    "DocumentProvider",
    "Element",
    "FieldElement",
    "FileElement",
    "IndexGate",
    "LineDocument",
    "LookupProject",
    "LookupResult",
    "MethodElement",
    "Origin",
    "Query",
    "ResourceElement",
    "SearchScope",
    "Snippet",
    "SourceFile",
    "Status",
    "SymbolIndex",
    "SymbolKind",
    "SymbolLookup",
    "TextDocument",
    "TextRange",
    "UnknownElement",
    "resolve",
    "truncate_by_depth",
]

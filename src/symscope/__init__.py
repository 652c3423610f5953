"""symscope - symbol-to-source lookup over a JVM project index.

Resolves a class name, member or classpath resource to a ranked,
depth-bounded source snippet with its location and alternatives.
"""

from symscope.core.errors import ErrorCode, SymscopeError
from symscope.index import MemoryWorkspace, load_snapshot
from symscope.lookup import (
    Candidate,
    LookupResult,
    Origin,
    Query,
    Status,
    SymbolKind,
    SymbolLookup,
    resolve,
    truncate_by_depth,
)

__version__ = "0.1.0"

__all__ = [
    # Lookup
    "Query",
    "LookupResult",
    "Candidate",
    "Status",
    "SymbolKind",
    "Origin",
    "SymbolLookup",
    "resolve",
    "truncate_by_depth",
    # Index
    "MemoryWorkspace",
    "load_snapshot",
    # Errors
    "ErrorCode",
    "SymscopeError",
]

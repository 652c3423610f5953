"""Result assembly: candidate construction, deduplication, anchors and status results."""

from __future__ import annotations

import traceback
from collections.abc import Iterable
from pathlib import Path

from symscope.lookup.elements import (
    ClassElement,
    Element,
    FieldElement,
    FileElement,
    MethodElement,
    ResourceElement,
    SourceFile,
    UnknownElement,
    is_compiled_element,
)
from symscope.lookup.models import (
    Candidate,
    LookupResult,
    Origin,
    Query,
    Snippet,
    Status,
    SymbolKind,
)
from symscope.lookup.protocols import LookupProject


def kind_of(element: Element) -> SymbolKind:
    match element:
        case ClassElement():
            return SymbolKind.CLASS
        case MethodElement():
            return SymbolKind.METHOD
        case FieldElement():
            return SymbolKind.FIELD
        case FileElement():
            return SymbolKind.FILE
        case ResourceElement():
            return SymbolKind.RESOURCE
        case UnknownElement():
            return SymbolKind.UNKNOWN


def candidate_for_element(project: LookupProject, element: Element) -> Candidate:
    """Describe an element as a Candidate (origin, module and classpath resolved)."""
    file = element.file
    module = project.classpath.owner_module(file) if file is not None else None
    if isinstance(element, ResourceElement):
        origin = Origin.RESOURCE
    else:
        origin = Origin.DECOMPILED if is_compiled_element(element) else Origin.SOURCE
    return Candidate(
        symbol_key=element.qualified_name,
        origin=origin,
        module_name=module,
        classpath_entry=project.classpath.classpath_label(file) if file is not None else "",
        uri=file.url if file is not None else "",
        kind=kind_of(element),
    )


def candidate_for_resource(project: LookupProject, file: SourceFile) -> Candidate:
    return candidate_for_element(project, ResourceElement(file))


def dedupe_candidates(primary: Candidate, rest: Iterable[Candidate]) -> tuple[Candidate, ...]:
    """Primary first, then first-seen candidates with a URI not seen before."""
    by_uri: dict[str, Candidate] = {primary.uri: primary}
    for candidate in rest:
        by_uri.setdefault(candidate.uri, candidate)
    return tuple(by_uri.values())


def anchor(
    base_uri: str | None,
    start_line: int,
    end_line: int,
    start_offset: int,
    end_offset: int,
) -> str | None:
    """Location URI with a line (``#L3-L9``) or offset (``#offset=10-42``) suffix."""
    if base_uri is None or not base_uri.strip():
        return base_uri
    if start_line > 0:
        if end_line > start_line:
            return f"{base_uri}#L{start_line}-L{end_line}"
        return f"{base_uri}#L{start_line}"
    if start_offset >= 0:
        if end_offset > start_offset:
            return f"{base_uri}#offset={start_offset}-{end_offset}"
        return f"{base_uri}#offset={start_offset}"
    return base_uri


def ok_result(
    message: str,
    snippet: Snippet,
    text: str | None,
    file: SourceFile,
    symbol_key: str,
    kind: SymbolKind,
    primary: Candidate,
    alternatives: tuple[Candidate, ...],
    diagnostics: str | None = None,
) -> LookupResult:
    return LookupResult(
        status=Status.OK,
        message=message,
        source_text=text,
        uri=anchor(file.url, snippet.start_line, snippet.end_line, snippet.start_offset, snippet.end_offset),
        symbol_key=symbol_key,
        kind=kind,
        module_name=primary.module_name,
        origin=primary.origin,
        start_line=snippet.start_line,
        end_line=snippet.end_line,
        start_offset=snippet.start_offset,
        end_offset=snippet.end_offset,
        alternatives=alternatives,
        diagnostics=diagnostics,
    )


def not_found_result(query: Query) -> LookupResult:
    return LookupResult(
        status=Status.NOT_FOUND,
        message=f"No class or resource matched symbolName: {query.symbol_name}",
        symbol_key=query.symbol_name,
        module_name=query.module_name,
        diagnostics="Tried FQN and short-name class resolution, then resource lookup (if allowed).",
    )


def not_found_inside(project: LookupProject, owner: ClassElement, query: Query, message: str) -> LookupResult:
    return LookupResult(
        status=Status.NOT_FOUND,
        message=message,
        symbol_key=owner.qualified_name,
        module_name=query.module_name,
        alternatives=(candidate_for_element(project, owner),),
    )


def problem_result(project: LookupProject, message: str, target: Element, kind: SymbolKind) -> LookupResult:
    return LookupResult(
        status=Status.ERROR,
        message=message,
        symbol_key=target.qualified_name,
        kind=kind,
        alternatives=(candidate_for_element(project, target),),
    )


def indexing_result(message: str, query: Query) -> LookupResult:
    return LookupResult(
        status=Status.INDEXING,
        message=message,
        symbol_key=query.symbol_name,
        module_name=query.module_name,
        diagnostics="Index rebuild detected; not blocking for indices.",
    )


def error_result(exc: BaseException, symbol_name: str | None, module_name: str | None) -> LookupResult:
    return LookupResult(
        status=Status.ERROR,
        message=f"Unexpected error: {type(exc).__name__}: {exc}",
        symbol_key=symbol_name,
        module_name=module_name,
        diagnostics=top_frame(exc),
    )


def invalid_request_result(message: str, symbol_name: str | None = None) -> LookupResult:
    return LookupResult(status=Status.ERROR, message=message, symbol_key=symbol_name)


def top_frame(exc: BaseException) -> str:
    """Innermost frame of an exception as ``function@file.py:line``."""
    frames = traceback.extract_tb(exc.__traceback__)
    if not frames:
        return ""
    top = frames[-1]
    return f"{top.name}@{Path(top.filename).name}:{top.lineno}"

"""Name resolution: query strings to class declarations or resource files."""

from __future__ import annotations

import logging
from collections.abc import Collection

from symscope.lookup.elements import ClassElement, SourceFile
from symscope.lookup.protocols import DocumentProvider, LookupProject, SearchScope

logger = logging.getLogger(__name__)


def scope_for(project: LookupProject, module_name: str | None) -> SearchScope:
    """Module-with-dependencies scope, or the whole project for blank/unknown modules."""
    if module_name is None or not module_name.strip():
        return SearchScope.everything()
    if not project.classpath.has_module(module_name):
        logger.debug("Unknown module %r; searching whole project", module_name)
        return SearchScope.everything()
    return SearchScope(module_name=module_name)


def resolve_classes(project: LookupProject, symbol_name: str, scope: SearchScope) -> list[ClassElement]:
    """Exact qualified-name matches, else every class sharing the short name.

    No filtering beyond the name; ranking happens downstream.
    """
    exact = [
        cls for cls in project.index.find_exact_name(symbol_name, scope)
        if cls.qualified_name == symbol_name
    ]
    if exact:
        logger.debug("Resolved %s by qualified name (%d matches)", symbol_name, len(exact))
        return exact

    short = short_name(symbol_name)
    by_short = list(project.index.find_by_short_name(short, scope))
    logger.debug("Resolved %s by short name %r (%d matches)", symbol_name, short, len(by_short))
    return by_short


def short_name(name: str) -> str:
    """Last path segment, then last dot segment: ``a/b/c.D`` -> ``D``."""
    normalized = last_segment(name) if "/" in name or "\\" in name else name
    idx = normalized.rfind(".")
    return normalized[idx + 1:] if idx >= 0 else normalized


def last_segment(path: str) -> str:
    normalized = path.replace("\\", "/")
    idx = normalized.rfind("/")
    return normalized[idx + 1:] if idx >= 0 else normalized


def has_extension(name: str) -> bool:
    idx = name.rfind(".")
    return 0 < idx < len(name) - 1


def resource_path_attempts(raw: str) -> list[str]:
    """Relative paths to probe for a resource name, in priority order.

    ``conf/app.yml`` and ``/conf/app.yml`` are literal paths. A dotted name
    with an extension also tries its path form (``a.b.Name.ext`` ->
    ``a/b/Name.ext``); the bare last segment is always tried.
    """
    path_form = raw.replace("\\", "/")
    if "/" in path_form:
        return [path_form[1:] if path_form.startswith("/") else path_form]

    attempts: list[str] = []
    if has_extension(raw):
        last_dot = raw.rfind(".")
        base = raw[:last_dot].replace(".", "/")
        attempts.append(f"{base}.{raw[last_dot + 1:]}")
    segment = last_segment(path_form)
    if segment not in attempts:
        attempts.append(segment)
    return attempts


def is_probably_text(documents: DocumentProvider, file: SourceFile, text_extensions: Collection[str]) -> bool:
    """Non-binary files that are extension-less or carry an allow-listed extension."""
    if documents.is_binary(file):
        return False
    extension = file.extension
    return extension is None or extension.lower() in text_extensions


def find_resources(
    project: LookupProject,
    attempts: list[str],
    module_name: str | None,
    text_extensions: Collection[str],
) -> list[SourceFile]:
    """Probe every class root per attempt; stop at the first attempt with hits."""
    roots = project.classpath.class_roots(module_name)
    for attempt in attempts:
        found: list[SourceFile] = []
        for root in roots:
            candidate = root.find_file(attempt)
            if candidate is not None and is_probably_text(project.documents, candidate, text_extensions):
                found.append(candidate)
        if found:
            logger.debug("Resource attempt %r matched %d file(s)", attempt, len(found))
            return found
    return []

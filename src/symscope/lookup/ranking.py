"""Deterministic ranking of competing classpath copies.

Candidates sort ascending (first = best) by:
1. owning module differs from the requested module
2. compiled copy while source copies are preferred
3. archive-backed file (``jar://``)
4. location URI, nulls last
5. symbol key, so copies sharing a file still order reproducibly
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from symscope.lookup.elements import ClassElement, SourceFile, is_compiled_element
from symscope.lookup.models import Query
from symscope.lookup.protocols import LookupProject

logger = logging.getLogger(__name__)

RankKey = tuple[bool, bool, bool, bool, str, str]


def rank_key(
    *,
    owner_module: str | None,
    requested_module: str | None,
    compiled: bool,
    prefer_source: bool,
    file: SourceFile | None,
    symbol_key: str,
) -> RankKey:
    url = file.url if file is not None else None
    return (
        owner_module != requested_module,
        prefer_source and compiled,
        file is not None and file.is_archive,
        url is None,
        url or "",
        symbol_key,
    )


def rank_classes(project: LookupProject, classes: Iterable[ClassElement], query: Query) -> list[ClassElement]:
    """Order class candidates best-first."""

    def key(cls: ClassElement) -> RankKey:
        file = cls.file
        return rank_key(
            owner_module=project.classpath.owner_module(file) if file is not None else None,
            requested_module=query.module_name,
            compiled=is_compiled_element(cls),
            prefer_source=query.prefer_source,
            file=file,
            symbol_key=cls.qualified_name,
        )

    ranked = sorted(classes, key=key)
    if len(ranked) > 1:
        logger.debug(
            "Ranked %d copies of %s; best=%s",
            len(ranked),
            query.symbol_name,
            ranked[0].file.url if ranked[0].file else None,
        )
    return ranked


def rank_resources(project: LookupProject, files: Iterable[SourceFile], query: Query) -> list[SourceFile]:
    """Order resource hits best-first (resources are never compiled)."""

    def key(file: SourceFile) -> RankKey:
        return rank_key(
            owner_module=project.classpath.owner_module(file),
            requested_module=query.module_name,
            compiled=False,
            prefer_source=query.prefer_source,
            file=file,
            symbol_key=file.url,
        )

    return sorted(files, key=key)

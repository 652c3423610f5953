"""Symbol lookup engine.

One call resolves one `Query` against one `LookupProject`:

    query -> class resolution -> ranking -> member selection
          \\-> resource path guesses -> classpath probe -> ranking
          -> snippet extraction -> depth truncation -> result assembly

The engine is stateless. It checks index readiness before starting, runs
every index read inside a single read snapshot, and converts any failure
into an ERROR result instead of raising.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from symscope.core.errors import ErrorCode, IndexNotReadyError, SymscopeError
from symscope.foundation.types.config import LookupConfig
from symscope.lookup import assembler
from symscope.lookup.elements import ClassElement, Element, ResourceElement
from symscope.lookup.members import select_field, select_method
from symscope.lookup.models import LookupResult, Query, SymbolKind
from symscope.lookup.protocols import LookupProject
from symscope.lookup.ranking import rank_classes, rank_resources
from symscope.lookup.resolver import (
    find_resources,
    resolve_classes,
    resource_path_attempts,
    scope_for,
)
from symscope.lookup.snippet import choose_view, extract_element, extract_file
from symscope.lookup.truncation import truncate_by_depth

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SymbolLookup:
    """Resolves class, member, or resource symbols to source snippets."""

    config: LookupConfig = field(default_factory=LookupConfig)

    def resolve(self, project: LookupProject, query: Query) -> LookupResult:
        """Resolve a query; never raises.

        Returns INDEXING without touching the index while it is being
        rebuilt, and ERROR with a short diagnostic on unexpected failures.
        """
        try:
            if project.gate.is_index_building():
                return assembler.indexing_result(
                    "Indices are updating. Try again when indexing completes.", query
                )
            return project.gate.with_read_snapshot(lambda: self._resolve_under_read(project, query))
        except IndexNotReadyError:
            return assembler.indexing_result(
                "IndexNotReadyError: indices are updating. Try again later.", query
            )
        except Exception as e:
            logger.warning("Symbol resolution failed for %s", query.symbol_name, exc_info=True)
            return assembler.error_result(e, query.symbol_name, query.module_name)

    def _resolve_under_read(self, project: LookupProject, query: Query) -> LookupResult:
        scope = scope_for(project, query.module_name)
        classes = resolve_classes(project, query.symbol_name, scope)
        if classes:
            return self._resolve_from_classes(project, query, classes)

        if query.allow_resource_lookup:
            result = self._resolve_resource(project, query, scope.module_name)
            if result is not None:
                return result

        return assembler.not_found_result(query)

    def _resolve_from_classes(
        self, project: LookupProject, query: Query, classes: Sequence[ClassElement]
    ) -> LookupResult:
        ranked = rank_classes(project, classes, query)
        best = ranked[0]

        if query.method_name is not None:
            selection = select_method(
                ranked, query.method_name, query.method_param_types, query.include_inherited
            )
            if selection is None:
                return assembler.not_found_inside(
                    project, best, query, f"No method named {query.method_name} found."
                )
            alternatives = selection.alternatives
            message = (
                "Resolved method; multiple overloads exist. Returning best match and listing alternatives."
                if len(alternatives) > 1
                else "Resolved method successfully."
            )
            return self._element_result(
                project, query, selection.target, SymbolKind.METHOD, alternatives, message,
                diagnostics=selection.diagnostics,
            )

        if query.field_name is not None:
            selection = select_field(ranked, query.field_name)
            if selection is None:
                return assembler.not_found_inside(
                    project, best, query, f"No field named {query.field_name} found."
                )
            alternatives = selection.alternatives
            message = (
                "Resolved field; multiple classpath copies exist. Returning best match and listing alternatives."
                if len(alternatives) > 1
                else "Resolved field successfully."
            )
            return self._element_result(
                project, query, selection.target, SymbolKind.FIELD, alternatives, message
            )

        message = (
            "Resolved class; multiple classpath copies exist. Returning best match and listing alternatives."
            if len(ranked) > 1
            else "Resolved class successfully."
        )
        return self._element_result(
            project, query, best, SymbolKind.CLASS, ranked[1:], message, key_from_view=True
        )

    def _element_result(
        self,
        project: LookupProject,
        query: Query,
        target: Element,
        kind: SymbolKind,
        alternatives: Sequence[Element],
        message: str,
        diagnostics: str | None = None,
        key_from_view: bool = False,
    ) -> LookupResult:
        view = choose_view(target, query.force_decompiled)
        file = view.file
        if file is None:
            detached = SymscopeError(ErrorCode.INDEX_ELEMENT_DETACHED, {"kind": kind.value.lower()})
            return assembler.problem_result(project, detached.message, target, kind)

        snippet = extract_element(project, view, file, query.line_start, query.line_end)
        text = truncate_by_depth(snippet.text, query.response_depth, self.config.indent_width)
        primary = assembler.candidate_for_element(project, view)
        # Primary describes the rendered view
        rest = [assembler.candidate_for_element(project, alt) for alt in alternatives]
        return assembler.ok_result(
            message,
            snippet,
            text,
            file,
            view.qualified_name if key_from_view else target.qualified_name,
            kind,
            primary,
            assembler.dedupe_candidates(primary, rest),
            diagnostics,
        )

    def _resolve_resource(
        self, project: LookupProject, query: Query, module_name: str | None
    ) -> LookupResult | None:
        attempts = resource_path_attempts(query.symbol_name)
        found = find_resources(project, attempts, module_name, self.config.text_extensions)
        if not found:
            return None

        ranked = rank_resources(project, found, query)
        primary_file = ranked[0]
        snippet = extract_file(project, primary_file, query.line_start, query.line_end)
        text = truncate_by_depth(snippet.text, query.response_depth, self.config.indent_width)
        primary = assembler.candidate_for_element(project, ResourceElement(primary_file))
        rest = [assembler.candidate_for_resource(project, f) for f in ranked[1:]]
        message = (
            "Resolved resource; multiple copies on classpath. Returning best match and listing alternatives."
            if len(ranked) > 1
            else "Resolved resource successfully."
        )
        return assembler.ok_result(
            message,
            snippet,
            text,
            primary_file,
            attempts[0],
            SymbolKind.RESOURCE,
            primary,
            assembler.dedupe_candidates(primary, rest),
        )


def resolve(project: LookupProject, query: Query, config: LookupConfig | None = None) -> LookupResult:
    """Resolve ``query`` with the configured lookup settings."""
    if config is None:
        from symscope.foundation.config import get_config

        config = get_config().lookup
    return SymbolLookup(config).resolve(project, query)

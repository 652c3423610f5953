"""MCP lookup tool for symscope.

Provides the `symscope_lookup` tool: resolve a class, member or
classpath resource to its source text within a registered project.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from symscope.core.errors import QueryValidationError
from symscope.foundation.types.config import LookupConfig
from symscope.lookup import assembler
from symscope.lookup.engine import SymbolLookup
from symscope.lookup.models import LookupResult, Query, Status
from symscope.mcp.formatting import DEFAULT_FORMAT, format_result, mcp_json, resolve_format

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from symscope.mcp.registry import ProjectRegistry

logger = logging.getLogger(__name__)

PROJECT_NOT_FOUND_MESSAGE = "Unable to locate an open project for the request."
PROJECT_NOT_FOUND_HINT = "Specify projectName or open a single project."
SYMBOL_REQUIRED_MESSAGE = "`symbolName` is required."


def _flag(value: bool | None, default: bool) -> bool:
    return default if value is None else value


def lookup_symbol(
    registry: ProjectRegistry,
    symbol_name: str | None,
    method_name: str | None = None,
    method_param_types: list[str] | None = None,
    field_name: str | None = None,
    module_name: str | None = None,
    line_start: int | None = None,
    line_end: int | None = None,
    prefer_source: bool | None = None,
    include_inherited: bool | None = None,
    force_decompiled: bool | None = None,
    allow_resource_lookup: bool | None = None,
    response_depth: int | None = None,
    project_name: str | None = None,
    project_root: str | None = None,
    config: LookupConfig | None = None,
) -> LookupResult:
    """Validate a tool payload, pick the project and run the lookup.

    Flags left as None take their defaults from ``config`` (or the loaded
    configuration). Never raises for bad input; it becomes an ERROR result.
    """
    if symbol_name is None or not symbol_name.strip():
        return assembler.invalid_request_result(SYMBOL_REQUIRED_MESSAGE)

    if config is None:
        from symscope.foundation.config import get_config

        config = get_config().lookup

    project = registry.resolve(project_name, project_root)
    if project is None:
        return LookupResult(
            status=Status.NOT_FOUND,
            message=PROJECT_NOT_FOUND_MESSAGE,
            symbol_key=symbol_name,
            module_name=module_name,
            diagnostics=PROJECT_NOT_FOUND_HINT,
        )

    try:
        query = Query(
            symbol_name=symbol_name.strip(),
            method_name=method_name or None,
            method_param_types=tuple(method_param_types) if method_param_types is not None else None,
            field_name=field_name or None,
            module_name=module_name or None,
            line_start=line_start,
            line_end=line_end,
            prefer_source=_flag(prefer_source, config.prefer_source),
            include_inherited=_flag(include_inherited, config.include_inherited),
            force_decompiled=_flag(force_decompiled, config.force_decompiled),
            allow_resource_lookup=_flag(allow_resource_lookup, config.allow_resource_lookup),
            response_depth=response_depth,
        )
    except QueryValidationError as e:
        logger.debug("Rejected lookup payload: %s", e.message)
        return assembler.invalid_request_result(e.message, symbol_name)

    return SymbolLookup(config).resolve(project, query)


def register_lookup_tools(
    mcp: FastMCP,
    registry: ProjectRegistry,
    config: LookupConfig | None = None,
) -> None:
    """Register lookup tools.

    Args:
        mcp: FastMCP server instance
        registry: Projects the tool may target
        config: Lookup settings; loaded configuration when None
    """

    @mcp.tool()
    def symscope_lookup(
        symbol_name: str,
        method_name: str | None = None,
        method_param_types: list[str] | None = None,
        field_name: str | None = None,
        module_name: str | None = None,
        line_start: int | None = None,
        line_end: int | None = None,
        prefer_source: bool | None = None,
        include_inherited: bool | None = None,
        force_decompiled: bool | None = None,
        allow_resource_lookup: bool | None = None,
        response_depth: int | None = None,
        project: str | None = None,
        project_root: str | None = None,
        format: str = DEFAULT_FORMAT,
    ) -> str:
        """
        Fetch the source text of a class, method, field or classpath resource.

        Resolves fully qualified or short class names, ranks classpath copies
        (the module's own source first, then other source, then compiled) and
        returns the best match with the others listed as alternatives.
        Falls back to classpath resources (e.g. "config/application.yml")
        when no class matches.

        Formats:
        - "summary": location and alternative count, no source text
        - "compact": source text and trimmed alternatives (default)
        - "full": every field, pretty-printed

        Args:
            symbol_name: Class name or resource path
            method_name: Narrow to a method
            method_param_types: Parameter types to pick an overload
            field_name: Narrow to a field
            module_name: Module whose classpath scopes the search
            line_start: First line (1-based) of an explicit slice
            line_end: Last line (1-based) of an explicit slice
            prefer_source: Rank source copies before compiled ones
            include_inherited: Match inherited methods by name
            force_decompiled: Never substitute the source mirror
            allow_resource_lookup: Allow the resource fallback
            response_depth: Maximum brace nesting kept in the text
            project: Project name or base path
            project_root: A path inside the target project
            format: Output format: summary, compact, or full (default: compact)

        Returns:
            JSON lookup result with status, text, location and alternatives
        """
        fmt = resolve_format(format)
        settings = config
        if settings is None:
            from symscope.foundation.config import get_config

            settings = get_config().lookup

        result = lookup_symbol(
            registry,
            symbol_name,
            method_name=method_name,
            method_param_types=method_param_types,
            field_name=field_name,
            module_name=module_name,
            line_start=line_start,
            line_end=line_end,
            prefer_source=prefer_source,
            include_inherited=include_inherited,
            force_decompiled=force_decompiled,
            allow_resource_lookup=allow_resource_lookup,
            response_depth=response_depth,
            project_name=project,
            project_root=project_root,
            config=settings,
        )
        return mcp_json(format_result(result, fmt, settings.max_alternatives), fmt)

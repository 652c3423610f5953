"""MCP formatting utilities for token-conscious serialization.

Provides shared helpers for format tiers (summary/compact/full) and
compact JSON serialization of lookup results.
"""

from __future__ import annotations

import json
from typing import Any

from symscope.lookup.models import LookupResult

DEFAULT_FORMAT = "compact"

FORMAT_SUMMARY = "summary"
FORMAT_COMPACT = "compact"
FORMAT_FULL = "full"

VALID_FORMATS = frozenset({FORMAT_SUMMARY, FORMAT_COMPACT, FORMAT_FULL})


def mcp_json(data: Any, format: str = DEFAULT_FORMAT) -> str:
    """Serialize to JSON with format-aware compactness.

    - summary/compact: no whitespace (separators=(",",":"))
    - full: pretty-printed (indent=2)
    """
    if format == FORMAT_FULL:
        return json.dumps(data, indent=2, default=str)
    return json.dumps(data, separators=(",", ":"), default=str)


def omit_empty(d: dict) -> dict:
    """Remove keys with empty/None values for compact serialization."""
    return {k: v for k, v in d.items() if v not in (None, [], {}, "", ())}


def resolve_format(format: str | None) -> str:
    """Resolve and validate a format string, defaulting to DEFAULT_FORMAT."""
    if not format or format.lower() not in VALID_FORMATS:
        return DEFAULT_FORMAT
    return format.lower()


def format_result(result: LookupResult, format: str = DEFAULT_FORMAT, max_alternatives: int = 0) -> dict[str, Any]:
    """Shape a lookup result for a format tier.

    - summary: status, location and alternative count; no source text
    - compact: adds source text and trimmed alternatives (uri, origin, module)
    - full: every field, alternatives untrimmed

    Args:
        result: Lookup result to shape
        format: Format tier
        max_alternatives: Cap on listed alternatives (0 = unlimited)

    Returns:
        JSON-ready dict
    """
    data = result.to_dict()
    alternatives = data["alternatives"]
    if max_alternatives and len(alternatives) > max_alternatives:
        data["alternativesOmitted"] = len(alternatives) - max_alternatives
        alternatives = alternatives[:max_alternatives]

    if format == FORMAT_SUMMARY:
        return omit_empty({
            "status": data["status"],
            "humanMessage": data["humanMessage"],
            "uri": data["uri"],
            "symbolKey": data["symbolKey"],
            "kind": data["kind"],
            "alternativeCount": len(data["alternatives"]),
        })

    if format == FORMAT_COMPACT:
        data["alternatives"] = [
            omit_empty({"uri": a["uri"], "origin": a["origin"], "moduleName": a["moduleName"]})
            for a in alternatives
        ]
        return omit_empty(data)

    data["alternatives"] = alternatives
    return data

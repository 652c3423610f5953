"""MCP Server instructions for symscope.

Provides system prompt/instructions for agents using symscope via MCP.
"""

SYMSCOPE_INSTRUCTIONS = """symscope returns the source text of JVM symbols and classpath resources from an indexed project.

## Quick Start

1. **Look up a class**: `symscope_lookup("com.acme.Widget")` or the short name `symscope_lookup("Widget")`
2. **Narrow to a member**: `symscope_lookup("Widget", method_name="render", method_param_types=["int"])`
3. **Read a resource**: `symscope_lookup("config/application.yml")`
4. **Stay shallow**: `response_depth=1` keeps only the outer braces of large classes

## Statuses

| Status | Meaning |
|--------|---------|
| **OK** | `sourceText` holds the best match; other classpath copies are in `alternatives`. |
| **NOT_FOUND** | Nothing matched; check the name, the module, or the member name. |
| **INDEXING** | The index is being rebuilt. Retry shortly. |
| **ERROR** | Bad request or an unexpected failure; see `humanMessage` and `diagnostics`. |

## Ranking

Copies owned by `module_name` come first, then source over compiled
(unless `prefer_source=False`), then loose files over archive entries.
Set `force_decompiled=True` to see a compiled class as it is instead of its
attached sources.

## Format Tiers

| Tier | Use When |
|------|----------|
| **summary** | You only need to know where a symbol lives. |
| **compact** | Default. Source text plus trimmed alternatives. |
| **full** | You need every field of every alternative. |
"""

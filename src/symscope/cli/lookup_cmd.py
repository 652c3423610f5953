"""Lookup command - resolve a symbol in an index snapshot."""

import json

import click
from rich.console import Console
from rich.syntax import Syntax

from symscope.core.errors import SymscopeError
from symscope.lookup.models import LookupResult
from symscope.mcp.registry import ProjectRegistry
from symscope.mcp.tools import lookup_symbol

console = Console()

_LEXERS = {
    "java": "java",
    "kt": "kotlin",
    "groovy": "groovy",
    "scala": "scala",
    "xml": "xml",
    "json": "json",
    "yml": "yaml",
    "yaml": "yaml",
    "properties": "properties",
    "sql": "sql",
    "md": "markdown",
}


def parse_lines(ctx: click.Context, param: click.Parameter, value: str | None) -> tuple[int, int] | None:
    """Parse ``A-B`` (or a single ``A``) into an inclusive 1-based line pair."""
    if value is None:
        return None
    first, sep, last = value.partition("-")
    try:
        start = int(first)
        end = int(last) if sep else start
    except ValueError:
        raise click.BadParameter(f"expected A-B, got {value!r}") from None
    return start, end


def _lexer_for(uri: str | None) -> str:
    if not uri or "." not in uri.rsplit("/", 1)[-1]:
        return "text"
    return _LEXERS.get(uri.rsplit(".", 1)[-1].lower(), "text")


def _print_result(result: LookupResult) -> None:
    status_style = "green" if result.is_ok else "yellow"
    console.print(f"[{status_style}]{result.status.value}[/] {result.message}", highlight=False)

    if not result.is_ok:
        if result.diagnostics:
            console.print(result.diagnostics, style="dim", markup=False, highlight=False)
        return

    console.print(f"[dim]{result.kind.value} {result.symbol_key}[/dim]", highlight=False)
    console.print(f"[dim]{result.uri} (lines {result.start_line}-{result.end_line})[/dim]", highlight=False)
    if result.source_text:
        console.print(
            Syntax(
                result.source_text,
                _lexer_for(result.uri),
                line_numbers=result.start_line > 0,
                start_line=max(result.start_line, 1),
            )
        )

    if len(result.alternatives) > 1:
        console.print("\n[dim]Alternatives:[/dim]")
        for candidate in result.alternatives:
            console.print(
                f"  {candidate.origin.value:<10} {candidate.uri}", markup=False, highlight=False
            )


@click.command()
@click.argument("snapshot", type=click.Path())
@click.argument("symbol")
@click.option("--method", "method_name", help="Narrow to a method")
@click.option("--param", "params", multiple=True, help="Parameter type of the overload (repeatable)")
@click.option("--no-params", is_flag=True, help="Select the zero-argument overload")
@click.option("--field", "field_name", help="Narrow to a field")
@click.option("--module", "module_name", help="Module whose classpath scopes the search")
@click.option("--lines", callback=parse_lines, help="Explicit 1-based line range, e.g. 10-25")
@click.option("--depth", type=click.IntRange(min=0), help="Maximum brace nesting kept")
@click.option("--compiled-first", is_flag=True, help="Rank compiled copies like source copies")
@click.option("--no-inherited", is_flag=True, help="Ignore inherited methods")
@click.option("--force-decompiled", is_flag=True, help="Show compiled classes as they are")
@click.option("--no-resources", is_flag=True, help="Disable the resource fallback")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def lookup(
    snapshot: str,
    symbol: str,
    method_name: str | None,
    params: tuple[str, ...],
    no_params: bool,
    field_name: str | None,
    module_name: str | None,
    lines: tuple[int, int] | None,
    depth: int | None,
    compiled_first: bool,
    no_inherited: bool,
    force_decompiled: bool,
    no_resources: bool,
    json_output: bool,
) -> None:
    """Print the source of a class, member or resource.

    Examples:

        symscope lookup project.yaml com.acme.Widget
        symscope lookup project.yaml Widget --method render --param int
        symscope lookup project.yaml config/application.yml --json
    """
    from symscope.cli.error_handler import handle_error
    from symscope.foundation.config import get_config
    from symscope.index.snapshot import load_snapshot

    try:
        project = load_snapshot(snapshot)
    except SymscopeError as e:
        handle_error(e, json_output=json_output)

    param_types: list[str] | None = None
    if params or no_params:
        param_types = list(params)

    result = lookup_symbol(
        ProjectRegistry([project]),
        symbol,
        method_name=method_name,
        method_param_types=param_types,
        field_name=field_name,
        module_name=module_name,
        line_start=lines[0] if lines else None,
        line_end=lines[1] if lines else None,
        prefer_source=False if compiled_first else None,
        include_inherited=False if no_inherited else None,
        force_decompiled=True if force_decompiled else None,
        allow_resource_lookup=False if no_resources else None,
        response_depth=depth,
        config=get_config().lookup,
    )

    if json_output:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _print_result(result)

    if not result.is_ok:
        raise SystemExit(1)

"""Truncate command - depth-limit brace-structured text."""

from typing import TextIO

import click

from symscope.lookup.truncation import max_brace_depth, truncate_by_depth


@click.command()
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--depth", "-d", type=click.IntRange(min=0), required=True, help="Maximum brace nesting kept")
@click.option("--indent", type=click.IntRange(min=0), default=None, help="Spaces per level in '...' markers")
@click.option("--stats", is_flag=True, help="Report nesting depth on stderr")
def truncate(source: TextIO, depth: int, indent: int | None, stats: bool) -> None:
    """Collapse blocks nested deeper than DEPTH into '...' markers.

    SOURCE may be '-' for stdin.

    Examples:

        symscope truncate Widget.java --depth 1
        cat Widget.java | symscope truncate - -d 2
    """
    from symscope.foundation.config import get_config

    text = source.read()
    indent_width = get_config().lookup.indent_width if indent is None else indent
    result = truncate_by_depth(text, depth, indent_width)

    if stats:
        click.echo(
            f"max depth {max_brace_depth(text)}, kept {depth}, "
            f"{'truncated' if result is not text else 'unchanged'}",
            err=True,
        )
    click.echo(result, nl=False)

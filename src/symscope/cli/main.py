"""Main CLI entry point.

    symscope lookup project.yaml com.acme.Widget --method render
    symscope truncate Widget.java --depth 1
    symscope config show
"""

import sys

import click
from rich.console import Console

from symscope import __version__
from symscope.cli.config_cmd import config
from symscope.cli.lookup_cmd import lookup
from symscope.cli.truncate_cmd import truncate

console = Console(stderr=True)


def cli_entrypoint() -> None:
    """Wrapped entrypoint with global error handling.

    Shows SymscopeError nicely instead of a traceback.
    Called from pyproject.toml [project.scripts].
    """
    try:
        main(standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except click.Abort:
        console.print("\n[dim]Aborted[/dim]")
        sys.exit(130)
    except Exception as e:
        from symscope.cli.error_handler import handle_error

        handle_error(e, json_output=False)


@click.group()
@click.option("--debug", is_flag=True, help="Log at DEBUG level")
@click.option("--log-file", is_flag=True, help="Also keep a session log in .symscope/logs/")
@click.version_option(version=__version__, prog_name="symscope")
def main(debug: bool, log_file: bool) -> None:
    """symscope - source text of JVM symbols from an index snapshot.

    \b
    EXAMPLES:
        symscope lookup project.yaml Widget
        symscope lookup project.yaml Widget --method render --param int
        symscope truncate Widget.java --depth 1
    """
    from symscope.foundation.logging import configure_logging

    configure_logging(debug=debug, persist=log_file)


main.add_command(lookup)
main.add_command(truncate)
main.add_command(config)

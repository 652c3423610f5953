"""CLI Error Handler.

Provides unified error handling for the CLI with support for:
- Human-readable output (default)
- JSON output for machine consumption (--json)
"""

import json
import sys
from typing import NoReturn

from rich.console import Console
from rich.text import Text

from symscope.core.errors import ErrorCode, SymscopeError


def _wrap(error: SymscopeError | Exception) -> SymscopeError:
    if isinstance(error, SymscopeError):
        return error
    return SymscopeError(
        code=ErrorCode.RUNTIME_STATE_INVALID,
        context={"detail": str(error)},
        cause=error,
    )


def handle_error(
    error: SymscopeError | Exception,
    json_output: bool = False,
) -> NoReturn:
    """Report an error and exit.

    Args:
        error: The error to handle (SymscopeError or generic Exception)
        json_output: If True, output JSON to stderr

    Raises:
        SystemExit: Always exits with code 1
    """
    error = _wrap(error)

    if json_output:
        print(format_error_for_json(error), file=sys.stderr)
        sys.exit(1)

    _print_human_error(error)
    sys.exit(1)


def _print_human_error(error: SymscopeError) -> None:
    """Print error in human-readable format."""
    console = Console(stderr=True)

    header = Text()
    header.append(f"{error.error_id}", style="bold red")
    header.append(f" {error.message}")
    console.print(header)

    if error.recovery_hints:
        console.print("\n[bold]What you can do:[/]")
        for i, hint in enumerate(error.recovery_hints, 1):
            console.print(f"  {i}. {hint}", markup=False)


def format_error_for_json(error: SymscopeError | Exception) -> str:
    """Format an error as JSON string.

    Args:
        error: The error to format

    Returns:
        JSON string representation of the error
    """
    error = _wrap(error)
    error_dict = error.to_dict()
    if error.cause:
        error_dict["cause"] = str(error.cause)
    return json.dumps(error_dict)

"""symscope CLI.

- main.py - command group and wrapped entry point
- lookup_cmd.py, truncate_cmd.py, config_cmd.py - commands
- error_handler.py - human and JSON error rendering
"""

from symscope.cli.main import cli_entrypoint, main

__all__ = ["cli_entrypoint", "main"]

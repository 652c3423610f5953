"""symscope MCP Server - expose symbol lookups to agents.

Usage:
    # As MCP server
    python -m symscope.mcp --snapshot project.yaml

    # Check the setup
    symscope-mcp --snapshot project.yaml --test
"""

from symscope.mcp.registry import ProjectRegistry
from symscope.mcp.server import create_server, main
from symscope.mcp.tools import lookup_symbol

__all__ = ["ProjectRegistry", "create_server", "lookup_symbol", "main"]

"""MCP Server entry point for symscope.

Serves symbol and resource lookups over index snapshots to MCP hosts.
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
import signal
import sys
from pathlib import Path
from typing import TYPE_CHECKING

# MCP imports - optional dependency
try:
    from mcp.server.fastmcp import FastMCP

    MCP_AVAILABLE = True
except ImportError:
    MCP_AVAILABLE = False
    FastMCP = None  # type: ignore[misc, assignment]

from symscope.core.errors import SymscopeError
from symscope.foundation.types.config import LookupConfig
from symscope.mcp.instructions import SYMSCOPE_INSTRUCTIONS
from symscope.mcp.registry import ProjectRegistry

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP as FastMCPType

logger = logging.getLogger(__name__)


def create_server(
    registry: ProjectRegistry,
    config: LookupConfig | None = None,
) -> FastMCPType:
    """Create MCP server with the symscope lookup tool.

    Args:
        registry: Projects the server can answer for
        config: Lookup settings. If None, uses the loaded configuration.

    Returns:
        Configured FastMCP server instance
    """
    if not MCP_AVAILABLE:
        raise ImportError(
            "MCP package not installed. Install with: pip install 'symscope[mcp]'"
        )

    from symscope.mcp.tools import register_lookup_tools

    mcp = FastMCP("symscope", instructions=SYMSCOPE_INSTRUCTIONS)
    register_lookup_tools(mcp, registry, config)

    mcp._symscope_registry = registry  # type: ignore[attr-defined]
    return mcp


def load_registry(snapshots: list[str]) -> ProjectRegistry:
    """Load every snapshot file into a registry.

    Raises:
        SymscopeError: If a snapshot is missing or malformed
    """
    from symscope.index.snapshot import load_snapshot

    registry = ProjectRegistry()
    for path in snapshots:
        project = load_snapshot(path)
        logger.info("Serving project %s from %s", project.name, path)
        registry.register(project)
    return registry


async def run_server_async(mcp: FastMCPType) -> None:
    """Run MCP server with graceful shutdown support.

    Args:
        mcp: Configured FastMCP server instance
    """
    shutdown_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    def request_shutdown() -> None:
        """Signal handler that requests graceful shutdown."""
        shutdown_event.set()

    # Add signal handlers (Unix only)
    if sys.platform != "win32":
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, request_shutdown)

    try:
        # FastMCP.run() is blocking
        server_task = asyncio.create_task(asyncio.to_thread(mcp.run))
        shutdown_task = asyncio.create_task(shutdown_event.wait())

        _done, pending = await asyncio.wait(
            [server_task, shutdown_task],
            return_when=asyncio.FIRST_COMPLETED,
        )

        for task in pending:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
    finally:
        if sys.platform != "win32":
            for sig in (signal.SIGINT, signal.SIGTERM):
                loop.remove_signal_handler(sig)


def main() -> None:
    """CLI entry point for MCP server."""
    parser = argparse.ArgumentParser(description="symscope MCP Server")
    parser.add_argument(
        "--snapshot",
        action="append",
        default=[],
        help="Index snapshot YAML to serve (repeatable)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log at DEBUG level",
    )
    parser.add_argument(
        "--test",
        action="store_true",
        help="Test server setup and exit",
    )

    args = parser.parse_args()

    from symscope.foundation.logging import configure_logging

    # stdout carries the MCP protocol
    configure_logging(debug=args.debug, stream=sys.stderr)

    if not MCP_AVAILABLE:
        print("Error: MCP package not installed")
        print("Install with: pip install 'symscope[mcp]'")
        sys.exit(1)

    for snapshot in args.snapshot:
        if not Path(snapshot).exists():
            print(f"Error: Snapshot not found: {snapshot}")
            sys.exit(1)

    try:
        registry = load_registry(args.snapshot)
    except SymscopeError as e:
        print(f"Error: {e.message}")
        sys.exit(1)

    if args.test:
        print("Testing symscope MCP Server setup...")
        for project in registry.projects:
            print(f"  Project: {project.name}")
        if not registry.projects:
            print("  Project: none loaded")

        try:
            mcp = create_server(registry)
            print(f"  Server created: {mcp.name}")
            print("  MCP server is ready!")
        except Exception as e:
            print(f"  Error: {e}")
            sys.exit(1)
        return

    mcp = create_server(registry)

    try:
        asyncio.run(run_server_async(mcp))
    except KeyboardInterrupt:
        pass  # Clean exit for MCP subprocess

    sys.exit(0)


if __name__ == "__main__":
    main()

"""Logging setup for the symscope CLI and MCP server.

The console level is the first of:
    1. the explicit ``level`` argument
    2. SYMSCOPE_LOG_LEVEL (a level name or number)
    3. SYMSCOPE_DEBUG=true
    4. the ``debug`` argument (--debug)
    5. ``debug: true`` in .symscope/config.yaml or ~/.symscope/config.yaml
    6. WARNING

With ``persist`` a DEBUG session log is also written to .symscope/logs/.
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path

import yaml

_DEBUG_FORMAT = "%(asctime)s %(name)s [%(levelname)s] %(message)s"
_DEFAULT_FORMAT = "%(name)s: %(message)s"

# Quiet even under --debug
_NOISY_LOGGERS = ("asyncio", "mcp")

_KEPT_SESSIONS = 10

# Config-file debug flag, read once per process
_config_debug_checked = False
_config_debug_value = False


def _config_debug() -> bool:
    global _config_debug_checked, _config_debug_value

    if not _config_debug_checked:
        _config_debug_checked = True
        for path in (Path(".symscope/config.yaml"), Path.home() / ".symscope" / "config.yaml"):
            try:
                data = yaml.safe_load(path.read_text(encoding="utf-8"))
            except (OSError, yaml.YAMLError):
                continue
            if isinstance(data, dict) and "debug" in data:
                _config_debug_value = data["debug"] is True
                break
    return _config_debug_value


def _resolve_level(debug: bool, level: int | str | None) -> int:
    if level is not None:
        return _parse_level(level)
    if env_level := os.environ.get("SYMSCOPE_LOG_LEVEL"):
        return _parse_level(env_level)
    if os.environ.get("SYMSCOPE_DEBUG", "").lower() in ("true", "1", "yes") or debug:
        return logging.DEBUG
    return logging.DEBUG if _config_debug() else logging.WARNING


def _session_handler() -> logging.Handler:
    """File handler for a new session log; older sessions beyond the limit are removed."""
    log_dir = Path.cwd() / ".symscope" / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    sessions = sorted(log_dir.glob("session_*.log"), key=lambda p: p.stat().st_mtime, reverse=True)
    for old in sessions[_KEPT_SESSIONS - 1:]:
        old.unlink(missing_ok=True)

    log_file = log_dir / f"session_{datetime.now():%Y-%m-%d_%H-%M-%S}.log"
    handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(_DEBUG_FORMAT))
    return handler


def configure_logging(
    *,
    debug: bool = False,
    level: int | str | None = None,
    stream: object = None,
    persist: bool = False,
) -> None:
    """Install the root handlers for a symscope entry point.

    Args:
        debug: --debug was given
        level: Explicit level, overriding environment and config
        stream: Console stream (default: stderr)
        persist: Also write a DEBUG session log under .symscope/logs/
    """
    resolved = _resolve_level(debug, level)

    root = logging.getLogger()
    root.handlers.clear()
    # Session log needs DEBUG records; the console handler filters its own
    root.setLevel(logging.DEBUG if persist else resolved)

    console = logging.StreamHandler(stream or sys.stderr)
    console.setLevel(resolved)
    console.setFormatter(logging.Formatter(_DEBUG_FORMAT if resolved <= logging.DEBUG else _DEFAULT_FORMAT))
    root.addHandler(console)

    if persist:
        try:
            root.addHandler(_session_handler())
        except OSError as e:
            logging.getLogger(__name__).warning("Session log disabled: %s", e)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        "Logging configured: level=%s persist=%s", logging.getLevelName(resolved), persist
    )


def _parse_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    numeric = logging.getLevelName(level.upper())
    if isinstance(numeric, int):
        return numeric
    try:
        return int(level)
    except ValueError:
        return logging.WARNING

"""Symscope configuration management.

Loads configuration from .symscope/config.yaml with sensible defaults.
Lookup settings can be overridden via environment variables (SYMSCOPE_*).

Config locations (in priority order):
1. Explicit path passed to load_config()
2. .symscope/config.yaml (project-local)
3. ~/.symscope/config.yaml (user-global)
4. Built-in defaults

Thread Safety:
    Uses threading.Lock for thread-safe lazy initialization.
"""


import logging
import os
import threading
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from symscope.core.errors import config_error
from symscope.foundation.types.config import LookupConfig

logger = logging.getLogger(__name__)

ENV_PREFIX = "SYMSCOPE_"


@dataclass(frozen=True, slots=True)
class SymscopeConfig:
    """Root configuration for symscope."""

    lookup: LookupConfig = field(default_factory=LookupConfig)
    """Symbol and resource lookup configuration."""

    verbose: bool = False
    """Enable verbose output by default."""


# Global config instance (lazy-loaded, thread-safe)
_config: SymscopeConfig | None = None
_config_lock = threading.Lock()


def _default_config_paths() -> list[Path]:
    return [
        Path(".symscope/config.yaml"),
        Path.home() / ".symscope" / "config.yaml",
    ]


def _deep_update(base: dict, updates: dict) -> dict:
    """Recursively update a dict with another dict."""
    for key, value in updates.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_update(base[key], value)
        else:
            base[key] = value
    return base


def _coerce(value: str) -> Any:
    """Coerce an environment string to bool/int when it looks like one."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.isdigit() or (value.startswith("-") and value[1:].isdigit()):
        return int(value)
    return value


def _apply_env_overrides(config_dict: dict, environ: dict[str, str] | None = None) -> dict:
    """Apply environment variable overrides.

    Examples:
        SYMSCOPE_LOOKUP_INDENT_WIDTH=2
        SYMSCOPE_LOOKUP_PREFER_SOURCE=false
        SYMSCOPE_LOOKUP_TEXT_EXTENSIONS=txt,xml,json
        SYMSCOPE_VERBOSE=true
    """
    env = os.environ if environ is None else environ
    lookup_keys = {f.name for f in fields(LookupConfig)}

    for key, value in env.items():
        if not key.startswith(ENV_PREFIX):
            continue
        path_str = key[len(ENV_PREFIX):].lower()

        if path_str == "verbose":
            config_dict["verbose"] = _coerce(value)
            continue

        if not path_str.startswith("lookup_"):
            continue
        name = path_str[len("lookup_"):]
        if name not in lookup_keys:
            continue
        if name == "text_extensions":
            config_dict["lookup"][name] = [part.strip() for part in value.split(",") if part.strip()]
        else:
            config_dict["lookup"][name] = _coerce(value)

    return config_dict


def _dict_to_config(data: dict) -> SymscopeConfig:
    """Convert a dict to SymscopeConfig."""
    lookup_data = dict(data.get("lookup") or {})
    known = {f.name for f in fields(LookupConfig)}
    unknown = sorted(set(lookup_data) - known)
    if unknown:
        raise config_error("lookup", f"unknown keys: {', '.join(unknown)}")
    if "text_extensions" in lookup_data:
        lookup_data["text_extensions"] = tuple(lookup_data["text_extensions"])
    try:
        lookup = LookupConfig(**lookup_data)
    except (TypeError, ValueError) as e:
        raise config_error("lookup", str(e)) from e
    return SymscopeConfig(lookup=lookup, verbose=bool(data.get("verbose", False)))


def load_config(path: str | Path | None = None) -> SymscopeConfig:
    """Load configuration from file with defaults and env overrides.

    Priority (highest to lowest):
    1. Environment variables (SYMSCOPE_*)
    2. Explicit path if provided
    3. .symscope/config.yaml (project-local)
    4. ~/.symscope/config.yaml (user-global)
    5. Built-in defaults

    Args:
        path: Optional explicit config file path.

    Returns:
        Merged SymscopeConfig instance.

    Raises:
        SymscopeError: CONFIG_INVALID when merged values are rejected.
    """
    global _config

    config_dict: dict[str, Any] = {
        "lookup": asdict(LookupConfig()),
        "verbose": False,
    }

    config_paths = []
    if path:
        config_paths.append(Path(path))
    config_paths.extend(_default_config_paths())

    for config_path in config_paths:
        if config_path.exists():
            try:
                with open(config_path, encoding="utf-8") as f:
                    file_config = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                logger.warning("Skipping unreadable config %s: %s", config_path, e)
                continue
            if not isinstance(file_config, dict):
                logger.warning("Skipping config %s: top level is not a mapping", config_path)
                continue
            _deep_update(config_dict, file_config)
            logger.debug("Loaded config from %s", config_path)
            break  # Use first found config

    config_dict = _apply_env_overrides(config_dict)

    _config = _dict_to_config(config_dict)
    return _config


def get_config() -> SymscopeConfig:
    """Get the current configuration, loading if needed.

    Thread-safe with double-check locking.
    """
    global _config

    if _config is not None:
        return _config

    with _config_lock:
        if _config is None:
            _config = load_config()
        return _config


def reset_config() -> None:
    """Reset the global config (useful for testing)."""
    global _config
    with _config_lock:
        _config = None


def save_default_config(path: str | Path = ".symscope/config.yaml") -> Path:
    """Save the default configuration to a file.

    Args:
        path: Where to save the config.

    Returns:
        Path to the saved config file.
    """
    defaults = LookupConfig()
    extensions = ", ".join(defaults.text_extensions)
    config_content = f'''# Symscope Configuration
#
# NOTE: Actual defaults are defined in symscope/foundation/types/config.py.
# This file is an example template - edit values you want to override.

# Enable DEBUG logging for every command
debug: false

# Verbose CLI output
verbose: false

lookup:
  # Spaces per nesting level in "..." markers of depth-truncated snippets
  indent_width: {defaults.indent_width}

  # Extensions accepted as textual classpath resources
  text_extensions: [{extensions}]

  # Defaults applied when a tool request omits a flag
  prefer_source: {str(defaults.prefer_source).lower()}
  include_inherited: {str(defaults.include_inherited).lower()}
  force_decompiled: {str(defaults.force_decompiled).lower()}
  allow_resource_lookup: {str(defaults.allow_resource_lookup).lower()}

  # Alternatives kept in tool output (0 = unlimited)
  max_alternatives: {defaults.max_alternatives}
'''

    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(config_content, encoding="utf-8")
    return config_path

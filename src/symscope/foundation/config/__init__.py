"""Configuration management for symscope."""

from symscope.foundation.config.loader import (
    SymscopeConfig,
    get_config,
    load_config,
    reset_config,
    save_default_config,
)

__all__ = [
    "SymscopeConfig",
    "get_config",
    "load_config",
    "reset_config",
    "save_default_config",
]

"""Shared type definitions."""

from symscope.foundation.types.config import DEFAULT_TEXT_EXTENSIONS, LookupConfig

__all__ = ["DEFAULT_TEXT_EXTENSIONS", "LookupConfig"]

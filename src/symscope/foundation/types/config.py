"""Configuration type definitions - single source of truth for all config classes."""


from dataclasses import dataclass

DEFAULT_TEXT_EXTENSIONS: tuple[str, ...] = (
    "txt",
    "properties",
    "xml",
    "json",
    "yml",
    "yaml",
    "csv",
    "md",
    "ini",
    "conf",
    "cfg",
    "proto",
    "sql",
    "graphql",
    "gql",
)


@dataclass(frozen=True, slots=True)
class LookupConfig:
    """Configuration for symbol and resource lookup."""

    indent_width: int = 4
    """Spaces per nesting level in depth-truncation ellipsis markers."""

    text_extensions: tuple[str, ...] = DEFAULT_TEXT_EXTENSIONS
    """File extensions accepted as textual classpath resources."""

    prefer_source: bool = True
    """Default for queries that do not say whether source copies win."""

    include_inherited: bool = True
    """Default for queries that do not say whether inherited methods count."""

    force_decompiled: bool = False
    """Default for queries that do not ask for the compiled view."""

    allow_resource_lookup: bool = True
    """Default for queries that do not say whether resources may match."""

    max_alternatives: int = 20
    """Alternatives kept in tool output (0 = unlimited)."""

    def __post_init__(self) -> None:
        if self.indent_width < 0:
            raise ValueError("indent_width must be non-negative")
        if self.max_alternatives < 0:
            raise ValueError("max_alternatives must be non-negative")
        object.__setattr__(
            self,
            "text_extensions",
            tuple(ext.lower().lstrip(".") for ext in self.text_extensions),
        )

"""Indexed element model.

Declarations reach the engine as a closed set of tagged variants instead of
a shared polymorphic element hierarchy. Each variant carries only what its
kind needs; `Element` is the union the engine matches on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

ARCHIVE_URL_PREFIX = "jar://"


@dataclass(frozen=True, slots=True)
class TextRange:
    """Half-open character span [start, end) within a file."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid text range [{self.start}, {self.end})")


@dataclass(frozen=True, slots=True)
class SourceFile:
    """Handle for a file known to the index or the classpath.

    Attributes:
        url: Location URL, e.g. ``file:///ws/app/src/Widget.java`` or
            ``jar:///libs/widgets.jar!/com/acme/Widget.class``.
        name: File name including extension.
        compiled: True for binary-backed files rendered by decompilation.
    """

    url: str
    name: str
    compiled: bool = False

    @property
    def extension(self) -> str | None:
        idx = self.name.rfind(".")
        if idx < 0 or idx == len(self.name) - 1:
            return None
        return self.name[idx + 1:]

    @property
    def is_archive(self) -> bool:
        return self.url.startswith(ARCHIVE_URL_PREFIX)


@dataclass(frozen=True, slots=True)
class MethodElement:
    """A method declared on (or inherited by) a class."""

    name: str
    owner_name: str
    parameter_types: tuple[str, ...] = ()
    file: SourceFile | None = None
    range: TextRange | None = None
    compiled: bool = False
    inherited: bool = False
    source_mirror: MethodElement | None = None
    text: str | None = None

    @property
    def qualified_name(self) -> str:
        return f"{self.owner_name}#{self.name}"

    @property
    def signature(self) -> str:
        return f"{self.owner_name}#{self.name}({', '.join(self.parameter_types)})"


@dataclass(frozen=True, slots=True)
class FieldElement:
    """A field declared on a class."""

    name: str
    owner_name: str
    file: SourceFile | None = None
    range: TextRange | None = None
    compiled: bool = False
    source_mirror: FieldElement | None = None
    text: str | None = None

    @property
    def qualified_name(self) -> str:
        return f"{self.owner_name}#{self.name}"


@dataclass(frozen=True, slots=True)
class ClassElement:
    """An indexed class/type declaration.

    ``methods`` lists own and inherited methods (inherited ones flagged);
    ``fields`` lists declared fields.
    """

    qualified_name: str
    file: SourceFile | None = None
    range: TextRange | None = None
    compiled: bool = False
    methods: tuple[MethodElement, ...] = ()
    fields: tuple[FieldElement, ...] = ()
    source_mirror: ClassElement | None = None
    text: str | None = None

    @property
    def name(self) -> str:
        return self.qualified_name.rsplit(".", 1)[-1]

    def find_methods(self, name: str, include_inherited: bool) -> list[MethodElement]:
        return [
            m for m in self.methods
            if m.name == name and (include_inherited or not m.inherited)
        ]

    def find_fields(self, name: str) -> list[FieldElement]:
        return [f for f in self.fields if f.name == name]


@dataclass(frozen=True, slots=True)
class FileElement:
    """A whole source file addressed as an element."""

    file: SourceFile

    @property
    def qualified_name(self) -> str:
        return self.file.url


@dataclass(frozen=True, slots=True)
class ResourceElement:
    """A textual classpath resource."""

    file: SourceFile

    @property
    def qualified_name(self) -> str:
        return self.file.url


@dataclass(frozen=True, slots=True)
class UnknownElement:
    """A synthetic element with no positional information."""

    text: str | None = None
    file: SourceFile | None = None

    @property
    def qualified_name(self) -> str:
        return self.file.url if self.file else "<unknown>"


Declaration: TypeAlias = ClassElement | MethodElement | FieldElement

Element: TypeAlias = (
    ClassElement | MethodElement | FieldElement | FileElement | ResourceElement | UnknownElement
)


def navigation_element(element: Element) -> Element:
    """Return the source-mapped counterpart of an element, or the element itself."""
    match element:
        case ClassElement() | MethodElement() | FieldElement() if element.source_mirror is not None:
            return element.source_mirror
        case _:
            return element


def element_range(element: Element) -> TextRange | None:
    """Textual extent of an element inside its containing file."""
    match element:
        case ClassElement() | MethodElement() | FieldElement():
            return element.range
        case _:
            return None


def is_compiled_element(element: Element) -> bool:
    """True when the element or its containing file is binary-backed."""
    match element:
        case ClassElement() | MethodElement() | FieldElement():
            return element.compiled or (element.file is not None and element.file.compiled)
        case FileElement(file=file):
            return file.compiled
        case _:
            return False

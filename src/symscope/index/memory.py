"""In-memory implementations of the lookup collaborator contracts.

A `MemoryWorkspace` holds modules, classpath roots, file contents and
pre-built class declarations as plain Python data. It answers the same
questions an IDE index would (name lookup, module ownership, classpath
roots, documents) and is the backing store for YAML snapshots and tests.
It does not parse source; declarations are registered as they are.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field

from symscope.index.gate import SnapshotGate
from symscope.lookup.document import TextDocument
from symscope.lookup.elements import ClassElement, SourceFile
from symscope.lookup.protocols import LineDocument, LookupProject, SearchScope


BINARY_EXTENSIONS: frozenset[str] = frozenset({
    "class",
    "jar",
    "zip",
    "png",
    "jpg",
    "jpeg",
    "gif",
    "ico",
    "so",
    "dll",
    "dylib",
    "bin",
})


def join_url(root_url: str, relative_path: str) -> str:
    return f"{root_url.rstrip('/')}/{relative_path.lstrip('/')}"


@dataclass
class MemoryFile:
    """Stored contents and flags of one file."""

    source: SourceFile
    text: str | None = None
    """Raw text; None makes reads fail with OSError."""

    binary: bool = False
    live: bool = False
    """Whether an editable, line-indexed buffer is open for the file."""


@dataclass
class MemoryRoot:
    """A classpath root (module content root or library) holding files."""

    url: str
    label: str
    owner_module: str | None = None
    files: dict[str, SourceFile] = field(default_factory=dict)

    def find_file(self, relative_path: str) -> SourceFile | None:
        return self.files.get(relative_path.lstrip("/"))

    def contains(self, file: SourceFile) -> bool:
        return file.url.startswith(self.url.rstrip("/") + "/")


@dataclass
class MemoryModule:
    name: str
    depends_on: tuple[str, ...] = ()
    content_roots: list[str] = field(default_factory=list)
    libraries: list[str] = field(default_factory=list)


class MemoryWorkspace:
    """A project whose index, classpath and documents live in memory."""

    def __init__(self, name: str, base_path: str | None = None):
        self.name = name
        self.base_path = base_path
        self.gate = SnapshotGate()
        self._modules: dict[str, MemoryModule] = {}
        self._roots: dict[str, MemoryRoot] = {}
        self._files: dict[str, MemoryFile] = {}
        self._by_name: dict[str, list[ClassElement]] = defaultdict(list)
        self._by_short_name: dict[str, list[ClassElement]] = defaultdict(list)

    # -- building -------------------------------------------------------

    def add_module(self, name: str, depends_on: tuple[str, ...] | list[str] = ()) -> MemoryModule:
        module = MemoryModule(name=name, depends_on=tuple(depends_on))
        self._modules[name] = module
        return module

    def add_root(self, url: str, label: str, module: str | None = None) -> MemoryRoot:
        """Register a root; with ``module`` it becomes that module's content root."""
        root = MemoryRoot(url=url, label=label, owner_module=module)
        self._roots[url] = root
        if module is not None:
            self._require_module(module).content_roots.append(url)
        return root

    def attach_library(self, module: str, root_url: str) -> None:
        """Put an existing library root on a module's classpath."""
        if root_url not in self._roots:
            raise KeyError(f"unknown root: {root_url}")
        self._require_module(module).libraries.append(root_url)

    def add_file(
        self,
        root_url: str,
        relative_path: str,
        text: str | None,
        *,
        compiled: bool = False,
        binary: bool = False,
        live: bool = False,
    ) -> SourceFile:
        root = self._roots[root_url]
        relative_path = relative_path.lstrip("/")
        source = SourceFile(
            url=join_url(root.url, relative_path),
            name=relative_path.rsplit("/", 1)[-1],
            compiled=compiled,
        )
        root.files[relative_path] = source
        self._files[source.url] = MemoryFile(source=source, text=text, binary=binary, live=live)
        return source

    def add_class(self, cls: ClassElement) -> ClassElement:
        self._by_name[cls.qualified_name].append(cls)
        self._by_short_name[cls.name].append(cls)
        return cls

    def file(self, url: str) -> SourceFile:
        return self._files[url].source

    def file_text(self, url: str) -> str | None:
        return self._files[url].text

    def project(self) -> LookupProject:
        return LookupProject(
            name=self.name,
            index=self,
            classpath=self,
            documents=self,
            gate=self.gate,
            base_path=self.base_path,
        )

    # -- SymbolIndex ----------------------------------------------------

    def find_exact_name(self, qualified_name: str, scope: SearchScope) -> list[ClassElement]:
        return [c for c in self._by_name.get(qualified_name, ()) if self._in_scope(c, scope)]

    def find_by_short_name(self, short_name: str, scope: SearchScope) -> list[ClassElement]:
        return [c for c in self._by_short_name.get(short_name, ()) if self._in_scope(c, scope)]

    # -- ClasspathResolver ----------------------------------------------

    def has_module(self, module_name: str) -> bool:
        return module_name in self._modules

    def class_roots(self, module_name: str | None) -> list[MemoryRoot]:
        """Module roots with dependencies and libraries, or every root for the project."""
        if module_name is None or module_name not in self._modules:
            return list(self._roots.values())

        urls: list[str] = []
        seen_modules: set[str] = set()
        pending = [module_name]
        while pending:
            current = pending.pop(0)
            if current in seen_modules or current not in self._modules:
                continue
            seen_modules.add(current)
            module = self._modules[current]
            for url in (*module.content_roots, *module.libraries):
                if url not in urls:
                    urls.append(url)
            pending.extend(module.depends_on)
        return [self._roots[url] for url in urls]

    def owner_module(self, file: SourceFile) -> str | None:
        for root in self._roots.values():
            if root.owner_module is not None and root.contains(file):
                return root.owner_module
        return None

    def classpath_label(self, file: SourceFile) -> str:
        labels: list[str] = []
        for root in self._roots.values():
            if root.contains(file) and root.label not in labels:
                labels.append(root.label)
        return " | ".join(labels)

    # -- DocumentProvider -----------------------------------------------

    def get_document(self, file: SourceFile) -> LineDocument | None:
        stored = self._files.get(file.url)
        if stored is None or not stored.live or stored.text is None:
            return None
        return TextDocument(stored.text)

    def load_text(self, file: SourceFile) -> str:
        stored = self._files.get(file.url)
        if stored is None:
            raise FileNotFoundError(file.url)
        if stored.text is None:
            raise OSError(f"cannot read {file.url}")
        return stored.text

    def is_binary(self, file: SourceFile) -> bool:
        stored = self._files.get(file.url)
        if stored is not None and stored.binary:
            return True
        extension = file.extension
        return extension is not None and extension.lower() in BINARY_EXTENSIONS

    # -- helpers --------------------------------------------------------

    def _require_module(self, name: str) -> MemoryModule:
        if name not in self._modules:
            raise KeyError(f"unknown module: {name}")
        return self._modules[name]

    def _in_scope(self, cls: ClassElement, scope: SearchScope) -> bool:
        if scope.module_name is None:
            return True
        if cls.file is None:
            return False
        return any(root.contains(cls.file) for root in self.class_roots(scope.module_name))

    def __repr__(self) -> str:
        return (
            f"MemoryWorkspace(name={self.name!r}, modules={len(self._modules)}, "
            f"roots={len(self._roots)}, files={len(self._files)})"
        )

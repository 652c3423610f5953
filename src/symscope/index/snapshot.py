"""Load pre-built index snapshots from YAML.

Snapshot layout::

    name: demo
    base_path: /ws/demo
    modules:
      - name: app
        depends_on: [core]
        libraries: ["jar:///libs/widgets.jar!/"]
    roots:
      - url: file:///ws/app/src
        label: app
        module: app                  # omit for library roots
        files:
          com/acme/Widget.java:
            text: "..."
            live: true               # an editor buffer is open
          app.properties: {text: "x=1"}
    classes:
      - name: com.acme.Widget
        file: file:///ws/app/src/com/acme/Widget.java
        range: [0, 120]              # or lines: [1, 9]; omitted = whole file
        methods:
          - {name: render, params: [int], lines: [3, 5]}
        fields:
          - {name: size, lines: [2, 2]}
        mirror:                      # source-mapped counterpart of a compiled class
          file: file:///ws/app/src/com/acme/Widget.java
          methods: [...]

File entries also accept ``compiled``, ``binary`` and ``unreadable`` flags.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from symscope.core.errors import ErrorCode, SymscopeError, snapshot_error
from symscope.index.memory import MemoryWorkspace
from symscope.lookup.document import TextDocument
from symscope.lookup.elements import (
    ClassElement,
    FieldElement,
    MethodElement,
    SourceFile,
    TextRange,
)
from symscope.lookup.protocols import LookupProject

logger = logging.getLogger(__name__)


def load_snapshot(path: str | Path) -> LookupProject:
    """Read a snapshot file into a ready-to-query project."""
    return load_workspace(path).project()


def load_workspace(path: str | Path) -> MemoryWorkspace:
    """Read a snapshot file into a `MemoryWorkspace`.

    Raises:
        SymscopeError: FILE_NOT_FOUND for a missing file, INDEX_SNAPSHOT_INVALID
            for malformed YAML or layout errors.
    """
    snapshot_path = Path(path)
    if not snapshot_path.exists():
        raise SymscopeError(ErrorCode.FILE_NOT_FOUND, {"path": str(snapshot_path)})
    try:
        with open(snapshot_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise snapshot_error(str(snapshot_path), f"malformed YAML: {e}", e) from e

    if not isinstance(data, dict):
        raise snapshot_error(str(snapshot_path), "top level must be a mapping")
    try:
        workspace = build_workspace(data, default_name=snapshot_path.stem)
    except (KeyError, TypeError, ValueError) as e:
        raise snapshot_error(str(snapshot_path), f"{type(e).__name__}: {e}", e) from e

    logger.debug("Loaded snapshot %s: %r", snapshot_path, workspace)
    return workspace


def build_workspace(data: dict[str, Any], default_name: str = "project") -> MemoryWorkspace:
    """Build a workspace from an already parsed snapshot mapping."""
    workspace = MemoryWorkspace(
        name=str(data.get("name") or default_name),
        base_path=data.get("base_path"),
    )

    modules = data.get("modules") or []
    for module in modules:
        workspace.add_module(module["name"], module.get("depends_on") or ())

    for root in data.get("roots") or []:
        workspace.add_root(root["url"], root.get("label") or root["url"], root.get("module"))
        for relative_path, entry in (root.get("files") or {}).items():
            entry = entry or {}
            workspace.add_file(
                root["url"],
                relative_path,
                None if entry.get("unreadable") else entry.get("text", ""),
                compiled=bool(entry.get("compiled", False)),
                binary=bool(entry.get("binary", False)),
                live=bool(entry.get("live", False)),
            )

    for module in modules:
        for library in module.get("libraries") or []:
            workspace.attach_library(module["name"], library)

    for entry in data.get("classes") or []:
        workspace.add_class(_build_class(workspace, entry, entry["name"]))

    return workspace


def _build_class(workspace: MemoryWorkspace, entry: dict[str, Any], qualified_name: str) -> ClassElement:
    file = workspace.file(entry["file"])
    mirror = None
    if entry.get("mirror"):
        mirror = _build_class(workspace, entry["mirror"], qualified_name)

    methods = tuple(
        _build_method(workspace, file, qualified_name, m, mirror) for m in entry.get("methods") or []
    )
    fields = tuple(
        _build_field(workspace, file, qualified_name, f, mirror) for f in entry.get("fields") or []
    )
    return ClassElement(
        qualified_name=qualified_name,
        file=file,
        range=_range_of(workspace, file, entry, whole_file=True),
        compiled=bool(entry.get("compiled", file.compiled)),
        methods=methods,
        fields=fields,
        source_mirror=mirror,
    )


def _build_method(
    workspace: MemoryWorkspace,
    file: SourceFile,
    owner: str,
    entry: dict[str, Any],
    mirror: ClassElement | None,
) -> MethodElement:
    params = tuple(str(p) for p in entry.get("params") or ())
    counterpart = None
    if mirror is not None:
        counterpart = next(
            (m for m in mirror.methods if m.name == entry["name"] and m.parameter_types == params),
            None,
        )
    return MethodElement(
        name=entry["name"],
        owner_name=entry.get("owner", owner),
        parameter_types=params,
        file=file,
        range=_range_of(workspace, file, entry),
        compiled=file.compiled,
        inherited=bool(entry.get("inherited", False)),
        source_mirror=counterpart,
    )


def _build_field(
    workspace: MemoryWorkspace,
    file: SourceFile,
    owner: str,
    entry: dict[str, Any],
    mirror: ClassElement | None,
) -> FieldElement:
    counterpart = None
    if mirror is not None:
        counterpart = next((f for f in mirror.fields if f.name == entry["name"]), None)
    return FieldElement(
        name=entry["name"],
        owner_name=owner,
        file=file,
        range=_range_of(workspace, file, entry),
        compiled=file.compiled,
        source_mirror=counterpart,
    )


def _range_of(
    workspace: MemoryWorkspace,
    file: SourceFile,
    entry: dict[str, Any],
    whole_file: bool = False,
) -> TextRange | None:
    """Offsets from ``range: [start, end]`` or inclusive 1-based ``lines: [a, b]``."""
    if "range" in entry:
        start, end = entry["range"]
        return TextRange(int(start), int(end))

    text = workspace.file_text(file.url)
    if "lines" in entry:
        if text is None:
            raise ValueError(f"lines given for unreadable file {file.url}")
        first, last = (int(n) for n in entry["lines"])
        document = TextDocument(text)
        if not 1 <= first <= last <= document.line_count:
            raise ValueError(f"lines {first}-{last} outside {file.url}")
        return TextRange(document.line_start_offset(first - 1), document.line_end_offset(last - 1))

    if whole_file and text is not None:
        return TextRange(0, len(text))
    return None

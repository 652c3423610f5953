"""Index-side collaborators: read-snapshot gate, in-memory workspace, snapshots."""

from symscope.index.gate import SnapshotGate
from symscope.index.memory import MemoryWorkspace
from symscope.index.snapshot import build_workspace, load_snapshot, load_workspace

__all__ = [
    "MemoryWorkspace",
    "SnapshotGate",
    "build_workspace",
    "load_snapshot",
    "load_workspace",
]

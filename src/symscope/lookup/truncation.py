"""Brace-depth truncation of snippet text."""

from __future__ import annotations

ELLIPSIS = "..."


def truncate_by_depth(text: str | None, max_depth: int | None, indent_width: int = 4) -> str | None:
    """Collapse brace blocks nested deeper than ``max_depth``.

    Characters pass through while the nesting counter stays within the
    limit. The first opening brace past the limit is kept and followed by a
    single ``...`` line indented one unit per current depth; everything up
    to its matching close is dropped, including deeper blocks, which emit
    nothing further. The closing brace that returns to the limit is kept.

    When nothing was collapsed the input object itself is returned, so
    ``result is text`` tells callers no truncation happened. Truncating an
    already truncated text is not guaranteed to be a no-op.

    Args:
        text: Snippet text (None passes through).
        max_depth: Deepest nesting kept; None disables truncation.
        indent_width: Spaces per nesting level in the ellipsis line.

    Returns:
        Truncated text, or ``text`` unchanged.
    """
    if text is None or max_depth is None:
        return text

    limit = max(0, max_depth)
    out: list[str] = []
    current_depth = 0
    skip_depth = 0
    truncated = False

    for ch in text:
        if ch == "{":
            if skip_depth == 0:
                out.append(ch)
            current_depth += 1
            if current_depth > limit:
                skip_depth += 1
                if skip_depth == 1:
                    truncated = True
                    _append_ellipsis(out, current_depth, indent_width)
        elif ch == "}":
            if current_depth > limit and skip_depth > 0:
                skip_depth -= 1
            current_depth = max(0, current_depth - 1)
            if skip_depth == 0:
                out.append(ch)
        elif skip_depth == 0:
            out.append(ch)

    return "".join(out) if truncated else text


def _append_ellipsis(out: list[str], depth: int, indent_width: int) -> None:
    if not out or not out[-1].endswith("\n"):
        out.append("\n")
    out.append(" " * (indent_width * max(0, depth)))
    out.append(ELLIPSIS)
    out.append("\n")


def max_brace_depth(text: str) -> int:
    """Deepest brace nesting reached in ``text`` (unbalanced closes ignored)."""
    depth = deepest = 0
    for ch in text:
        if ch == "{":
            depth += 1
            deepest = max(deepest, depth)
        elif ch == "}":
            depth = max(0, depth - 1)
    return deepest

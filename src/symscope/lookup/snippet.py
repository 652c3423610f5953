"""Snippet extraction with 1-based line and character offset coordinates.

Two document representations are supported: a live line-indexed buffer
supplied by the document provider, or the raw stored text of the file.
"""

from __future__ import annotations

import logging

from symscope.lookup.document import TextDocument
from symscope.lookup.elements import (
    ClassElement,
    Element,
    FieldElement,
    MethodElement,
    SourceFile,
    UnknownElement,
    element_range,
    navigation_element,
)
from symscope.lookup.models import Snippet
from symscope.lookup.protocols import LineDocument, LookupProject

logger = logging.getLogger(__name__)


def choose_view(element: Element, force_decompiled: bool) -> Element:
    """Pick the rendering of the chosen copy: its source mirror unless decompiled is forced."""
    if force_decompiled:
        return element
    return navigation_element(element)


def extract_element(
    project: LookupProject,
    element: Element,
    file: SourceFile,
    line_start: int | None = None,
    line_end: int | None = None,
) -> Snippet:
    """Snippet for a declaration: an explicit line slice, or the element's own extent."""
    document = project.documents.get_document(file)
    if line_start is not None and line_end is not None:
        return slice_by_lines(document or TextDocument(read_text(project, file)), line_start, line_end)

    text_range = element_range(element)
    if text_range is None:
        return Snippet(text=_synthetic_text(element))

    full = document.text if document is not None else read_text(project, file)
    text = _safe_slice(full, text_range.start, text_range.end)
    start_line, end_line = _lines_for_extent(document, full, text_range.start, text_range.end)
    return Snippet(text, start_line, end_line, text_range.start, text_range.end)


def extract_file(
    project: LookupProject,
    file: SourceFile,
    line_start: int | None = None,
    line_end: int | None = None,
) -> Snippet:
    """Snippet for a whole file (resources), or an explicit line slice of it."""
    document = project.documents.get_document(file)
    if line_start is not None and line_end is not None:
        return slice_by_lines(document or TextDocument(read_text(project, file)), line_start, line_end)

    full = document.text if document is not None else read_text(project, file)
    start_line, end_line = _lines_for_extent(document, full, 0, len(full))
    return Snippet(full, start_line, end_line, 0, len(full))


def slice_by_lines(document: LineDocument, line_start: int, line_end: int) -> Snippet:
    """Inclusive 1-based line slice, clamped to the document.

    The start clamps to [1, line_count] and the end to [start, line_count].
    Offsets run from the start of the first line to the end of the last
    line (its newline excluded).
    """
    line_count = max(1, document.line_count)
    start_line = clamp(line_start, 1, line_count)
    end_line = clamp(line_end, start_line, line_count)
    start_offset = document.line_start_offset(start_line - 1)
    end_offset = document.line_end_offset(end_line - 1)
    text = document.text[start_offset:end_offset]
    return Snippet(text, start_line, end_line, start_offset, end_offset)


def read_text(project: LookupProject, file: SourceFile) -> str:
    """Raw file text; read failures are logged and yield empty text."""
    try:
        return project.documents.load_text(file)
    except OSError as e:
        logger.warning("Unable to load text of %s: %s", file.url, e)
        return ""


def count_newlines(text: str, start: int, end: int) -> int:
    return text.count("\n", start, max(start, end))


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _lines_for_extent(document: LineDocument | None, full: str, start: int, end: int) -> tuple[int, int]:
    last = max(start, end - 1)
    if document is not None:
        length = len(document.text)
        return (
            document.line_number(min(start, length)) + 1,
            document.line_number(min(last, length)) + 1,
        )
    return 1 + count_newlines(full, 0, start), 1 + count_newlines(full, 0, last)


def _safe_slice(text: str, start: int, end: int) -> str:
    begin = clamp(start, 0, len(text))
    finish = clamp(end, begin, len(text))
    return text[begin:finish]


def _synthetic_text(element: Element) -> str | None:
    match element:
        case ClassElement() | MethodElement() | FieldElement() | UnknownElement():
            return element.text
        case _:
            return None

"""Tests for snippet extraction."""

import logging

import pytest
from hypothesis import given, strategies as st

from conftest import APP_PROPERTIES, HELPER_SOURCE, WIDGET_RENDER_INT, WIDGET_SOURCE
from symscope.lookup.document import TextDocument
from symscope.lookup.elements import (
    ClassElement,
    FileElement,
    MethodElement,
    SourceFile,
    UnknownElement,
)
from symscope.lookup.protocols import SearchScope
from symscope.lookup.snippet import (
    choose_view,
    count_newlines,
    extract_element,
    extract_file,
    slice_by_lines,
)

SAMPLE = "line one\nline two\nline three\nline four\n"


def _widget_source_class(workspace) -> ClassElement:
    matches = workspace.find_exact_name("com.acme.Widget", SearchScope.everything())
    return next(c for c in matches if not c.compiled)


class TestSliceByLines:
    """Tests for slice_by_lines."""

    def test_inclusive_slice(self) -> None:
        snippet = slice_by_lines(TextDocument(SAMPLE), 2, 3)

        assert snippet.text == "line two\nline three"
        assert (snippet.start_line, snippet.end_line) == (2, 3)
        assert snippet.start_offset == SAMPLE.index("line two")
        assert snippet.end_offset == SAMPLE.index("\nline four")

    def test_start_clamped_to_first_line(self) -> None:
        snippet = slice_by_lines(TextDocument(SAMPLE), -3, 1)

        assert snippet.start_line == 1
        assert snippet.text == "line one"

    def test_end_clamped_to_line_count(self) -> None:
        doc = TextDocument(SAMPLE)

        snippet = slice_by_lines(doc, 4, 99)

        assert snippet.end_line == doc.line_count
        assert snippet.text == "line four\n"

    def test_end_before_start_clamped_to_start(self) -> None:
        snippet = slice_by_lines(TextDocument(SAMPLE), 3, 1)

        assert (snippet.start_line, snippet.end_line) == (3, 3)
        assert snippet.text == "line three"

    @given(
        lines=st.lists(st.text(alphabet="abc {}", max_size=8), min_size=1, max_size=12),
        data=st.data(),
    )
    def test_line_range_round_trip(self, lines: list[str], data: st.DataObject) -> None:
        """Re-deriving lines from a slice's offsets reproduces the range."""
        doc = TextDocument("\n".join(lines))
        start = data.draw(st.integers(min_value=1, max_value=doc.line_count))
        end = data.draw(st.integers(min_value=start, max_value=doc.line_count))

        snippet = slice_by_lines(doc, start, end)

        assert doc.line_number(snippet.start_offset) + 1 == start
        assert doc.line_number(snippet.end_offset) + 1 == end


class TestExtractElement:
    """Tests for extract_element."""

    def test_raw_text_extent(self, project, workspace) -> None:
        """Without a live document lines come from newline counts."""
        widget = _widget_source_class(workspace)
        method = next(m for m in widget.methods if m.parameter_types == ("int",))

        snippet = extract_element(project, method, method.file)

        assert snippet.text == WIDGET_RENDER_INT
        assert (snippet.start_line, snippet.end_line) == (6, 10)
        assert snippet.start_offset == WIDGET_SOURCE.index(WIDGET_RENDER_INT)

    def test_live_document_extent(self, project, workspace) -> None:
        """A live buffer supplies line numbers through its index."""
        helper = workspace.find_exact_name("com.acme.core.Helper", SearchScope.everything())[0]
        twice = helper.methods[0]

        snippet = extract_element(project, twice, twice.file)

        assert snippet.text.startswith("public static int twice")
        assert (snippet.start_line, snippet.end_line) == (4, 6)
        assert project.documents.get_document(twice.file) is not None

    def test_explicit_range_without_live_document(self, project, workspace) -> None:
        """Line ranges apply even when only raw text exists."""
        widget = _widget_source_class(workspace)

        snippet = extract_element(project, widget, widget.file, 3, 4)

        assert snippet.text == "public class Widget {\n    private int size;"
        assert (snippet.start_line, snippet.end_line) == (3, 4)

    def test_explicit_range_with_live_document(self, project, workspace) -> None:
        helper = workspace.find_exact_name("com.acme.core.Helper", SearchScope.everything())[0]

        snippet = extract_element(project, helper, helper.file, 1, 1)

        assert snippet.text == HELPER_SOURCE.splitlines()[0]
        assert snippet.start_offset == 0

    def test_no_range_uses_synthetic_text(self, project) -> None:
        """Elements without an extent report unknown coordinates."""
        file = SourceFile("file:///ws/app/src/Gen.java", "Gen.java")
        element = UnknownElement(text="generated", file=file)

        snippet = extract_element(project, element, file)

        assert snippet.text == "generated"
        assert (snippet.start_line, snippet.end_line) == (0, 0)
        assert (snippet.start_offset, snippet.end_offset) == (-1, -1)

    def test_read_failure_yields_empty_text(self, workspace, caplog) -> None:
        """Unreadable files are logged and produce empty text."""
        workspace.add_root("file:///ws/broken", "broken")
        file = workspace.add_file("file:///ws/broken", "Broken.java", None)
        method = MethodElement("m", "Broken", (), file, None)

        with caplog.at_level(logging.WARNING, logger="symscope.lookup.snippet"):
            snippet = extract_element(workspace.project(), method, file, 1, 5)

        assert snippet.text == ""
        assert "Unable to load text" in caplog.text


class TestExtractFile:
    """Tests for extract_file."""

    def test_whole_file(self, project, workspace) -> None:
        file = workspace.file("file:///ws/app/resources/app.properties")

        snippet = extract_file(project, file)

        assert snippet.text == APP_PROPERTIES
        assert (snippet.start_offset, snippet.end_offset) == (0, len(APP_PROPERTIES))
        assert (snippet.start_line, snippet.end_line) == (1, 2)

    def test_explicit_range(self, project, workspace) -> None:
        file = workspace.file("file:///ws/app/resources/app.properties")

        snippet = extract_file(project, file, 2, 2)

        assert snippet.text == "name=widget"


class TestChooseView:
    """Tests for choose_view."""

    @pytest.fixture
    def compiled_with_mirror(self) -> ClassElement:
        mirror = ClassElement("com.acme.Gadget", SourceFile("jar:///s.jar!/Gadget.java", "Gadget.java"))
        return ClassElement(
            "com.acme.Gadget",
            SourceFile("jar:///g.jar!/Gadget.class", "Gadget.class", compiled=True),
            compiled=True,
            source_mirror=mirror,
        )

    def test_prefers_source_mirror(self, compiled_with_mirror) -> None:
        assert choose_view(compiled_with_mirror, False) is compiled_with_mirror.source_mirror

    def test_force_decompiled_keeps_element(self, compiled_with_mirror) -> None:
        assert choose_view(compiled_with_mirror, True) is compiled_with_mirror

    def test_element_without_mirror(self) -> None:
        element = FileElement(SourceFile("file:///a.txt", "a.txt"))

        assert choose_view(element, False) is element


def test_count_newlines_handles_reversed_bounds() -> None:
    assert count_newlines("a\nb\nc", 0, 5) == 2
    assert count_newlines("a\nb\nc", 4, 1) == 0

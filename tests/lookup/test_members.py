"""Tests for method and field selection."""

from symscope.lookup.elements import ClassElement, MethodElement
from symscope.lookup.members import (
    normalize_type_name,
    same_erasure,
    select_field,
    select_method,
    type_short_name,
)
from symscope.lookup.models import Query
from symscope.lookup.protocols import SearchScope
from symscope.lookup.ranking import rank_classes


def _ranked_widgets(project, workspace) -> list[ClassElement]:
    widgets = workspace.find_exact_name("com.acme.Widget", SearchScope.everything())
    return rank_classes(project, widgets, Query("com.acme.Widget", module_name="app"))


class TestErasure:
    """Tests for parameter type normalization."""

    def test_generics_are_stripped(self) -> None:
        assert normalize_type_name("java.util.Map<String, List<Integer>>") == "java.util.Map"

    def test_varargs_become_arrays(self) -> None:
        assert normalize_type_name(" String... ") == "String[]"

    def test_missing_name_is_empty(self) -> None:
        assert normalize_type_name(None) == ""

    def test_short_name(self) -> None:
        assert type_short_name("java.lang.String") == "String"
        assert type_short_name("int") == "int"

    def test_short_name_match_accepted(self) -> None:
        method = MethodElement("m", "A", ("java.util.List<String>...",))

        assert same_erasure(method, ["List[]"])

    def test_arity_mismatch_rejected(self) -> None:
        method = MethodElement("m", "A", ("int",))

        assert not same_erasure(method, ["int", "int"])

    def test_different_types_rejected(self) -> None:
        method = MethodElement("m", "A", ("long",))

        assert not same_erasure(method, ["int"])


class TestSelectMethod:
    """Tests for select_method."""

    def test_erasure_match_becomes_primary(self, project, workspace) -> None:
        """render(int, String) wins; render(int) is filtered out."""
        ranked = _ranked_widgets(project, workspace)

        selection = select_method(ranked, "render", ["int", "java.lang.String"], True)

        assert selection.target.parameter_types == ("int", "String")
        assert selection.chosen == (selection.target,)
        assert selection.diagnostics == "com.acme.Widget#render(int, String)"

    def test_other_owners_are_unfiltered_alternatives(self, project, workspace) -> None:
        ranked = _ranked_widgets(project, workspace)

        selection = select_method(ranked, "render", ["int", "java.lang.String"], True)

        assert selection.alternatives[0] is selection.target
        assert [m.parameter_types for m in selection.others] == [("int",), ("int", "java.lang.String")]
        assert all(m.compiled for m in selection.others)

    def test_empty_filter_falls_back_to_all_overloads(self, project, workspace) -> None:
        ranked = _ranked_widgets(project, workspace)

        selection = select_method(ranked, "render", ["double"], True)

        assert [m.signature for m in selection.chosen] == [
            "com.acme.Widget#render(int)",
            "com.acme.Widget#render(int, String)",
        ]
        assert selection.target.parameter_types == ("int",)

    def test_unknown_method_returns_none(self, project, workspace) -> None:
        assert select_method(_ranked_widgets(project, workspace), "paint", None, True) is None

    def test_inherited_methods_respect_flag(self) -> None:
        owner = ClassElement(
            "com.acme.Button",
            methods=(
                MethodElement("toString", "java.lang.Object", inherited=True),
                MethodElement("click", "com.acme.Button"),
            ),
        )

        assert select_method([owner], "toString", None, include_inherited=False) is None
        selection = select_method([owner], "toString", None, include_inherited=True)
        assert selection.target.owner_name == "java.lang.Object"


class TestSelectField:
    """Tests for select_field."""

    def test_best_owner_field_is_primary(self, project, workspace) -> None:
        ranked = _ranked_widgets(project, workspace)

        selection = select_field(ranked, "size")

        assert not selection.target.compiled
        assert len(selection.others) == 1
        assert selection.alternatives == [selection.target, selection.others[0]]

    def test_missing_field_returns_none(self, project, workspace) -> None:
        assert select_field(_ranked_widgets(project, workspace), "weight") is None

"""Member selection: narrowing a ranked class list to a method or field.

Overloads are disambiguated by erasure-style string comparison of
parameter type names only; no type inference is attempted.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from symscope.lookup.elements import ClassElement, FieldElement, MethodElement

_GENERIC_ARGS = re.compile(r"<.*>")


@dataclass(frozen=True, slots=True)
class MethodSelection:
    """Outcome of picking a method among overloads.

    Attributes:
        target: Primary method.
        chosen: The (possibly filtered) overload set, sorted by signature.
        others: Same-name methods of the other ranked owners.
    """

    target: MethodElement
    chosen: tuple[MethodElement, ...]
    others: tuple[MethodElement, ...]

    @property
    def alternatives(self) -> list[MethodElement]:
        """Primary first, then the rest of the chosen set, then other owners' methods."""
        return [self.target, *(m for m in self.chosen if m is not self.target), *self.others]

    @property
    def diagnostics(self) -> str:
        return "\n".join(m.signature for m in self.chosen)


@dataclass(frozen=True, slots=True)
class FieldSelection:
    """Outcome of picking a field; ``others`` come from the other ranked owners."""

    target: FieldElement
    others: tuple[FieldElement, ...]

    @property
    def alternatives(self) -> list[FieldElement]:
        return [self.target, *self.others]


def normalize_type_name(raw: str | None) -> str:
    """Erase generics and turn varargs into array form: ``List<T>...`` -> ``List[]``."""
    if raw is None:
        return ""
    return _GENERIC_ARGS.sub("", raw).replace("...", "[]").strip()


def type_short_name(text: str) -> str:
    idx = text.rfind(".")
    return text[idx + 1:] if idx >= 0 else text


def same_erasure(method: MethodElement, type_names: Sequence[str]) -> bool:
    """Arity matches and every parameter matches by canonical text or short name."""
    if len(method.parameter_types) != len(type_names):
        return False
    for actual_raw, expected_raw in zip(method.parameter_types, type_names):
        expected = normalize_type_name(expected_raw)
        actual = normalize_type_name(actual_raw)
        if actual != expected and type_short_name(actual) != type_short_name(expected):
            return False
    return True


def filter_by_param_types(
    methods: list[MethodElement], type_names: Sequence[str] | None
) -> list[MethodElement]:
    if not type_names:
        return methods
    return [m for m in methods if same_erasure(m, type_names)]


def select_method(
    ranked: Sequence[ClassElement],
    method_name: str,
    param_types: Sequence[str] | None,
    include_inherited: bool,
) -> MethodSelection | None:
    """Pick the best overload on the best-ranked owner.

    Returns None when the best owner has no method with that name. A
    parameter filter that matches nothing falls back to every overload.
    """
    best = ranked[0]
    methods = best.find_methods(method_name, include_inherited)
    if not methods:
        return None

    filtered = filter_by_param_types(methods, param_types)
    chosen = sorted(filtered or methods, key=lambda m: m.signature)
    others = tuple(
        m for owner in ranked[1:] for m in owner.find_methods(method_name, include_inherited)
    )
    return MethodSelection(target=chosen[0], chosen=tuple(chosen), others=others)


def select_field(ranked: Sequence[ClassElement], field_name: str) -> FieldSelection | None:
    """Pick the named field on the best-ranked owner, or None if it has none."""
    fields = ranked[0].find_fields(field_name)
    if not fields:
        return None

    fields.sort(key=lambda f: f.file.url if f.file is not None else "")
    others = tuple(f for owner in ranked[1:] for f in owner.find_fields(field_name))
    return FieldSelection(target=fields[0], others=others)

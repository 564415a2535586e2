"""Tests for single and multi member lookup."""

from typing import Annotated

from hypothesis import given, settings
from hypothesis import strategies as st

from fastreflect import (
    Exclusion,
    LookupCriteria,
    MemberKind,
    NameMatch,
    Visibility,
    resolve_many,
    resolve_one,
)
from fastreflect.core.resolver import needs_full_scan


class Animal:
    def speak(self) -> str:
        return "..."

    def eat(self, food: str) -> None:
        pass

    @staticmethod
    def kingdom() -> str:
        return "animalia"


class Dog(Animal):
    def fetch(self, times: int) -> int:
        return times


class Puppy(Dog):
    def speak(self) -> str:
        return "yip"

    def _nap(self) -> None:
        pass


class Report:
    def GetValue(self) -> int:
        return 1

    def TryGetValue(self) -> bool:
        return True

    def BudgetReport(self) -> str:
        return "budget"

    def summary(self) -> str:
        return "summary"


class Vault:
    def __open(self) -> str:
        return "vault"

    def close(self) -> None:
        pass


class Sized:
    def size(self) -> int:
        return 1


class Boxed(Sized):
    @property
    def size(self) -> int:
        return 2


class Tagger:
    def tag(self, code: Annotated[int, "ref"]) -> None:
        pass


def names(members):
    return [m.name for m in members]


# resolve_one


def test_resolve_one_finds_inherited_member_on_ancestor():
    member = resolve_one(Dog, "speak")

    assert member is not None
    assert member.declaring_type is Animal


def test_resolve_one_declared_only_does_not_walk_up():
    assert resolve_one(Dog, "speak", criteria=LookupCriteria().declared_only()) is None


def test_resolve_one_returns_most_derived_override():
    member = resolve_one(Puppy, "speak")

    assert member is not None
    assert member.declaring_type is Puppy


def test_resolve_one_wrong_arity_is_not_found():
    assert resolve_one(Dog, "fetch", [int, int]) is None
    assert resolve_one(Dog, "fetch", []) is None


def test_resolve_one_with_matching_signature():
    member = resolve_one(Dog, "fetch", [int])

    assert member is not None
    assert member.parameter_types == (int,)


def test_resolve_one_assignable_signature():
    assert resolve_one(Dog, "fetch", [bool]) is not None
    assert resolve_one(Dog, "fetch", [bool], LookupCriteria().exact_parameters()) is None


def test_resolve_one_respects_visibility_mask():
    assert resolve_one(Dog, "kingdom") is None
    assert resolve_one(Dog, "kingdom", criteria=LookupCriteria(Visibility.STATIC_ANY)) is not None

    public_only = LookupCriteria(Visibility.PUBLIC | Visibility.INSTANCE)
    assert resolve_one(Puppy, "_nap", criteria=public_only) is None
    assert resolve_one(Puppy, "_nap") is not None


def test_resolve_one_ignore_case_on_fast_path():
    member = resolve_one(Report, "getvalue", criteria=LookupCriteria().ignoring_case())

    assert member is not None
    assert member.name == "GetValue"
    assert resolve_one(Report, "getvalue") is None


def test_resolve_one_partial_goes_through_full_scan():
    criteria = LookupCriteria().partial()

    member = resolve_one(Report, "Get", criteria=criteria)

    assert needs_full_scan(criteria, has_types=False)
    assert member is not None
    assert member.name == "GetValue"


def test_resolve_one_on_object_is_not_found():
    assert resolve_one(object, "__repr__") is None


def test_resolve_one_mangled_member_by_raw_name():
    member = resolve_one(Vault, "_Vault__open")

    assert member is not None
    assert member.is_explicit


def test_resolve_one_mangled_member_by_trimmed_name():
    criteria = LookupCriteria().matching(NameMatch.TRIM_EXPLICIT)

    member = resolve_one(Vault, "__open", criteria=criteria)

    assert needs_full_scan(criteria, has_types=False)
    assert member is not None
    assert member.name == "_Vault__open"


def test_resolve_one_exclusion_rejects_fast_path_candidate():
    member = resolve_one(Vault, "_Vault__open", criteria=LookupCriteria().excluding(Exclusion.EXPLICIT))

    assert member is None


def test_resolve_one_fast_path_exclusion_does_not_retry_further_up():
    """Intentional: the fast path gives up once exclusions reject its candidate.

    Boxed.size is a property accessor; Sized.size is a plain method that would
    pass. The fast path stops at Boxed and reports nothing, while the multi
    lookup with the same criteria still finds Sized.size.
    """
    criteria = LookupCriteria().excluding(Exclusion.BACKING)

    assert resolve_one(Boxed, "size", criteria=criteria) is None

    (survivor,) = resolve_many(Boxed, "size", criteria=criteria)
    assert survivor.declaring_type is Sized


def test_resolve_one_property_getter_comes_first():
    member = resolve_one(Boxed, "size")

    assert member is not None
    assert member.kind is MemberKind.PROPERTY_GETTER


def test_resolve_one_setter_by_signature():
    class Thermostat:
        @property
        def target(self) -> float:
            return 20.0

        @target.setter
        def target(self, value: float) -> None:
            pass

    member = resolve_one(Thermostat, "target", [float])

    assert member is not None
    assert member.kind is MemberKind.PROPERTY_SETTER


def test_resolve_one_ignoring_modifiers():
    exact = LookupCriteria().exact_parameters()
    blind = exact.ignoring_modifiers()

    assert resolve_one(Tagger, "tag", [int], exact) is None
    assert needs_full_scan(blind, has_types=True)
    assert not needs_full_scan(blind, has_types=False)
    assert resolve_one(Tagger, "tag", [int], blind) is not None


# resolve_many


def test_resolve_many_includes_ancestors_most_derived_first():
    assert names(resolve_many(Dog)) == ["fetch", "speak", "eat"]


def test_resolve_many_declared_only_without_filters():
    assert names(resolve_many(Dog, criteria=LookupCriteria().declared_only())) == ["fetch"]


def test_resolve_many_does_not_flatten_overrides():
    """Each level contributes its own entries, duplicates included."""
    members = resolve_many(Puppy)

    assert names(members) == ["speak", "_nap", "fetch", "speak", "eat"]
    assert [m.declaring_type for m in members if m.name == "speak"] == [Puppy, Animal]


def test_resolve_many_filters_by_names():
    assert names(resolve_many(Puppy, "speak", "fetch")) == ["speak", "fetch", "speak"]


def test_resolve_many_filters_by_parameters():
    assert names(resolve_many(Dog, parameter_types=[str])) == ["eat"]
    assert names(resolve_many(Dog, parameter_types=[])) == ["speak"]


def test_resolve_many_partial_names():
    members = resolve_many(Report, "Get", criteria=LookupCriteria().partial())

    assert names(members) == ["GetValue", "TryGetValue"]


def test_resolve_many_partial_ignore_case():
    members = resolve_many(Report, "get", criteria=LookupCriteria().partial().ignoring_case())

    assert names(members) == ["GetValue", "TryGetValue", "BudgetReport"]


def test_resolve_many_exclusions():
    assert names(resolve_many(Vault, criteria=LookupCriteria().excluding(Exclusion.EXPLICIT))) == [
        "close"
    ]
    assert names(resolve_many(Boxed, criteria=LookupCriteria().excluding(Exclusion.BACKING))) == [
        "size"
    ]


def test_resolve_many_explicit_name_keeps_mangled_members():
    criteria = LookupCriteria().excluding(Exclusion.EXPLICIT).matching(NameMatch.EXPLICIT_NAME)

    assert names(resolve_many(Vault, "_Vault__open", criteria=criteria)) == ["_Vault__open"]


def test_resolve_many_no_match_is_empty_list():
    assert resolve_many(Dog, "bark") == []
    assert resolve_many(object) == []


def test_resolve_many_static_members():
    members = resolve_many(Dog, criteria=LookupCriteria(Visibility.STATIC_ANY))

    assert names(members) == ["kingdom"]
    assert members[0].declaring_type is Animal


def _method(index):
    def method(self):
        return index

    return method


@st.composite
def hierarchies(draw):
    """Build a linear class chain where each level declares k_i fresh methods."""
    counts = draw(st.lists(st.integers(min_value=0, max_value=4), min_size=1, max_size=5))
    base = object
    chain = []
    for level, count in enumerate(counts):
        namespace = {f"m{level}_{i}": _method(i) for i in range(count)}
        base = type(f"Level{level}", (base,), namespace)
        chain.append(base)
    return counts, chain


@settings(max_examples=50)
@given(hierarchies())
def test_resolve_many_returns_every_level_in_order(hierarchy):
    counts, chain = hierarchy
    most_derived = chain[-1]

    members = resolve_many(most_derived)

    assert len(members) == sum(counts)
    expected = [
        f"m{level}_{i}" for level in reversed(range(len(counts))) for i in range(counts[level])
    ]
    assert names(members) == expected


@settings(max_examples=50)
@given(hierarchies())
def test_every_declared_member_resolves_to_itself(hierarchy):
    counts, chain = hierarchy
    most_derived = chain[-1]
    declared_only = LookupCriteria().declared_only()

    for level, cls in enumerate(chain):
        for i in range(counts[level]):
            own = resolve_one(cls, f"m{level}_{i}", [], declared_only)
            inherited = resolve_one(most_derived, f"m{level}_{i}", [])
            assert own is not None and own.declaring_type is cls
            assert inherited == own


class Sketchy:
    def ok(self) -> str:
        return "ok"

    def broken(self, x: "list[") -> None:
        pass


def test_malformed_annotation_does_not_break_lookup_of_other_members():
    assert [m.name for m in resolve_many(Sketchy)] == ["ok", "broken"]
    assert resolve_one(Sketchy, "ok", []) is not None
    assert resolve_one(Sketchy, "broken", [int]).parameter_types == (object,)

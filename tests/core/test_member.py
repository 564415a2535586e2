"""Tests for the member model and the CPython reflector."""

from typing import Annotated

import pytest

from fastreflect import MemberKind, MemberTraits, PythonReflector, Visibility


class Animal:
    sound = "..."  # data attribute, not a member

    def speak(self) -> str:
        return self.sound

    def _breathe(self) -> None:
        pass

    @staticmethod
    def kingdom() -> str:
        return "animalia"

    @classmethod
    def create(cls, name: str) -> "Animal":
        return cls()

    @property
    def legs(self) -> int:
        return 4

    @legs.setter
    def legs(self, value: int) -> None:
        pass

    def __secret(self) -> int:
        return 42

    def __len__(self) -> int:
        return 1


class Dog(Animal):
    def fetch(self, times: int, toy="ball") -> int:
        return times

    def tag(self, code: Annotated[int, "ref"]) -> None:
        pass

    def mystery(self, thing: "Missing") -> None:  # noqa: F821
        pass

    def gather(self, first: int, *rest: int, key: str) -> None:
        pass


@pytest.fixture
def reflector():
    return PythonReflector()


def names(members):
    return [m.name for m in members]


def test_declared_members_in_definition_order(reflector):
    """Own instance members come back in class body order."""
    members = reflector.declared_members(Animal, Visibility.INSTANCE_ANY)

    assert names(members) == ["speak", "_breathe", "legs", "legs", "_Animal__secret", "__len__"]


def test_data_attributes_are_not_members(reflector):
    members = reflector.declared_members(Animal, Visibility.ALL)

    assert "sound" not in names(members)
    assert "__module__" not in names(members)


def test_declared_members_excludes_ancestors(reflector):
    """Member model answers for one level only."""
    members = reflector.declared_members(Dog, Visibility.INSTANCE_ANY)

    assert names(members) == ["fetch", "tag", "mystery", "gather"]


def test_static_mask_selects_staticmethods_and_classmethods(reflector):
    members = reflector.declared_members(Animal, Visibility.STATIC_ANY)

    assert names(members) == ["kingdom", "create"]
    assert [m.kind for m in members] == [MemberKind.STATIC_METHOD, MemberKind.CLASS_METHOD]
    assert all(m.is_static for m in members)


def test_public_mask_drops_underscore_names(reflector):
    """Leading underscore is non-public, dunders stay public."""
    members = reflector.declared_members(Animal, Visibility.PUBLIC | Visibility.INSTANCE)

    assert names(members) == ["speak", "legs", "legs", "__len__"]


def test_non_public_mask(reflector):
    members = reflector.declared_members(Animal, Visibility.NON_PUBLIC | Visibility.INSTANCE)

    assert names(members) == ["_breathe", "_Animal__secret"]


def test_mask_without_access_bits_admits_nothing(reflector):
    assert reflector.declared_members(Animal, Visibility.INSTANCE) == []


def test_parameter_signature_skips_self_and_cls(reflector):
    (create,) = reflector.declared_named(Animal, "create", Visibility.STATIC_ANY)
    (fetch,) = reflector.declared_named(Dog, "fetch", Visibility.INSTANCE_ANY)

    assert create.parameter_types == (str,)
    assert create.return_annotation is Animal
    assert fetch.parameter_types == (int, object)
    assert fetch.parameters[1].has_default
    assert fetch.arity == 2


def test_variadic_and_keyword_only_parameters_are_not_in_signature(reflector):
    (gather,) = reflector.declared_named(Dog, "gather", Visibility.INSTANCE_ANY)

    assert gather.parameter_types == (int,)


def test_annotated_metadata_is_kept(reflector):
    (tag,) = reflector.declared_named(Dog, "tag", Visibility.INSTANCE_ANY)

    assert tag.parameter_types == (Annotated[int, "ref"],)


def test_unresolvable_annotation_falls_back_to_object(reflector):
    (mystery,) = reflector.declared_named(Dog, "mystery", Visibility.INSTANCE_ANY)

    assert mystery.parameter_types == (object,)


class Malformed:
    def ok(self, count: int) -> int:
        return count

    def unparsable(self, x: "list[") -> None:
        pass

    def not_a_type(self, x: "1") -> None:
        pass


def test_malformed_string_annotations_fall_back_to_object(reflector):
    members = {m.name: m for m in reflector.declared_members(Malformed, Visibility.INSTANCE_ANY)}

    assert members["ok"].parameter_types == (int,)
    assert members["unparsable"].parameter_types == (object,)
    assert members["not_a_type"].parameter_types == (object,)


def test_property_accessors_are_backing_members(reflector):
    getter, setter = reflector.declared_named(Animal, "legs", Visibility.INSTANCE_ANY)

    assert getter.kind is MemberKind.PROPERTY_GETTER
    assert setter.kind is MemberKind.PROPERTY_SETTER
    assert getter.parameter_types == ()
    assert setter.parameter_types == (int,)
    assert getter.is_backing and setter.is_backing
    assert MemberTraits.BACKING in getter.traits


def test_mangled_member_is_explicit_with_trimmed_simple_name(reflector):
    (secret,) = reflector.declared_named(Animal, "_Animal__secret", Visibility.INSTANCE_ANY)

    assert secret.is_explicit
    assert secret.simple_name == "__secret"
    assert secret.visibility == Visibility.NON_PUBLIC | Visibility.INSTANCE


def test_plain_members_keep_their_name_as_simple_name(reflector):
    (speak,) = reflector.declared_named(Animal, "speak", Visibility.INSTANCE_ANY)

    assert not speak.is_explicit
    assert speak.simple_name == "speak"


def test_declared_named_ignore_case(reflector):
    assert reflector.declared_named(Animal, "SPEAK", Visibility.INSTANCE_ANY) == []

    (speak,) = reflector.declared_named(Animal, "SPEAK", Visibility.INSTANCE_ANY, ignore_case=True)
    assert speak.name == "speak"


def test_descriptors_derived_twice_are_equal(reflector):
    """Descriptors are rebuilt on demand but compare by value."""
    first = reflector.declared_members(Dog, Visibility.INSTANCE_ANY)
    second = reflector.declared_members(Dog, Visibility.INSTANCE_ANY)

    assert first == second


def test_ancestors_stop_before_object(reflector):
    assert list(reflector.ancestors(Dog)) == [Animal]
    assert list(reflector.ancestors(Animal)) == []
    assert reflector.is_root(object)
    assert not reflector.is_root(Animal)


def test_ancestors_follow_mro_for_mixins(reflector):
    class Walker:
        pass

    class Swimmer:
        pass

    class Duck(Walker, Swimmer):
        pass

    assert list(reflector.ancestors(Duck)) == [Walker, Swimmer]


def test_visibility_admits():
    public_instance = Visibility.PUBLIC | Visibility.INSTANCE

    assert Visibility.INSTANCE_ANY.admits(public_instance)
    assert Visibility.ALL.admits(public_instance)
    assert not Visibility.STATIC_ANY.admits(public_instance)
    assert not (Visibility.NON_PUBLIC | Visibility.INSTANCE).admits(public_instance)
    assert Visibility.ALL.access_bits() == Visibility.ANY_VISIBILITY

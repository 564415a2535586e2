"""Member models: descriptors, visibility and traits.

A MemberDescriptor is a passive snapshot of one callable declared directly on a
class. Descriptors are derived on demand by a TypeReflector and never stored.

Usage:
    member = reflector.declared_named(Dog, "fetch", Visibility.INSTANCE_ANY)[0]
    member.parameter_types   # (int,)
    member.declaring_type    # Dog
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, Flag, auto
from typing import Any


class Visibility(Flag):
    """Visibility mask: access bits x binding bits.

    A member carries exactly one access bit and one binding bit. It passes a
    mask only when both of its bits are present in the mask.
    """

    PUBLIC = auto()
    NON_PUBLIC = auto()
    STATIC = auto()
    INSTANCE = auto()

    ANY_VISIBILITY = PUBLIC | NON_PUBLIC
    INSTANCE_ANY = INSTANCE | PUBLIC | NON_PUBLIC
    STATIC_ANY = STATIC | PUBLIC | NON_PUBLIC
    ALL = STATIC | INSTANCE | PUBLIC | NON_PUBLIC

    def admits(self, member_visibility: Visibility) -> bool:
        """Check whether a member's visibility passes this mask."""
        return (member_visibility & self) == member_visibility

    def access_bits(self) -> Visibility:
        """Only the PUBLIC/NON_PUBLIC part of this mask."""
        return self & Visibility.ANY_VISIBILITY


class MemberKind(Enum):
    """Kind of declared member. Only the invoker compiler branches on this."""

    METHOD = auto()  # plain function, bound to an instance
    STATIC_METHOD = auto()
    CLASS_METHOD = auto()  # bound to the class, invoked without an instance
    PROPERTY_GETTER = auto()
    PROPERTY_SETTER = auto()

    @property
    def is_static(self) -> bool:
        return self in (MemberKind.STATIC_METHOD, MemberKind.CLASS_METHOD)


class MemberTraits(Flag):
    """Trait flags used by exclusion filtering."""

    NONE = 0
    BACKING = auto()  # synthesized from a property entry
    EXPLICIT = auto()  # privately name-mangled (_Owner__name)


@dataclass(slots=True, frozen=True)
class ParameterInfo:
    """One positional parameter of a member's ordered signature."""

    name: str
    annotation: Any = object
    has_default: bool = False


@dataclass(slots=True, frozen=True)
class MemberDescriptor:
    """Immutable description of a member declared directly on a class.

    Attributes:
        declaring_type: Class whose ``__dict__`` holds the member.
        name: Raw attribute name, as stored in the class namespace.
        kind: Tagged member kind.
        parameters: Ordered positional parameters, excluding self/cls.
        return_annotation: Resolved return annotation (``object`` if absent).
        visibility: One access bit combined with one binding bit.
        traits: Backing/explicit flags.
        function: Underlying plain function. Not part of equality.
    """

    declaring_type: type
    name: str
    kind: MemberKind
    parameters: tuple[ParameterInfo, ...] = ()
    return_annotation: Any = object
    visibility: Visibility = Visibility.PUBLIC | Visibility.INSTANCE
    traits: MemberTraits = MemberTraits.NONE
    function: Callable[..., Any] | None = field(default=None, compare=False, repr=False)

    @property
    def parameter_types(self) -> tuple[Any, ...]:
        return tuple(p.annotation for p in self.parameters)

    @property
    def arity(self) -> int:
        return len(self.parameters)

    @property
    def is_static(self) -> bool:
        return self.kind.is_static

    @property
    def is_backing(self) -> bool:
        return MemberTraits.BACKING in self.traits

    @property
    def is_explicit(self) -> bool:
        return MemberTraits.EXPLICIT in self.traits

    @property
    def simple_name(self) -> str:
        """Name with the owner qualifier trimmed off mangled members.

        ``_Vault__secret`` declared on ``Vault`` becomes ``__secret``; other
        names are returned unchanged.
        """
        if not self.is_explicit:
            return self.name
        prefix = "_" + self.declaring_type.__name__.lstrip("_")
        return self.name[len(prefix) :]

    def __str__(self) -> str:
        params = ", ".join(getattr(t, "__name__", repr(t)) for t in self.parameter_types)
        return f"{self.declaring_type.__qualname__}.{self.name}({params})"

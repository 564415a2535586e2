"""Invoker shapes and compiled invokers.

Usage:
    shape = InvokerShape(Dog, "fetch", parameter_types=(int,))
    invoker = cache.get_or_build(shape)
    invoker(rex, 3)

    static = InvokerShape(MathUtils, "add", is_static=True, parameter_types=(int, int))
    cache.get_or_build(static)(1, 2)
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from fastreflect.core.member import MemberDescriptor, Visibility
from fastreflect.invocation.errors import (
    ArgumentConversionError,
    ArityMismatchError,
    NullTargetError,
)

type ArgumentConverter = Callable[[tuple[Any, ...]], tuple[Any, ...]]


class NoValue(Enum):
    """Result of invoking a member that declares no return value."""

    NO_VALUE = auto()

    def __repr__(self) -> str:
        return "NO_VALUE"


NO_VALUE = NoValue.NO_VALUE


@dataclass(frozen=True, slots=True)
class InvokerShape:
    """Cache key identifying one compiled invoker.

    Two shapes are equal iff every component is equal.

    Attributes:
        target_type: Class the member is looked up on.
        name: Exact member name.
        is_static: Static (staticmethod/classmethod) or instance binding.
        parameter_types: Ordered signature, or None to accept any signature.
        visibility: Access bits used to resolve the member. Binding bits are
            derived from is_static and stripped here.
    """

    target_type: type
    name: str
    is_static: bool = False
    parameter_types: tuple[Any, ...] | None = None
    visibility: Visibility = Visibility.ANY_VISIBILITY

    def __post_init__(self) -> None:
        if self.parameter_types is not None and not isinstance(self.parameter_types, tuple):
            object.__setattr__(self, "parameter_types", tuple(self.parameter_types))
        object.__setattr__(self, "visibility", self.visibility.access_bits())

    @classmethod
    def of(
        cls,
        target_type: type,
        name: str,
        parameter_types: Sequence[Any] | None = None,
        *,
        is_static: bool = False,
        visibility: Visibility = Visibility.ANY_VISIBILITY,
    ) -> InvokerShape:
        """Build a shape from any sequence of parameter types."""
        return cls(
            target_type=target_type,
            name=name,
            is_static=is_static,
            parameter_types=None if parameter_types is None else tuple(parameter_types),
            visibility=visibility,
        )

    @property
    def binding_mask(self) -> Visibility:
        """Full visibility mask: access bits plus the static or instance bit."""
        binding = Visibility.STATIC if self.is_static else Visibility.INSTANCE
        return self.visibility | binding

    def __str__(self) -> str:
        if self.parameter_types is None:
            params = "..."
        else:
            params = ", ".join(getattr(t, "__name__", repr(t)) for t in self.parameter_types)
        kind = "static " if self.is_static else ""
        return f"{kind}{self.target_type.__qualname__}.{self.name}({params})"


@dataclass(frozen=True, slots=True, eq=False)
class StaticInvoker:
    """Compiled call path for a member invoked without a target.

    Holds only immutable state and may be called from any thread.
    """

    member: MemberDescriptor
    call: Callable[..., Any] = field(repr=False)
    convert: ArgumentConverter | None = field(default=None, repr=False)
    returns_value: bool = True

    @property
    def arity(self) -> int:
        return self.member.arity

    def __call__(self, *args: Any) -> Any:
        if len(args) != self.member.arity:
            raise ArityMismatchError(self.member, len(args))
        if self.convert is not None:
            args = self.convert(args)
        result = self.call(*args)
        return result if self.returns_value else NO_VALUE


@dataclass(frozen=True, slots=True, eq=False)
class MethodInvoker:
    """Compiled call path for an instance member.

    The target is supplied per call and never stored.

    Targets must be instances of target_type, the class the shape was
    looked up on, which defaults to the declaring type of the member.
    """

    member: MemberDescriptor
    call: Callable[..., Any] = field(repr=False)
    convert: ArgumentConverter | None = field(default=None, repr=False)
    returns_value: bool = True
    target_type: type | None = None

    @property
    def arity(self) -> int:
        return self.member.arity

    def __call__(self, target: Any, *args: Any) -> Any:
        if target is None:
            raise NullTargetError(self.member)
        expected = self.target_type or self.member.declaring_type
        if not isinstance(target, expected):
            raise ArgumentConversionError(
                self.member,
                f"target of type {type(target).__qualname__} is not a {expected.__qualname__}",
            )
        if len(args) != self.member.arity:
            raise ArityMismatchError(self.member, len(args))
        if self.convert is not None:
            args = self.convert(args)
        result = self.call(target, *args)
        return result if self.returns_value else NO_VALUE


type Invoker = StaticInvoker | MethodInvoker

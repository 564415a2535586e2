"""Type reflection capability and its CPython implementation.

The reflector is the only place that knows how a host class exposes its
members. Resolver and invoker logic talk to the TypeReflector protocol, so a
different host (stub types in tests, a registry of foreign types) can be
swapped in without touching them.

Usage:
    reflector = PythonReflector()
    reflector.declared_members(Dog, Visibility.INSTANCE_ANY)
    list(reflector.ancestors(Dog))   # [Animal]
"""

from __future__ import annotations

import inspect
import types
import typing
from collections.abc import Callable, Iterator
from typing import Any, Protocol

import structlog

from fastreflect.core.member.models import (
    MemberDescriptor,
    MemberKind,
    MemberTraits,
    ParameterInfo,
    Visibility,
)

logger = structlog.get_logger(__name__)

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


class TypeReflector(Protocol):
    """Host introspection capability used by the resolver and the compiler."""

    def declared_members(self, cls: type, visibility: Visibility) -> list[MemberDescriptor]:
        """Members declared directly on cls that pass the mask, in definition order."""
        ...

    def declared_named(
        self,
        cls: type,
        name: str,
        visibility: Visibility,
        *,
        ignore_case: bool = False,
    ) -> list[MemberDescriptor]:
        """Direct query for the members stored under one name on cls."""
        ...

    def ancestors(self, cls: type) -> Iterator[type]:
        """Walk the inheritance chain above cls, stopping before the root."""
        ...

    def is_root(self, cls: type) -> bool:
        """Check if cls is the universal root type."""
        ...


def _access_of(name: str) -> Visibility:
    if name.startswith("__") and name.endswith("__"):
        return Visibility.PUBLIC
    return Visibility.NON_PUBLIC if name.startswith("_") else Visibility.PUBLIC


def _is_mangled(cls: type, name: str) -> bool:
    """Check for a private name mangled with the declaring class's name.

    Python never mangles names that end with two underscores.
    """
    owner = cls.__name__.lstrip("_")
    if not owner or name.endswith("__"):
        return False
    prefix = f"_{owner}__"
    return name.startswith(prefix) and len(name) > len(prefix)


def _type_hints(cls: type, fn: Callable[..., Any]) -> dict[str, Any] | None:
    try:
        return typing.get_type_hints(fn, localns={cls.__name__: cls}, include_extras=True)
    except (NameError, SyntaxError, TypeError) as e:
        logger.debug(
            "annotations_unresolved",
            declaring_type=cls.__qualname__,
            function=fn.__name__,
            error=str(e),
        )
        return None


def _annotation_of(hints: dict[str, Any] | None, name: str, raw: Any) -> Any:
    if hints is not None and name in hints:
        return hints[name]
    if raw is inspect.Parameter.empty or raw is inspect.Signature.empty or isinstance(raw, str):
        return object
    return raw


def _signature(
    cls: type, fn: Callable[..., Any], skip: int
) -> tuple[tuple[ParameterInfo, ...], Any]:
    """Ordered positional parameters (after skipping self/cls) and return annotation."""
    hints = _type_hints(cls, fn)
    sig = inspect.signature(fn)
    positional = [p for p in sig.parameters.values() if p.kind in _POSITIONAL][skip:]
    parameters = tuple(
        ParameterInfo(
            name=p.name,
            annotation=_annotation_of(hints, p.name, p.annotation),
            has_default=p.default is not inspect.Parameter.empty,
        )
        for p in positional
    )
    return parameters, _annotation_of(hints, "return", sig.return_annotation)


def _describe(cls: type, name: str, value: Any) -> list[MemberDescriptor]:
    """Turn one class namespace entry into zero or more member descriptors."""
    access = _access_of(name)
    traits = MemberTraits.EXPLICIT if _is_mangled(cls, name) else MemberTraits.NONE

    if isinstance(value, property):
        accessors = [
            (MemberKind.PROPERTY_GETTER, value.fget),
            (MemberKind.PROPERTY_SETTER, value.fset),
        ]
        members = []
        for kind, fn in accessors:
            if not isinstance(fn, types.FunctionType):
                continue
            parameters, returns = _signature(cls, fn, skip=1)
            members.append(
                MemberDescriptor(
                    declaring_type=cls,
                    name=name,
                    kind=kind,
                    parameters=parameters,
                    return_annotation=returns,
                    visibility=access | Visibility.INSTANCE,
                    traits=traits | MemberTraits.BACKING,
                    function=fn,
                )
            )
        return members

    if isinstance(value, staticmethod):
        kind, fn, skip = MemberKind.STATIC_METHOD, value.__func__, 0
    elif isinstance(value, classmethod):
        kind, fn, skip = MemberKind.CLASS_METHOD, value.__func__, 1
    elif isinstance(value, types.FunctionType):
        kind, fn, skip = MemberKind.METHOD, value, 1
    else:
        return []

    # C-level callables wrapped in staticmethod/classmethod carry no usable signature
    if not isinstance(fn, types.FunctionType):
        return []

    parameters, returns = _signature(cls, fn, skip=skip)
    binding = Visibility.STATIC if kind.is_static else Visibility.INSTANCE
    return [
        MemberDescriptor(
            declaring_type=cls,
            name=name,
            kind=kind,
            parameters=parameters,
            return_annotation=returns,
            visibility=access | binding,
            traits=traits,
            function=fn,
        )
    ]


class PythonReflector:
    """TypeReflector over CPython class objects.

    Members are the functions, staticmethods, classmethods and property
    accessors found in a class's own ``__dict__``. The ancestor chain follows
    the MRO and ``object`` is the root.
    """

    root: type = object

    def declared_members(self, cls: type, visibility: Visibility) -> list[MemberDescriptor]:
        members: list[MemberDescriptor] = []
        for name, value in vars(cls).items():
            members.extend(m for m in _describe(cls, name, value) if visibility.admits(m.visibility))
        return members

    def declared_named(
        self,
        cls: type,
        name: str,
        visibility: Visibility,
        *,
        ignore_case: bool = False,
    ) -> list[MemberDescriptor]:
        namespace = vars(cls)
        if ignore_case:
            folded = name.casefold()
            entries = [(key, value) for key, value in namespace.items() if key.casefold() == folded]
        elif name in namespace:
            entries = [(name, namespace[name])]
        else:
            return []

        members: list[MemberDescriptor] = []
        for key, value in entries:
            members.extend(m for m in _describe(cls, key, value) if visibility.admits(m.visibility))
        return members

    def ancestors(self, cls: type) -> Iterator[type]:
        for base in cls.__mro__[1:]:
            if self.is_root(base):
                return
            yield base

    def is_root(self, cls: type) -> bool:
        return cls is self.root


_default_reflector = PythonReflector()


def get_reflector() -> PythonReflector:
    """Access the shared stateless reflector used when none is injected.

    Returns:
        The process-wide PythonReflector instance.
    """
    return _default_reflector

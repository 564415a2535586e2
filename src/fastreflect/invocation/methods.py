"""Call surface: invoke shapes, call methods by name, obtain cached delegates.

Usage:
    # Call by name; parameter types come from the runtime argument types
    call_method(rex, "fetch", 3)
    call_static_method(MathUtils, "add", 1, 2)

    # Keep a delegate around and call it in a loop
    fetch = delegate_for_call_method(Dog, "fetch", int)
    for dog in kennel:
        fetch(dog, 3)

    # Explicit shape
    invoke(InvokerShape(Dog, "fetch", parameter_types=(int,)), rex, (3,))
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, cast

from fastreflect.core.member import Visibility
from fastreflect.invocation.cache import InvokerCache, get_cache
from fastreflect.invocation.models import InvokerShape, MethodInvoker, StaticInvoker


def _types_of(args: Sequence[Any]) -> tuple[type, ...]:
    return tuple(type(a) for a in args)


def _cache_or_default(cache: InvokerCache | None) -> InvokerCache:
    # An empty cache is falsy, so compare against None explicitly
    return cache if cache is not None else get_cache()


def invoke(
    shape: InvokerShape,
    target: Any = None,
    args: Sequence[Any] = (),
    *,
    cache: InvokerCache | None = None,
) -> Any:
    """Call the member a shape binds to, compiling it on first use.

    Args:
        shape: Shape identifying the member.
        target: Instance for instance shapes. Ignored for static shapes.
        args: Ordered arguments.
        cache: Cache to use. The process-wide cache if None.

    Returns:
        The member's result, or NO_VALUE for members without a return value.
    """
    invoker = _cache_or_default(cache).get_or_build(shape)
    if isinstance(invoker, StaticInvoker):
        return invoker(*args)
    return invoker(target, *args)


def call_method(
    target: Any,
    name: str,
    *args: Any,
    parameter_types: Sequence[Any] | None = None,
    visibility: Visibility = Visibility.ANY_VISIBILITY,
    cache: InvokerCache | None = None,
) -> Any:
    """Call an instance member of target by name.

    Args:
        target: Instance to call on. Its runtime class is searched.
        name: Member name.
        *args: Arguments passed positionally.
        parameter_types: Signature to bind. Derived from type(arg) of each argument if None.
        visibility: Access levels to search.
        cache: Cache to use. The process-wide cache if None.

    Returns:
        The member's result, or NO_VALUE for members without a return value.
    """
    types = _types_of(args) if parameter_types is None else tuple(parameter_types)
    shape = InvokerShape(type(target), name, False, types, visibility)
    return invoke(shape, target, args, cache=cache)


def call_static_method(
    cls: type,
    name: str,
    *args: Any,
    parameter_types: Sequence[Any] | None = None,
    visibility: Visibility = Visibility.ANY_VISIBILITY,
    cache: InvokerCache | None = None,
) -> Any:
    """Call a staticmethod or classmethod of cls by name.

    Args:
        cls: Class to search.
        name: Member name.
        *args: Arguments passed positionally.
        parameter_types: Signature to bind. Derived from type(arg) of each argument if None.
        visibility: Access levels to search.
        cache: Cache to use. The process-wide cache if None.

    Returns:
        The member's result, or NO_VALUE for members without a return value.
    """
    types = _types_of(args) if parameter_types is None else tuple(parameter_types)
    shape = InvokerShape(cls, name, True, types, visibility)
    return invoke(shape, None, args, cache=cache)


def delegate_for_call_method(
    cls: type,
    name: str,
    *parameter_types: Any,
    visibility: Visibility = Visibility.ANY_VISIBILITY,
    cache: InvokerCache | None = None,
) -> MethodInvoker:
    """Get a cached invoker for an instance member of cls.

    Leave parameter_types empty for members taking no arguments.
    """
    shape = InvokerShape(cls, name, False, parameter_types, visibility)
    return cast(MethodInvoker, _cache_or_default(cache).get_or_build(shape))


def delegate_for_call_static_method(
    cls: type,
    name: str,
    *parameter_types: Any,
    visibility: Visibility = Visibility.ANY_VISIBILITY,
    cache: InvokerCache | None = None,
) -> StaticInvoker:
    """Get a cached invoker for a staticmethod or classmethod of cls.

    Leave parameter_types empty for members taking no arguments.
    """
    shape = InvokerShape(cls, name, True, parameter_types, visibility)
    return cast(StaticInvoker, _cache_or_default(cache).get_or_build(shape))

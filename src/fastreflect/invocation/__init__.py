"""Invocation: shapes, compiled invokers, the invoker cache and the call surface."""

from fastreflect.invocation.cache import InvokerCache, get_cache
from fastreflect.invocation.compiler import InvokerCompiler
from fastreflect.invocation.errors import (
    AmbiguousShapeError,
    ArgumentConversionError,
    ArityMismatchError,
    MemberNotFoundError,
    NullTargetError,
    ReflectionError,
)
from fastreflect.invocation.methods import (
    call_method,
    call_static_method,
    delegate_for_call_method,
    delegate_for_call_static_method,
    invoke,
)
from fastreflect.invocation.models import (
    NO_VALUE,
    Invoker,
    InvokerShape,
    MethodInvoker,
    NoValue,
    StaticInvoker,
)

__all__ = [
    # Models
    "InvokerShape",
    "Invoker",
    "StaticInvoker",
    "MethodInvoker",
    "NoValue",
    "NO_VALUE",
    # Services
    "InvokerCompiler",
    "InvokerCache",
    "get_cache",
    # Call surface
    "invoke",
    "call_method",
    "call_static_method",
    "delegate_for_call_method",
    "delegate_for_call_static_method",
    # Errors
    "ReflectionError",
    "MemberNotFoundError",
    "AmbiguousShapeError",
    "ArityMismatchError",
    "NullTargetError",
    "ArgumentConversionError",
]

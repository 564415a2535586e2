"""fastreflect: member resolution and cached invokers for Python classes.

Usage:
    from fastreflect import LookupCriteria, call_method, resolve_many, resolve_one

    class Animal:
        def speak(self) -> str:
            return "..."

    class Dog(Animal):
        def fetch(self, times: int) -> int:
            return times

    resolve_one(Dog, "speak").declaring_type        # Animal
    [m.name for m in resolve_many(Dog)]             # ["fetch", "speak"]
    resolve_one(Dog, "speak", criteria=LookupCriteria().declared_only())   # None

    call_method(Dog(), "fetch", 3)                  # 3, compiled once then cached
"""

__version__ = "0.1.0"

# Configuration
from fastreflect.config import FastReflectSettings

# Core primitives
from fastreflect.core import (
    Exclusion,
    LookupCriteria,
    MemberDescriptor,
    MemberKind,
    MemberTraits,
    NameMatch,
    ParameterInfo,
    ParameterMatch,
    PythonReflector,
    Traversal,
    TypeReflector,
    Visibility,
    resolve_many,
    resolve_one,
)

# Invocation
from fastreflect.invocation import (
    NO_VALUE,
    AmbiguousShapeError,
    ArgumentConversionError,
    ArityMismatchError,
    Invoker,
    InvokerCache,
    InvokerCompiler,
    InvokerShape,
    MemberNotFoundError,
    MethodInvoker,
    NoValue,
    NullTargetError,
    ReflectionError,
    StaticInvoker,
    call_method,
    call_static_method,
    delegate_for_call_method,
    delegate_for_call_static_method,
    get_cache,
    invoke,
)

# Logging
from fastreflect.logging import configure_logging

__all__ = [
    # Version
    "__version__",
    # Member model
    "MemberDescriptor",
    "MemberKind",
    "MemberTraits",
    "ParameterInfo",
    "Visibility",
    "TypeReflector",
    "PythonReflector",
    # Criteria
    "LookupCriteria",
    "Traversal",
    "NameMatch",
    "ParameterMatch",
    "Exclusion",
    # Resolution
    "resolve_one",
    "resolve_many",
    # Invocation
    "InvokerShape",
    "Invoker",
    "StaticInvoker",
    "MethodInvoker",
    "NoValue",
    "NO_VALUE",
    "InvokerCompiler",
    "InvokerCache",
    "get_cache",
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
    # Ambient
    "FastReflectSettings",
    "configure_logging",
]

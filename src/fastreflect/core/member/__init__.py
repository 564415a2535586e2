"""Member model: descriptors, visibility, traits and the reflection capability."""

from fastreflect.core.member.models import (
    MemberDescriptor,
    MemberKind,
    MemberTraits,
    ParameterInfo,
    Visibility,
)
from fastreflect.core.member.reflector import PythonReflector, TypeReflector, get_reflector

__all__ = [
    # Models
    "MemberDescriptor",
    "MemberKind",
    "MemberTraits",
    "ParameterInfo",
    "Visibility",
    # Reflection
    "TypeReflector",
    "PythonReflector",
    "get_reflector",
]

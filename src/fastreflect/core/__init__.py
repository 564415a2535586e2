"""Core functionalities: stateless member model, predicates and resolution.

Architecture Note:
    core/ contains pure, stateless functionalities with no runtime state mutation.
    Resolution only reads class namespaces. For the stateful invoker cache and
    the invocation surface, see invocation/.
"""

from fastreflect.core.match import (
    Exclusion,
    LookupCriteria,
    NameMatch,
    ParameterMatch,
    Traversal,
    is_assignable,
    name_matches,
    parameters_match,
    passes_exclusions,
    strip_modifiers,
)
from fastreflect.core.member import (
    MemberDescriptor,
    MemberKind,
    MemberTraits,
    ParameterInfo,
    PythonReflector,
    TypeReflector,
    Visibility,
    get_reflector,
)
from fastreflect.core.resolver import needs_full_scan, resolve_many, resolve_one

__all__ = [
    # Member
    "MemberDescriptor",
    "MemberKind",
    "MemberTraits",
    "ParameterInfo",
    "Visibility",
    "TypeReflector",
    "PythonReflector",
    "get_reflector",
    # Match
    "LookupCriteria",
    "Traversal",
    "NameMatch",
    "ParameterMatch",
    "Exclusion",
    "name_matches",
    "parameters_match",
    "passes_exclusions",
    "is_assignable",
    "strip_modifiers",
    # Resolver
    "resolve_one",
    "resolve_many",
    "needs_full_scan",
]

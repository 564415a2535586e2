"""Match predicates and list filters over member descriptors.

Every predicate is pure: it looks only at the descriptor and the criteria.
The filter_* helpers apply one dimension to a candidate list, preserving order.
"""

from __future__ import annotations

import types
from collections.abc import Sequence
from typing import Annotated, Any, TypeVar, Union, get_args, get_origin

from fastreflect.core.match.models import Exclusion, LookupCriteria, NameMatch, ParameterMatch
from fastreflect.core.member.models import MemberDescriptor

NoneType = type(None)

# PEP 484 numeric tower shortcut: int is acceptable where float or complex is declared
_NUMERIC_PROMOTIONS: dict[type, frozenset[type]] = {
    int: frozenset({float, complex}),
    float: frozenset({complex}),
}


def strip_modifiers(annotation: Any) -> Any:
    """Remove Annotated metadata, returning the underlying annotation."""
    while get_origin(annotation) is Annotated:
        annotation = annotation.__origin__
    return annotation


def _is_union(annotation: Any) -> bool:
    origin = get_origin(annotation)
    return origin is Union or origin is types.UnionType


def is_assignable(declared: Any, provided: Any) -> bool:
    """Check if a value of type ``provided`` may be passed where ``declared`` is expected.

    Args:
        declared: Parameter annotation of the member.
        provided: Runtime type (or annotation) supplied by the caller.

    Returns:
        True if the runtime would accept the assignment, False otherwise.
    """
    declared = strip_modifiers(declared)
    provided = strip_modifiers(provided)

    if declared is Any or declared is object:
        return True
    if declared is None:
        declared = NoneType
    if provided is None:
        provided = NoneType
    if isinstance(declared, TypeVar):
        return is_assignable(declared.__bound__ or object, provided)
    if declared == provided:
        return True

    if _is_union(declared):
        return any(is_assignable(arg, provided) for arg in get_args(declared))
    if _is_union(provided):
        return all(is_assignable(declared, arg) for arg in get_args(provided))

    declared_cls = get_origin(declared) or declared
    provided_cls = get_origin(provided) or provided
    if not isinstance(declared_cls, type) or not isinstance(provided_cls, type):
        return False
    if declared_cls in _NUMERIC_PROMOTIONS.get(provided_cls, frozenset()):
        return True
    try:
        return issubclass(provided_cls, declared_cls)
    except TypeError:
        # Non-runtime-checkable protocols and similar refuse issubclass
        return False


def _types_equal(declared: Any, provided: Any, ignore_modifiers: bool) -> bool:
    if ignore_modifiers:
        declared, provided = strip_modifiers(declared), strip_modifiers(provided)
    if provided is None:
        provided = NoneType
    if declared is None:
        declared = NoneType
    return bool(declared == provided)


def name_matches(member: MemberDescriptor, names: Sequence[str], mode: NameMatch) -> bool:
    """Check if the member's name matches any of the target names.

    The raw name is compared when EXPLICIT_NAME is set or TRIM_EXPLICIT is not;
    otherwise mangled members are compared by their simple name.
    """
    use_raw = NameMatch.EXPLICIT_NAME in mode or NameMatch.TRIM_EXPLICIT not in mode
    candidate = member.name if use_raw else member.simple_name
    ignore_case = NameMatch.IGNORE_CASE in mode
    partial = NameMatch.PARTIAL in mode
    if ignore_case:
        candidate = candidate.casefold()

    for name in names:
        target = name.casefold() if ignore_case else name
        if (target in candidate) if partial else (candidate == target):
            return True
    return False


def parameters_match(
    member: MemberDescriptor, parameter_types: Sequence[Any], mode: ParameterMatch
) -> bool:
    """Check the member's ordered signature against the provided types.

    Arity must be equal. ASSIGNABLE compares with is_assignable, EXACT requires
    equal annotations, IGNORE_MODIFIERS strips Annotated metadata first.
    """
    declared = member.parameter_types
    if len(declared) != len(parameter_types):
        return False
    ignore_modifiers = ParameterMatch.IGNORE_MODIFIERS in mode
    if ParameterMatch.EXACT in mode:
        return all(
            _types_equal(d, p, ignore_modifiers)
            for d, p in zip(declared, parameter_types, strict=True)
        )
    return all(is_assignable(d, p) for d, p in zip(declared, parameter_types, strict=True))


def passes_exclusions(member: MemberDescriptor, criteria: LookupCriteria) -> bool:
    """Check the member against the criteria's exclusion flags.

    Mangled members survive EXPLICIT exclusion while EXPLICIT_NAME matching
    is requested, since the caller is then asking for them by raw name.
    """
    if Exclusion.BACKING in criteria.exclusions and member.is_backing:
        return False
    if (
        Exclusion.EXPLICIT in criteria.exclusions
        and member.is_explicit
        and NameMatch.EXPLICIT_NAME not in criteria.name_match
    ):
        return False
    return True


def filter_by_names(
    members: list[MemberDescriptor], names: Sequence[str], mode: NameMatch
) -> list[MemberDescriptor]:
    return [m for m in members if name_matches(m, names, mode)]


def filter_by_parameters(
    members: list[MemberDescriptor], parameter_types: Sequence[Any], mode: ParameterMatch
) -> list[MemberDescriptor]:
    return [m for m in members if parameters_match(m, parameter_types, mode)]


def filter_by_exclusions(
    members: list[MemberDescriptor], criteria: LookupCriteria
) -> list[MemberDescriptor]:
    return [m for m in members if passes_exclusions(m, criteria)]

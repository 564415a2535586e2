"""Single and multi member lookup.

Usage:
    # First match walking from Dog up to (but excluding) object
    member = resolve_one(Dog, "speak")

    # Only Dog's own members
    resolve_one(Dog, "speak", criteria=LookupCriteria().declared_only())   # None

    # Every instance member on the chain, most-derived first
    resolve_many(Dog)

    # Substring search, case-insensitive
    resolve_many(Report, "get", criteria=LookupCriteria().partial().ignoring_case())
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

import structlog

from fastreflect.core.match import (
    LookupCriteria,
    NameMatch,
    ParameterMatch,
    filter_by_exclusions,
    filter_by_names,
    filter_by_parameters,
    parameters_match,
    passes_exclusions,
)
from fastreflect.core.member import MemberDescriptor, TypeReflector, get_reflector

logger = structlog.get_logger(__name__)

_DEFAULT_CRITERIA = LookupCriteria()


def _levels(cls: type, criteria: LookupCriteria, reflector: TypeReflector) -> Iterator[type]:
    """Yield cls, then its ancestors when the criteria walk the hierarchy."""
    yield cls
    if criteria.recurse:
        yield from reflector.ancestors(cls)


def needs_full_scan(criteria: LookupCriteria, has_types: bool) -> bool:
    """Check if a single lookup must go through the multi lookup.

    Substring names, trimmed mangled names and modifier-blind parameter
    comparison cannot be answered by one direct name query per level.
    """
    if criteria.name_match & (NameMatch.PARTIAL | NameMatch.TRIM_EXPLICIT):
        return True
    return has_types and ParameterMatch.IGNORE_MODIFIERS in criteria.parameter_match


def resolve_one(
    cls: type,
    name: str,
    parameter_types: Sequence[Any] | None = None,
    criteria: LookupCriteria | None = None,
    *,
    reflector: TypeReflector | None = None,
) -> MemberDescriptor | None:
    """Find one member by name, walking most-derived to least-derived.

    Args:
        cls: Class to search.
        name: Member name to match.
        parameter_types: Ordered signature to match, or None for no signature filter.
        criteria: Matching rules. Defaults to LookupCriteria().
        reflector: Host reflection capability. Defaults to the shared PythonReflector.

    Returns:
        The first matching member, or None if nothing matches.

    Note:
        When exclusions reject the fast path's candidate the result is None,
        even if a more distant level holds a member that would pass.
    """
    criteria = criteria or _DEFAULT_CRITERIA
    reflector = reflector or get_reflector()
    has_types = parameter_types is not None

    if needs_full_scan(criteria, has_types):
        matches = resolve_many(
            cls, name, parameter_types=parameter_types, criteria=criteria, reflector=reflector
        )
        return matches[0] if matches else None

    ignore_case = NameMatch.IGNORE_CASE in criteria.name_match
    result: MemberDescriptor | None = None
    for level in _levels(cls, criteria, reflector):
        for candidate in reflector.declared_named(
            level, name, criteria.visibility, ignore_case=ignore_case
        ):
            if not has_types or parameters_match(
                candidate, parameter_types, criteria.parameter_match  # type: ignore[arg-type]
            ):
                result = candidate
                break
        if result is not None:
            break

    if result is not None and criteria.has_exclusions and not passes_exclusions(result, criteria):
        logger.debug("member_excluded", member=str(result), exclusions=str(criteria.exclusions))
        return None
    return result


def resolve_many(
    cls: type,
    *names: str,
    parameter_types: Sequence[Any] | None = None,
    criteria: LookupCriteria | None = None,
    reflector: TypeReflector | None = None,
) -> list[MemberDescriptor]:
    """Find every member matching the criteria.

    Args:
        cls: Class to search.
        *names: Optional names; a member matches if any one matches. None means no name filter.
        parameter_types: Ordered signature to match, or None for no signature filter.
        criteria: Matching rules. Defaults to LookupCriteria().
        reflector: Host reflection capability. Defaults to the shared PythonReflector.

    Returns:
        Matching members, most-derived level first and definition order within
        a level. Never None; an empty list means nothing matched.
    """
    criteria = criteria or _DEFAULT_CRITERIA
    reflector = reflector or get_reflector()

    if reflector.is_root(cls):
        return []

    has_names = len(names) > 0
    has_types = parameter_types is not None

    if not (criteria.recurse or has_names or has_types or criteria.has_exclusions):
        return reflector.declared_members(cls, criteria.visibility)

    members: list[MemberDescriptor] = []
    for level in _levels(cls, criteria, reflector):
        members.extend(reflector.declared_members(level, criteria.visibility))

    if has_names:
        members = filter_by_names(members, names, criteria.name_match)
    if has_types:
        members = filter_by_parameters(
            members,
            parameter_types,  # type: ignore[arg-type]
            criteria.parameter_match,
        )
    if criteria.has_exclusions:
        members = filter_by_exclusions(members, criteria)
    return members

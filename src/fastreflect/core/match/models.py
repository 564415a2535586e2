"""Lookup criteria and matching modes.

Usage:
    # Defaults: instance members of any access level, inherited, exact names
    criteria = LookupCriteria()

    # Own public static members, case-insensitive
    criteria = (
        LookupCriteria(visibility=Visibility.STATIC | Visibility.PUBLIC)
        .declared_only()
        .ignoring_case()
    )

    # Substring search skipping property accessors
    criteria = LookupCriteria().partial().excluding(Exclusion.BACKING)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, Flag, auto

from fastreflect.core.member.models import Visibility


class Traversal(Enum):
    """Whether lookups walk up the inheritance chain."""

    DECLARED_ONLY = auto()
    INHERITED = auto()


class NameMatch(Flag):
    """Name comparison modes. EXACT (no flags) is case-sensitive equality."""

    EXACT = 0
    IGNORE_CASE = auto()
    PARTIAL = auto()  # substring containment
    EXPLICIT_NAME = auto()  # compare raw mangled names, keep mangled members
    TRIM_EXPLICIT = auto()  # compare mangled members by their simple name


class ParameterMatch(Flag):
    """Parameter comparison modes. ASSIGNABLE (no flags) is the default."""

    ASSIGNABLE = 0
    EXACT = auto()
    IGNORE_MODIFIERS = auto()  # strip Annotated metadata before comparing


class Exclusion(Flag):
    """Candidates to drop from results."""

    NONE = 0
    BACKING = auto()
    EXPLICIT = auto()


@dataclass(frozen=True, slots=True)
class LookupCriteria:
    """Value object describing how members are matched.

    Immutable - each builder method returns a new LookupCriteria instance.
    """

    visibility: Visibility = Visibility.INSTANCE_ANY
    traversal: Traversal = Traversal.INHERITED
    name_match: NameMatch = NameMatch.EXACT
    parameter_match: ParameterMatch = ParameterMatch.ASSIGNABLE
    exclusions: Exclusion = Exclusion.NONE

    @property
    def recurse(self) -> bool:
        return self.traversal is Traversal.INHERITED

    @property
    def has_exclusions(self) -> bool:
        return bool(self.exclusions)

    def with_visibility(self, visibility: Visibility) -> LookupCriteria:
        """Replace the visibility mask."""
        return replace(self, visibility=visibility)

    def declared_only(self) -> LookupCriteria:
        """Only members declared on the looked-up class itself."""
        return replace(self, traversal=Traversal.DECLARED_ONLY)

    def inherited(self) -> LookupCriteria:
        """Also search ancestors, most-derived first."""
        return replace(self, traversal=Traversal.INHERITED)

    def ignoring_case(self) -> LookupCriteria:
        return replace(self, name_match=self.name_match | NameMatch.IGNORE_CASE)

    def partial(self) -> LookupCriteria:
        return replace(self, name_match=self.name_match | NameMatch.PARTIAL)

    def matching(self, mode: NameMatch) -> LookupCriteria:
        """Add name matching flags."""
        return replace(self, name_match=self.name_match | mode)

    def exact_parameters(self) -> LookupCriteria:
        return replace(self, parameter_match=self.parameter_match | ParameterMatch.EXACT)

    def ignoring_modifiers(self) -> LookupCriteria:
        return replace(
            self, parameter_match=self.parameter_match | ParameterMatch.IGNORE_MODIFIERS
        )

    def excluding(self, exclusions: Exclusion) -> LookupCriteria:
        return replace(self, exclusions=self.exclusions | exclusions)

"""Match functionality: lookup criteria and pure member predicates."""

from fastreflect.core.match.models import (
    Exclusion,
    LookupCriteria,
    NameMatch,
    ParameterMatch,
    Traversal,
)
from fastreflect.core.match.operations import (
    filter_by_exclusions,
    filter_by_names,
    filter_by_parameters,
    is_assignable,
    name_matches,
    parameters_match,
    passes_exclusions,
    strip_modifiers,
)

__all__ = [
    # Models
    "LookupCriteria",
    "Traversal",
    "NameMatch",
    "ParameterMatch",
    "Exclusion",
    # Predicates
    "name_matches",
    "parameters_match",
    "passes_exclusions",
    "is_assignable",
    "strip_modifiers",
    # Filters
    "filter_by_names",
    "filter_by_parameters",
    "filter_by_exclusions",
]

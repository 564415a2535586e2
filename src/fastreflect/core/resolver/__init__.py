"""Resolver functionality: single and multi member lookup over a class hierarchy."""

from fastreflect.core.resolver.core import needs_full_scan, resolve_many, resolve_one

__all__ = [
    "resolve_one",
    "resolve_many",
    "needs_full_scan",
]

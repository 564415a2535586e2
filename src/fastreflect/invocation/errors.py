"""Errors raised while compiling or calling invokers.

Lookups never raise: resolve_one returns None and resolve_many returns [].
Everything below is surfaced to the caller as-is and never retried.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastreflect.core.member import MemberDescriptor
    from fastreflect.invocation.models import InvokerShape


class ReflectionError(Exception):
    """Base class for compile and invocation failures."""

    pass


class MemberNotFoundError(ReflectionError, LookupError):
    """Raised when a shape does not resolve to any member."""

    def __init__(self, shape: InvokerShape):
        self.shape = shape
        super().__init__(f"No member matches {shape}")


class AmbiguousShapeError(ReflectionError):
    """Raised when a shape matches several members on the same level."""

    def __init__(self, shape: InvokerShape, candidates: list[MemberDescriptor]):
        self.shape = shape
        self.candidates = candidates
        names = ", ".join(f"{c} [{c.kind.name}]" for c in candidates)
        super().__init__(f"{shape} is ambiguous between: {names}")


class ArityMismatchError(ReflectionError, TypeError):
    """Raised when an invoker receives the wrong number of arguments."""

    def __init__(self, member: MemberDescriptor, actual: int):
        self.member = member
        self.expected = member.arity
        self.actual = actual
        super().__init__(f"{member} takes {self.expected} argument(s) but {actual} were given")


class NullTargetError(ReflectionError, TypeError):
    """Raised when an instance member is invoked with None as the target."""

    def __init__(self, member: MemberDescriptor):
        self.member = member
        super().__init__(f"{member} is an instance member and needs a target, got None")


class ArgumentConversionError(ReflectionError, TypeError):
    """Raised when a target or argument cannot be converted to the declared type."""

    def __init__(self, member: MemberDescriptor, detail: str):
        self.member = member
        self.detail = detail
        super().__init__(f"Invalid arguments for {member}: {detail}")

"""Invoker compiler: turns an InvokerShape into a bound call path.

Compilation resolves the member once, picks the underlying function for its
kind, and prepares the argument converter. The resulting invoker calls the
function directly, skipping getattr, the MRO walk and descriptor binding.

Compilation does not touch any cache; see InvokerCache for that.

Usage:
    compiler = InvokerCompiler()
    invoker = compiler.compile(InvokerShape(Dog, "fetch", parameter_types=(int,)))
    invoker(rex, 3)
"""

from __future__ import annotations

import types
from typing import Any

import structlog
from pydantic import (
    ConfigDict,
    PydanticUndefinedAnnotation,
    PydanticUserError,
    TypeAdapter,
    ValidationError,
)

from fastreflect.config import FastReflectSettings
from fastreflect.core.match import LookupCriteria, Traversal, is_assignable
from fastreflect.core.member import MemberDescriptor, MemberKind, TypeReflector, get_reflector
from fastreflect.core.resolver import resolve_many
from fastreflect.invocation.errors import (
    AmbiguousShapeError,
    ArgumentConversionError,
    MemberNotFoundError,
)
from fastreflect.invocation.models import (
    ArgumentConverter,
    Invoker,
    InvokerShape,
    MethodInvoker,
    StaticInvoker,
)

logger = structlog.get_logger(__name__)

NoneType = type(None)


def _validation_type(annotation: Any) -> Any:
    return Any if annotation is object else annotation


def _adapter_converter(
    member: MemberDescriptor, adapter: TypeAdapter[tuple[Any, ...]]
) -> ArgumentConverter:
    """Coerce only the arguments whose runtime type does not fit.

    Arguments that are already assignable keep their identity, so mutations
    and subclass types reach the member exactly as a direct call would.
    """
    declared = member.parameter_types

    def convert(args: tuple[Any, ...]) -> tuple[Any, ...]:
        fits = [is_assignable(t, type(a)) for t, a in zip(declared, args, strict=True)]
        if all(fits):
            return args
        try:
            validated = adapter.validate_python(args)
        except ValidationError as e:
            raise ArgumentConversionError(member, str(e)) from e
        return tuple(a if fit else v for a, v, fit in zip(args, validated, fits, strict=True))

    return convert


def _assignability_converter(member: MemberDescriptor) -> ArgumentConverter:
    declared = member.parameter_types

    def convert(args: tuple[Any, ...]) -> tuple[Any, ...]:
        for position, (expected, value) in enumerate(zip(declared, args, strict=True)):
            if not is_assignable(expected, type(value)):
                raise ArgumentConversionError(
                    member,
                    f"argument {position} of type {type(value).__qualname__} "
                    f"is not assignable to {expected!r}",
                )
        return args

    return convert


def _returns_value(member: MemberDescriptor) -> bool:
    if member.kind is MemberKind.PROPERTY_SETTER:
        return False
    return member.return_annotation not in (None, NoneType)


class InvokerCompiler:
    """Builds invokers for shapes.

    Args:
        settings: Controls argument conversion. Loaded from FASTREFLECT_* if None.
        reflector: Host reflection capability. Defaults to the shared PythonReflector.
    """

    def __init__(
        self,
        settings: FastReflectSettings | None = None,
        reflector: TypeReflector | None = None,
    ) -> None:
        self._settings = settings or FastReflectSettings()
        self._reflector = reflector or get_reflector()

    @property
    def settings(self) -> FastReflectSettings:
        return self._settings

    def resolve(self, shape: InvokerShape) -> MemberDescriptor:
        """Resolve the single member a shape binds to.

        Only the most-derived level with any candidate counts, so overrides
        shadow the members they replace.

        Raises:
            MemberNotFoundError: If nothing matches.
            AmbiguousShapeError: If several members match on that level.
        """
        criteria = LookupCriteria(visibility=shape.binding_mask, traversal=Traversal.INHERITED)
        candidates = resolve_many(
            shape.target_type,
            shape.name,
            parameter_types=shape.parameter_types,
            criteria=criteria,
            reflector=self._reflector,
        )
        if not candidates:
            raise MemberNotFoundError(shape)
        nearest = [c for c in candidates if c.declaring_type is candidates[0].declaring_type]
        if len(nearest) > 1:
            raise AmbiguousShapeError(shape, nearest)
        return nearest[0]

    def compile(self, shape: InvokerShape) -> Invoker:
        """Resolve and bind a shape.

        Args:
            shape: Shape to compile.

        Returns:
            StaticInvoker for static shapes, MethodInvoker otherwise.

        Raises:
            MemberNotFoundError: If the shape does not resolve.
            AmbiguousShapeError: If the shape is under-specified.
        """
        member = self.resolve(shape)
        function = member.function
        if function is None:
            raise MemberNotFoundError(shape)

        convert = self._converter(member)
        returns_value = _returns_value(member)

        invoker: Invoker
        if member.kind is MemberKind.CLASS_METHOD:
            # Bound to the looked-up class so subclasses see themselves as cls
            bound = types.MethodType(function, shape.target_type)
            invoker = StaticInvoker(member, bound, convert, returns_value)
        elif member.kind is MemberKind.STATIC_METHOD:
            invoker = StaticInvoker(member, function, convert, returns_value)
        else:
            invoker = MethodInvoker(member, function, convert, returns_value, shape.target_type)

        logger.debug(
            "invoker_compiled",
            shape=str(shape),
            member=str(member),
            kind=member.kind.name,
            argument_mode=self._settings.argument_mode,
        )
        return invoker

    def _converter(self, member: MemberDescriptor) -> ArgumentConverter | None:
        mode = self._settings.argument_mode
        if mode == "off" or member.arity == 0:
            return None

        declared = tuple(_validation_type(t) for t in member.parameter_types)
        try:
            adapter: TypeAdapter[tuple[Any, ...]] = TypeAdapter(
                tuple[declared],  # type: ignore[valid-type]
                config=ConfigDict(arbitrary_types_allowed=True, strict=mode == "strict"),
            )
        except (PydanticUserError, PydanticUndefinedAnnotation) as e:
            logger.warning(
                "argument_conversion_fallback",
                member=str(member),
                error=str(e),
            )
            return _assignability_converter(member)
        return _adapter_converter(member, adapter)

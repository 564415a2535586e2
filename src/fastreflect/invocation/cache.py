"""Invoker cache with compute-or-fetch semantics.

Entries are never evicted. Keeping an invoker is cheap; resolving and
compiling it again is the cost being amortized.

Usage:
    cache = InvokerCache()
    invoker = cache.get_or_build(InvokerShape(Dog, "fetch", parameter_types=(int,)))

    # Process-wide instance used when no cache is passed explicitly
    get_cache().get_or_build(shape)
"""

from __future__ import annotations

import threading

import structlog

from fastreflect.invocation.compiler import InvokerCompiler
from fastreflect.invocation.models import Invoker, InvokerShape

logger = structlog.get_logger(__name__)


class InvokerCache:
    """Mapping InvokerShape -> Invoker shared by any number of threads.

    Reads take no lock. A miss compiles outside any lock and publishes with
    dict.setdefault, so the first writer wins and racing builders discard
    their copy. Builds for different shapes never wait on each other, and a
    failed build leaves no entry behind.

    Args:
        compiler: Compiler used on misses. A default InvokerCompiler if None.
    """

    def __init__(self, compiler: InvokerCompiler | None = None) -> None:
        """Initialize an empty invoker cache."""
        self._compiler = compiler or InvokerCompiler()
        self._invokers: dict[InvokerShape, Invoker] = {}

    @property
    def compiler(self) -> InvokerCompiler:
        return self._compiler

    def get_or_build(self, shape: InvokerShape) -> Invoker:
        """Return the published invoker for shape, compiling it on first use.

        Args:
            shape: Shape to look up.

        Returns:
            The single invoker published for an equal shape.

        Raises:
            MemberNotFoundError: If the shape does not resolve.
            AmbiguousShapeError: If the shape is under-specified.
        """
        invoker = self._invokers.get(shape)
        if invoker is not None:
            return invoker

        built = self._compiler.compile(shape)
        invoker = self._invokers.setdefault(shape, built)
        if invoker is not built:
            logger.debug("invoker_build_discarded", shape=str(shape))
        return invoker

    def get(self, shape: InvokerShape) -> Invoker | None:
        """Get a published invoker without building.

        Args:
            shape: Shape to look up.

        Returns:
            The invoker if one was built, None otherwise.
        """
        return self._invokers.get(shape)

    def __contains__(self, shape: object) -> bool:
        return shape in self._invokers

    def __len__(self) -> int:
        return len(self._invokers)


_cache: InvokerCache | None = None
_cache_lock = threading.Lock()


def get_cache() -> InvokerCache:
    """Access the process-wide invoker cache, creating it on first use.

    Returns:
        The process-local InvokerCache instance.
    """
    global _cache
    if _cache is None:
        with _cache_lock:
            if _cache is None:
                _cache = InvokerCache()
    return _cache

"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from fastreflect import FastReflectSettings, InvokerCache, InvokerCompiler, configure_logging

configure_logging(FastReflectSettings(log_level="WARNING"))


@pytest.fixture
def settings():
    """Lax argument conversion, independent of the environment."""
    return FastReflectSettings(argument_mode="lax")


@pytest.fixture
def compiler(settings):
    """Fresh InvokerCompiler."""
    return InvokerCompiler(settings=settings)


@pytest.fixture
def cache(compiler):
    """Fresh, isolated InvokerCache instance."""
    return InvokerCache(compiler=compiler)

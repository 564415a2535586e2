"""Configuration using Pydantic Settings."""

from fastreflect.config.settings import ArgumentMode, FastReflectSettings

__all__ = [
    "ArgumentMode",
    "FastReflectSettings",
]

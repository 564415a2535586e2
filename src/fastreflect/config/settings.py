"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support.

Usage:
    from fastreflect.config import FastReflectSettings

    # Load from environment variables (FASTREFLECT_*)
    settings = FastReflectSettings()

    # Or override with explicit values
    settings = FastReflectSettings(argument_mode="strict")
    compiler = InvokerCompiler(settings=settings)
"""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

ArgumentMode = Literal["lax", "strict", "off"]


class FastReflectSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for invoker compilation and logging.

    Attributes:
        argument_mode: How invokers convert arguments to declared parameter types.
            lax: pydantic lax-mode conversion ("3" becomes 3 for an int parameter).
            strict: values must already have the declared type.
            off: only the argument count is checked.
        log_level: Level applied by configure_logging().
        log_format: Renderer used by configure_logging() (console or json).

    Environment Variables:
        FASTREFLECT_ARGUMENT_MODE
        FASTREFLECT_LOG_LEVEL
        FASTREFLECT_LOG_FORMAT
    """

    model_config = SettingsConfigDict(
        env_prefix="FASTREFLECT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    argument_mode: ArgumentMode = "lax"
    log_level: str = "WARNING"
    log_format: Literal["console", "json"] = "console"

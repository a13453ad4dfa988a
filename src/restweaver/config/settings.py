# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Configuration for RestWeaver.

Provides process-wide settings using pydantic-settings. Values come from keyword
arguments first, then `RESTWEAVER_*` environment variables, then defaults. Provider
factories read the settings when they are created.
"""

from __future__ import annotations

import logging
import threading

from typing import Annotated, Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from restweaver.core.types.enum import BaseEnum
from restweaver.core.types.utils import generate_field_title
from restweaver.exceptions import ConfigurationError


logger = logging.getLogger(__name__)

_settings_lock = threading.Lock()
_settings: RestWeaverSettings | None = None


class MapperPrecedence(BaseEnum):
    """How user and built-in exception mappers compete across hierarchy levels."""

    NEAREST = "nearest"
    """The nearest hierarchy level wins; origin only breaks ties within a level."""
    USER_FIRST = "user_first"
    """Any user mapper in the hierarchy beats every built-in mapper."""


class RestWeaverSettings(BaseSettings):
    """Settings for provider factories.

    Configuration precedence (highest to lowest):
    1. Keyword arguments
    2. Environment variables (RESTWEAVER_*)
    3. Defaults
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_ignore_empty=True,
        env_prefix="RESTWEAVER_",
        extra="ignore",
        field_title_generator=generate_field_title,
        str_strip_whitespace=True,
        title="RestWeaver Settings",
        use_attribute_docstrings=True,
        validate_assignment=True,
    )

    register_default_providers: Annotated[
        bool,
        Field(description="Seed each new factory with the built-in default providers."),
    ] = True
    schema_locations: Annotated[
        tuple[str, ...],
        Field(description="Schema locations handed to schema-aware providers, uninterpreted."),
    ] = ()
    exception_mapper_precedence: Annotated[
        MapperPrecedence,
        Field(description="Precedence rule between user and built-in exception mappers."),
    ] = MapperPrecedence.NEAREST
    log_level: Annotated[
        int, Field(description="Level for the `restweaver` logger, as a number or a name.")
    ] = logging.WARNING
    rich_logging: Annotated[
        bool, Field(description="Format log output with rich.")
    ] = True

    @field_validator("exception_mapper_precedence", mode="before")
    @classmethod
    def _coerce_precedence(cls, value: Any) -> Any:
        if isinstance(value, str):
            return MapperPrecedence.from_string(value)
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _coerce_log_level(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip().isdigit():
            levels = logging.getLevelNamesMapping()
            if (level := levels.get(value.strip().upper())) is None:
                raise ValueError(f"Unknown log level: {value}")
            return level
        return value


def get_settings(**overrides: Any) -> RestWeaverSettings:
    """Get the global settings instance, creating it on first use.

    Passing overrides replaces the global instance with one built from them.

    Raises:
        ConfigurationError: if the environment or the overrides hold invalid values.
    """
    global _settings
    if _settings is not None and not overrides:
        return _settings
    with _settings_lock:
        if _settings is None or overrides:
            try:
                _settings = RestWeaverSettings(**overrides)
            except ValidationError as e:
                raise ConfigurationError(
                    "Invalid RestWeaver settings",
                    details={"errors": e.errors(include_url=False)},
                    suggestions=["Check RESTWEAVER_* environment variables"],
                ) from e
            logger.debug("Loaded settings: %s", _settings.model_dump())
        return _settings


def reset_settings() -> None:
    """Drop the global settings so the next access reloads them."""
    global _settings
    with _settings_lock:
        _settings = None


__all__ = ("MapperPrecedence", "RestWeaverSettings", "get_settings", "reset_settings")

# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Unit tests for RestWeaver settings."""

from __future__ import annotations

import logging

import pytest

from restweaver.config.settings import (
    MapperPrecedence,
    RestWeaverSettings,
    get_settings,
    reset_settings,
)
from restweaver.exceptions import ConfigurationError
from restweaver.factory import ProviderFactory
from restweaver.providers.descriptor import ProviderKind
from tests.fixtures.providers import SchemaAwareReader


pytestmark = [pytest.mark.unit, pytest.mark.config]


class TestDefaults:
    """Tests for default values."""

    def test_default_values(self):
        """Test the defaults with no environment."""
        settings = RestWeaverSettings()
        assert settings.register_default_providers is True
        assert settings.schema_locations == ()
        assert settings.exception_mapper_precedence is MapperPrecedence.NEAREST
        assert settings.log_level == logging.WARNING
        assert settings.rich_logging is True


class TestEnvironment:
    """Tests for RESTWEAVER_* environment variables."""

    def test_precedence_from_env(self, monkeypatch: pytest.MonkeyPatch):
        """Test loose enum spellings from the environment."""
        monkeypatch.setenv("RESTWEAVER_EXCEPTION_MAPPER_PRECEDENCE", "user-first")
        assert get_settings().exception_mapper_precedence is MapperPrecedence.USER_FIRST

    def test_log_level_names(self, monkeypatch: pytest.MonkeyPatch):
        """Test that log levels accept names and numbers."""
        monkeypatch.setenv("RESTWEAVER_LOG_LEVEL", "debug")
        assert get_settings().log_level == logging.DEBUG
        reset_settings()
        monkeypatch.setenv("RESTWEAVER_LOG_LEVEL", "20")
        assert get_settings().log_level == logging.INFO

    def test_disable_defaults_from_env(self, monkeypatch: pytest.MonkeyPatch):
        """Test that factories honor register_default_providers."""
        monkeypatch.setenv("RESTWEAVER_REGISTER_DEFAULT_PROVIDERS", "false")
        factory = ProviderFactory()
        assert factory.defaults(ProviderKind.MESSAGE_READER) == ()
        assert not factory.resolve_reader(str, media_type="text/plain")

    def test_schema_locations_from_env(self, monkeypatch: pytest.MonkeyPatch):
        """Test that list settings are read as JSON."""
        monkeypatch.setenv("RESTWEAVER_SCHEMA_LOCATIONS", '["schemas/book.xsd"]')
        assert get_settings().schema_locations == ("schemas/book.xsd",)

    def test_invalid_values(self, monkeypatch: pytest.MonkeyPatch):
        """Test that invalid values surface as ConfigurationError."""
        monkeypatch.setenv("RESTWEAVER_LOG_LEVEL", "loud")
        with pytest.raises(ConfigurationError) as exc_info:
            get_settings()
        assert exc_info.value.details["errors"]
        assert exc_info.value.suggestions


class TestGlobalSettings:
    """Tests for get_settings/reset_settings."""

    def test_singleton(self):
        """Test that get_settings returns the same instance."""
        assert get_settings() is get_settings()

    def test_overrides_replace_instance(self):
        """Test that overrides build a new global instance."""
        original = get_settings()
        updated = get_settings(exception_mapper_precedence="user_first")
        assert updated is not original
        assert get_settings() is updated
        assert updated.exception_mapper_precedence is MapperPrecedence.USER_FIRST

    def test_reset(self):
        """Test that reset_settings drops the cached instance."""
        original = get_settings()
        reset_settings()
        assert get_settings() is not original

    def test_validate_assignment(self):
        """Test that assignments are validated."""
        settings = RestWeaverSettings()
        settings.exception_mapper_precedence = "user_first"  # type: ignore[assignment]
        assert settings.exception_mapper_precedence is MapperPrecedence.USER_FIRST

    def test_schema_locations_seed_factories(self):
        """Test that configured schema locations reach schema-aware providers."""
        settings = RestWeaverSettings(schema_locations=("schemas/book.xsd",))
        factory = ProviderFactory(settings=settings, defaults=())
        reader = SchemaAwareReader()
        factory.register_provider(reader)
        assert reader.locations == ("schemas/book.xsd",)
        assert factory.settings is settings

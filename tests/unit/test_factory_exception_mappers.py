# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Unit tests for exception mapper resolution."""

from __future__ import annotations

import pytest

from starlette.exceptions import HTTPException
from starlette.responses import PlainTextResponse

from restweaver.config.settings import MapperPrecedence, RestWeaverSettings
from restweaver.core.types.sentinel import NOT_FOUND
from restweaver.exceptions import MissingValueError
from restweaver.factory import ProviderFactory
from restweaver.providers.builtin import HTTPExceptionMapper
from restweaver.providers.descriptor import Origin
from tests.fixtures.providers import (
    AppErrorMapper,
    BaseExceptionMapper,
    LookupErrorMapper,
    NotFoundAppError,
    RecordingMapper,
    RuntimeErrorMapper,
    Unhandled,
)


pytestmark = pytest.mark.unit


class NotFoundHTTPException(HTTPException):
    def __init__(self) -> None:
        super().__init__(status_code=404, detail="missing")


class TestNearestAncestor:
    """The mapper for the nearest registered class handles an exception."""

    def test_exact_class(self, bare_factory: ProviderFactory):
        """Test a mapper registered for the exception's own class."""
        mapper = RuntimeErrorMapper()
        bare_factory.register_provider(mapper)
        assert bare_factory.resolve_exception_mapper(RuntimeError).provider is mapper

    def test_subclass_and_instance(self, bare_factory: ProviderFactory):
        """Test resolution for subclasses, by class or by instance."""
        mapper = RuntimeErrorMapper()
        bare_factory.register_provider(mapper)
        assert bare_factory.resolve_exception_mapper(RecursionError).provider is mapper
        assert bare_factory.resolve_exception_mapper(RecursionError("deep")).provider is mapper

    def test_nearest_wins(self, bare_factory: ProviderFactory):
        """Test that the closest ancestor beats a more general mapper."""
        general = RecordingMapper("general")
        lookup = LookupErrorMapper()
        bare_factory.set_providers([lookup, general])
        assert bare_factory.resolve_exception_mapper(KeyError).provider is lookup
        assert bare_factory.resolve_exception_mapper(ValueError).provider is general

    def test_multiple_inheritance_follows_mro(self, bare_factory: ProviderFactory):
        """Test that the first registered base in MRO order wins."""
        lookup = LookupErrorMapper()
        app = AppErrorMapper()
        bare_factory.set_providers([lookup, app])
        assert bare_factory.resolve_exception_mapper(NotFoundAppError).provider is app

    def test_no_mapper(self, bare_factory: ProviderFactory):
        """Test that an exception outside every registered hierarchy is a miss."""
        bare_factory.register_provider(RecordingMapper())
        assert bare_factory.resolve_exception_mapper(Unhandled) is NOT_FOUND
        assert bare_factory.resolve_exception_mapper(KeyboardInterrupt()) is NOT_FOUND

    def test_base_exception_mapper(self, bare_factory: ProviderFactory):
        """Test that a BaseException mapper reaches everything."""
        mapper = BaseExceptionMapper()
        bare_factory.register_provider(mapper)
        assert bare_factory.resolve_exception_mapper(Unhandled).provider is mapper

    def test_latest_registration_wins_within_level(self, bare_factory: ProviderFactory):
        """Test that the most recent mapper for the same class wins."""
        first = RecordingMapper("first", target=LookupError)
        second = RecordingMapper("second", target=LookupError)
        bare_factory.set_providers([first, second])
        assert bare_factory.resolve_exception_mapper(KeyError).provider is second

    def test_new_registration_is_visible(self, bare_factory: ProviderFactory):
        """Test that cached lookups do not outlive a registration."""
        general = RecordingMapper("general")
        bare_factory.register_provider(general)
        assert bare_factory.resolve_exception_mapper(KeyError).provider is general
        assert bare_factory.resolve_exception_mapper(ValueError).provider is general
        lookup = LookupErrorMapper()
        bare_factory.register_provider(lookup)
        assert bare_factory.resolve_exception_mapper(KeyError).provider is lookup
        assert bare_factory.resolve_exception_mapper(ValueError).provider is general
        bare_factory.clear_providers()
        assert bare_factory.resolve_exception_mapper(KeyError) is NOT_FOUND

    def test_contract_violations(self, bare_factory: ProviderFactory):
        """Test None and non-exception arguments."""
        with pytest.raises(MissingValueError):
            bare_factory.resolve_exception_mapper(None)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            bare_factory.resolve_exception_mapper(int)  # type: ignore[arg-type]


class TestOriginPrecedence:
    """How user and built-in mappers compete."""

    def test_built_in_http_exception_mapper(self, factory: ProviderFactory):
        """Test the default mapper for HTTP exceptions and its response."""
        descriptor = factory.resolve_exception_mapper(NotFoundHTTPException())
        assert isinstance(descriptor.provider, HTTPExceptionMapper)
        assert descriptor.origin is Origin.BUILT_IN
        response = descriptor.provider.to_response(
            HTTPException(status_code=418, detail="teapot", headers={"X-Brew": "no"})
        )
        assert isinstance(response, PlainTextResponse)
        assert response.status_code == 418
        assert response.body == b"teapot"
        assert response.headers["x-brew"] == "no"

    def test_user_beats_built_in_at_same_level(self, factory: ProviderFactory):
        """Test that a user mapper for the same class replaces the default."""
        user = RecordingMapper("user", target=HTTPException)
        factory.register_provider(user)
        assert factory.resolve_exception_mapper(HTTPException).provider is user

    def test_user_beats_later_built_in_at_same_level(self, bare_factory: ProviderFactory):
        """Test that origin outranks registration order within a level."""
        user = RecordingMapper("user", target=LookupError)
        bare_factory.register_provider(user)
        bare_factory.register_provider(LookupErrorMapper(), origin=Origin.BUILT_IN)
        assert bare_factory.resolve_exception_mapper(KeyError).provider is user

    def test_nearest_built_in_beats_general_user(self, factory: ProviderFactory):
        """Test that a nearer built-in mapper wins over a more general user mapper."""
        user = RecordingMapper("user")
        factory.register_provider(user)
        assert isinstance(
            factory.resolve_exception_mapper(NotFoundHTTPException).provider, HTTPExceptionMapper
        )
        assert factory.resolve_exception_mapper(ValueError).provider is user

    def test_user_first_precedence(self):
        """Test that the user-first setting prefers any reachable user mapper."""
        settings = RestWeaverSettings(exception_mapper_precedence="user_first")
        assert settings.exception_mapper_precedence is MapperPrecedence.USER_FIRST
        factory = ProviderFactory("/user-first", settings=settings)
        assert isinstance(
            factory.resolve_exception_mapper(HTTPException).provider, HTTPExceptionMapper
        )
        user = RecordingMapper("user")
        factory.register_provider(user)
        assert factory.resolve_exception_mapper(NotFoundHTTPException).provider is user
        assert factory.resolve_exception_mapper(Unhandled) is NOT_FOUND

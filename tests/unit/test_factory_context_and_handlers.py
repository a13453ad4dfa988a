# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Unit tests for context resolver and parameter handler resolution."""

from __future__ import annotations

import pytest

from restweaver.core.types.sentinel import NOT_FOUND
from restweaver.exceptions import MissingValueError
from restweaver.factory import ProviderFactory
from restweaver.providers.descriptor import Origin, ProviderKind
from tests.fixtures.providers import (
    Book,
    BookContextResolver,
    Customer,
    CustomerParameterHandler,
    ExplicitTargetHandler,
)


pytestmark = pytest.mark.unit


class SpecialBook(Book):
    pass


class TestContextResolvers:
    """Context resolvers are looked up by exact target type."""

    def test_resolves_registered_type(self, factory: ProviderFactory):
        """Test that the resolver for a type is found and usable."""
        resolver = BookContextResolver()
        factory.register_provider(resolver)
        descriptor = factory.resolve_context(Book)
        assert descriptor.provider is resolver
        assert descriptor.kind is ProviderKind.CONTEXT_RESOLVER
        assert descriptor.provider.get_context(Book) == {"indent": 2}

    def test_exact_type_only(self, factory: ProviderFactory):
        """Test that subclasses and unrelated types are misses."""
        factory.register_provider(BookContextResolver())
        assert factory.resolve_context(SpecialBook) is NOT_FOUND
        assert factory.resolve_context(str) is NOT_FOUND

    def test_latest_registration_wins(self, bare_factory: ProviderFactory):
        """Test that the most recent resolver for a type wins."""
        first = BookContextResolver({"indent": 0})
        second = BookContextResolver({"indent": 4})
        bare_factory.set_providers([first, second])
        assert bare_factory.resolve_context(Book).provider is second

    def test_user_beats_built_in(self, bare_factory: ProviderFactory):
        """Test that a user resolver wins over a later built-in one."""
        user = BookContextResolver()
        bare_factory.register_provider(user)
        bare_factory.register_provider(BookContextResolver(), origin=Origin.BUILT_IN)
        assert bare_factory.resolve_context(Book).provider is user

    def test_missing_target(self, bare_factory: ProviderFactory):
        """Test that None is a contract violation."""
        with pytest.raises(MissingValueError):
            bare_factory.resolve_context(None)  # type: ignore[arg-type]


class TestParameterHandlers:
    """Parameter handlers are looked up by exact target type."""

    def test_resolves_and_converts(self, bare_factory: ProviderFactory):
        """Test resolution and conversion through the handler."""
        handler = CustomerParameterHandler()
        bare_factory.register_provider(handler)
        descriptor = bare_factory.resolve_parameter_handler(Customer)
        assert descriptor.provider is handler
        assert descriptor.provider.from_string("Barry").name == "Barry"

    def test_explicit_target(self, bare_factory: ProviderFactory):
        """Test a handler declaring its target with the class attribute."""
        handler = ExplicitTargetHandler()
        bare_factory.register_provider(handler)
        assert bare_factory.resolve_parameter_handler(complex).provider is handler
        assert bare_factory.resolve_parameter_handler(complex).provider.from_string("1+2j") == 1 + 2j

    def test_unknown_type(self, factory: ProviderFactory):
        """Test that a type without a handler is a miss."""
        assert factory.resolve_parameter_handler(Customer) is NOT_FOUND

    def test_cleared(self, bare_factory: ProviderFactory):
        """Test that clearing removes handlers."""
        bare_factory.register_provider(CustomerParameterHandler())
        bare_factory.clear_providers()
        assert bare_factory.resolve_parameter_handler(Customer) is NOT_FOUND

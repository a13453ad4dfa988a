# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""RestWeaver: provider registration and resolution for REST runtimes."""

from restweaver._version import __version__
from restweaver.core.media_type import MediaType
from restweaver.core.types.sentinel import NOT_FOUND, NotFound
from restweaver.directory import get_instance, get_shared_instance, reset_directory
from restweaver.exceptions import (
    ConfigurationError,
    MissingValueError,
    NoProviderFoundError,
    ProviderError,
    RestWeaverError,
)
from restweaver.factory import ProviderFactory, expect_provider
from restweaver.providers import (
    ContextResolver,
    ExceptionMapper,
    MessageBodyReader,
    MessageBodyWriter,
    Origin,
    ParameterHandler,
    ProviderDescriptor,
    ProviderKind,
    SchemaAware,
    consumes,
    produces,
)


__all__ = (
    "NOT_FOUND",
    "ConfigurationError",
    "ContextResolver",
    "ExceptionMapper",
    "MediaType",
    "MessageBodyReader",
    "MessageBodyWriter",
    "MissingValueError",
    "NoProviderFoundError",
    "NotFound",
    "Origin",
    "ParameterHandler",
    "ProviderDescriptor",
    "ProviderError",
    "ProviderFactory",
    "ProviderKind",
    "RestWeaverError",
    "SchemaAware",
    "__version__",
    "consumes",
    "expect_provider",
    "get_instance",
    "get_shared_instance",
    "produces",
    "reset_directory",
)

# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Provider capability interfaces and descriptors.

`ProviderKind` names the five capabilities the engine resolves, `Origin` separates
built-in defaults from application registrations, and `ProviderDescriptor` is the
immutable record created for each (provider, kind) pair at registration.
"""

from restweaver.providers.base import (
    ContextResolver,
    ExceptionMapper,
    MessageBodyReader,
    MessageBodyWriter,
    ParameterHandler,
    SchemaAware,
    consumes,
    declared_target,
    produces,
)
from restweaver.providers.descriptor import (
    Origin,
    ProviderDescriptor,
    ProviderKind,
    describe,
    provider_kinds,
)


__all__ = (
    "ContextResolver",
    "ExceptionMapper",
    "MessageBodyReader",
    "MessageBodyWriter",
    "Origin",
    "ParameterHandler",
    "ProviderDescriptor",
    "ProviderKind",
    "SchemaAware",
    "consumes",
    "declared_target",
    "describe",
    "produces",
    "provider_kinds",
)

# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Provider descriptors: the immutable registration records the engine ranks.

One provider instance can implement several capabilities (a codec is usually both a
reader and a writer). Registering it produces one `ProviderDescriptor` per capability
kind, each carrying the declaration the engine needs for that kind.
"""

from __future__ import annotations

import logging

from typing import Annotated, Any

from pydantic import Field, NonNegativeInt

from restweaver.core.media_type import (
    MatchScore,
    MediaRange,
    MediaType,
    best_score,
    declared_rank,
    parse_media_ranges,
)
from restweaver.core.types.enum import BaseEnum
from restweaver.core.types.models import FROZEN_BASEDMODEL_CONFIG, BasedModel
from restweaver.core.types.utils import qualified_name
from restweaver.exceptions import ProviderError
from restweaver.providers.base import (
    ContextResolver,
    ExceptionMapper,
    MessageBodyReader,
    MessageBodyWriter,
    ParameterHandler,
    declared_target,
)


logger = logging.getLogger(__name__)


class ProviderKind(BaseEnum):
    """The capability a descriptor registers a provider for."""

    MESSAGE_READER = "message_reader"
    MESSAGE_WRITER = "message_writer"
    EXCEPTION_MAPPER = "exception_mapper"
    CONTEXT_RESOLVER = "context_resolver"
    PARAMETER_HANDLER = "parameter_handler"

    @property
    def capability(self) -> type[Any]:
        """The interface a provider implements for this kind."""
        return _CAPABILITIES[self]

    @property
    def is_entity_kind(self) -> bool:
        """Readers and writers are ranked by media type; the rest by target type."""
        return self in (ProviderKind.MESSAGE_READER, ProviderKind.MESSAGE_WRITER)


class Origin(BaseEnum):
    """Where a registration came from. User registrations outrank built-in ones."""

    BUILT_IN = "built_in"
    USER = "user"

    @property
    def precedence(self) -> int:
        """Higher is preferred."""
        return 1 if self is Origin.USER else 0


_CAPABILITIES: dict[ProviderKind, type[Any]] = {
    ProviderKind.MESSAGE_READER: MessageBodyReader,
    ProviderKind.MESSAGE_WRITER: MessageBodyWriter,
    ProviderKind.EXCEPTION_MAPPER: ExceptionMapper,
    ProviderKind.CONTEXT_RESOLVER: ContextResolver,
    ProviderKind.PARAMETER_HANDLER: ParameterHandler,
}


class ProviderDescriptor(BasedModel):
    """Immutable metadata wrapping one registered provider for one capability kind."""

    model_config = FROZEN_BASEDMODEL_CONFIG

    provider: Annotated[Any, Field(description="The registered provider instance.")]
    kind: ProviderKind
    origin: Origin = Origin.USER
    consumes: Annotated[
        tuple[MediaRange, ...],
        Field(default=(), description="Declared input media ranges (readers only)."),
    ]
    produces: Annotated[
        tuple[MediaRange, ...],
        Field(default=(), description="Declared output media ranges (writers only)."),
    ]
    target_type: Annotated[
        type[Any] | None,
        Field(default=None, description="The type a mapper, resolver or handler serves."),
    ]
    order: Annotated[
        NonNegativeInt, Field(default=0, description="Registration sequence number.")
    ]

    @property
    def media_ranges(self) -> tuple[MediaRange, ...]:
        """The declaration that matters for this kind."""
        if self.kind is ProviderKind.MESSAGE_READER:
            return self.consumes
        if self.kind is ProviderKind.MESSAGE_WRITER:
            return self.produces
        return ()

    @property
    def is_user(self) -> bool:
        """Whether the application registered this provider."""
        return self.origin is Origin.USER

    @property
    def provider_name(self) -> str:
        """Qualified class name of the provider, for logs and errors."""
        return qualified_name(self.provider)

    def match(self, requested: MediaType) -> MatchScore | None:
        """Rank this descriptor's declaration against a requested media type."""
        return best_score(self.media_ranges, requested)

    @property
    def declared_rank(self) -> MatchScore | None:
        """Rank of the declaration itself, independent of any request."""
        return declared_rank(self.media_ranges)

    def is_capable(
        self, type_: type[Any], generic_type: Any, annotations: Any, media_type: MediaType
    ) -> bool:
        """Ask the provider whether it handles this request."""
        if self.kind is ProviderKind.MESSAGE_READER:
            return bool(self.provider.is_readable(type_, generic_type, annotations, media_type))
        if self.kind is ProviderKind.MESSAGE_WRITER:
            return bool(self.provider.is_writeable(type_, generic_type, annotations, media_type))
        return False

    def __hash__(self) -> int:
        """Hash by provider identity so unhashable providers can still be registered."""
        return hash((id(self.provider), self.kind, self.order))

    def __repr__(self) -> str:
        ranges = ", ".join(str(media_range) for media_range in self.media_ranges)
        target = f", target={self.target_type.__qualname__}" if self.target_type else ""
        return (
            f"ProviderDescriptor({self.provider_name}, {self.kind.value}, "
            f"{self.origin.value}{target}, [{ranges}], order={self.order})"
        )


def provider_kinds(provider: object) -> tuple[ProviderKind, ...]:
    """The capability kinds a provider implements, in `ProviderKind` order."""
    return tuple(kind for kind in ProviderKind if isinstance(provider, kind.capability))


def describe(
    provider: object, *, origin: Origin = Origin.USER, order: int = 0
) -> tuple[ProviderDescriptor, ...]:
    """Build one descriptor per capability kind `provider` implements.

    Raises:
        ProviderError: if the provider implements no capability, or a mapper, resolver or
            handler does not declare the type it serves.
    """
    kinds = provider_kinds(provider)
    if not kinds:
        raise ProviderError(
            f"{qualified_name(provider)} implements no provider capability",
            details={"type": qualified_name(provider)},
            suggestions=[
                "Subclass MessageBodyReader, MessageBodyWriter, ExceptionMapper, "
                "ContextResolver or ParameterHandler"
            ],
        )
    descriptors: list[ProviderDescriptor] = []
    for kind in kinds:
        fields: dict[str, Any] = {}
        if kind is ProviderKind.MESSAGE_READER:
            fields["consumes"] = _ranges(provider, "consume_media_types")
        elif kind is ProviderKind.MESSAGE_WRITER:
            fields["produces"] = _ranges(provider, "produce_media_types")
        else:
            fields["target_type"] = _target(provider, kind)
        descriptors.append(
            ProviderDescriptor(provider=provider, kind=kind, origin=origin, order=order, **fields)
        )
    return tuple(descriptors)


def _ranges(provider: object, attribute: str) -> tuple[MediaRange, ...]:
    declared = getattr(provider, attribute, None) or ()
    ranges = parse_media_ranges(declared)
    if declared and not ranges:
        logger.warning(
            "%s declares no usable %s (%r); it will never be selected",
            qualified_name(provider),
            attribute,
            declared,
        )
    return ranges


def _target(provider: object, kind: ProviderKind) -> type[Any]:
    target = declared_target(provider, kind.capability)
    if target is None:
        raise ProviderError(
            f"{qualified_name(provider)} does not declare the type it serves",
            details={"kind": kind.value, "type": qualified_name(provider)},
            suggestions=[
                f"Parameterize the base class, like {kind.capability.__name__}[SomeType]",
                "Or set the target class attribute explicitly",
            ],
        )
    if not isinstance(target, type):
        raise ProviderError(
            f"{qualified_name(provider)} declares {target!r} as its target, which is not a class",
            details={"kind": kind.value, "target_type": repr(target)},
        )
    if kind is ProviderKind.EXCEPTION_MAPPER and not issubclass(target, BaseException):
        raise ProviderError(
            f"{qualified_name(provider)} maps {target!r}, which is not an exception class",
            details={"kind": kind.value, "target_type": target},
        )
    return target


__all__ = ("Origin", "ProviderDescriptor", "ProviderKind", "describe", "provider_kinds")

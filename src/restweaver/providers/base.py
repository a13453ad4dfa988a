# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Capability interfaces that providers implement.

A provider is any object implementing one or more of these interfaces. The resolution
engine never inspects a provider beyond them: readers and writers answer for themselves
whether they can handle a type (`is_readable` / `is_writeable`), and mappers, context
resolvers and parameter handlers declare the type they serve, either with a class
attribute or through the generic parameter of the interface:

    class NotFoundMapper(ExceptionMapper[LookupError]):
        def to_response(self, exception: LookupError) -> Response: ...

Readers and writers declare the media types they handle with the `consumes` / `produces`
class decorators. Instances can override the class declaration by assigning
`consume_media_types` / `produce_media_types`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from typing import IO, Any, ClassVar, Protocol, get_args, get_origin, runtime_checkable

from restweaver.core.media_type import MediaType


type Annotations = Sequence[Any]
type Headers = Mapping[str, Any]


class MessageBodyReader[T](ABC):
    """Deserializes a request entity into a Python object."""

    consume_media_types: ClassVar[Sequence[str]] = ()
    """Media ranges this reader accepts; empty means `*/*`."""

    @abstractmethod
    def is_readable(
        self,
        type_: type[Any],
        generic_type: Any,
        annotations: Annotations,
        media_type: MediaType,
    ) -> bool:
        """Whether this reader can produce `type_` from content of `media_type`."""

    @abstractmethod
    def read_from(
        self,
        type_: type[T],
        generic_type: Any,
        annotations: Annotations,
        media_type: MediaType,
        headers: Headers,
        stream: IO[bytes],
    ) -> T:
        """Read an instance of `type_` from `stream`."""


class MessageBodyWriter[T](ABC):
    """Serializes a Python object into a response entity."""

    produce_media_types: ClassVar[Sequence[str]] = ()
    """Media ranges this writer emits; empty means `*/*`."""

    @abstractmethod
    def is_writeable(
        self,
        type_: type[Any],
        generic_type: Any,
        annotations: Annotations,
        media_type: MediaType,
    ) -> bool:
        """Whether this writer can write `type_` as `media_type`."""

    def get_size(
        self,
        obj: T,
        type_: type[Any],
        generic_type: Any,
        annotations: Annotations,
        media_type: MediaType,
    ) -> int:
        """The serialized length in bytes, or -1 when unknown in advance."""
        return -1

    @abstractmethod
    def write_to(
        self,
        obj: T,
        type_: type[Any],
        generic_type: Any,
        annotations: Annotations,
        media_type: MediaType,
        headers: Headers,
        stream: IO[bytes],
    ) -> None:
        """Write `obj` to `stream`."""


class ExceptionMapper[E: BaseException](ABC):
    """Translates an exception into a response."""

    exception_type: ClassVar[type[BaseException] | None] = None
    """Explicit target class; otherwise taken from the generic parameter."""

    @abstractmethod
    def to_response(self, exception: E) -> Any:
        """Build the response for `exception`."""


class ContextResolver[T](ABC):
    """Supplies a shared context object (a codec configuration, a schema...) for a type."""

    context_type: ClassVar[type[Any] | None] = None
    """Explicit target class; otherwise taken from the generic parameter."""

    @abstractmethod
    def get_context(self, type_: type[Any]) -> T | None:
        """Return the context for `type_`, or `None` if this resolver has none."""


class ParameterHandler[T](ABC):
    """Converts a raw request parameter into a Python object."""

    parameter_type: ClassVar[type[Any] | None] = None
    """Explicit target class; otherwise taken from the generic parameter."""

    @abstractmethod
    def from_string(self, value: str) -> T:
        """Convert the raw parameter value."""


@runtime_checkable
class SchemaAware(Protocol):
    """Providers that validate against schemas receive the factory's schema locations."""

    def set_schema_locations(self, locations: Sequence[str]) -> None:
        """Accept the configured schema locations. They are opaque to the factory."""
        ...


_TARGET_ATTRIBUTES: dict[type[Any], str] = {
    ExceptionMapper: "exception_type",
    ContextResolver: "context_type",
    ParameterHandler: "parameter_type",
}


def declared_target(provider: object, capability: type[Any]) -> Any:
    """Find the type a mapper, context resolver or parameter handler serves.

    An explicit class attribute wins, with a generic alias reduced to its origin class.
    Otherwise the first parameterized `capability` base found along the provider's MRO
    supplies its type argument. An explicit attribute that is not a class comes back as
    is; `describe` rejects it.
    """
    if (attribute := _TARGET_ATTRIBUTES.get(capability)) and (
        explicit := getattr(provider, attribute, None)
    ):
        return get_origin(explicit) or explicit
    for klass in type(provider).__mro__:
        for base in klass.__dict__.get("__orig_bases__", ()):
            origin = get_origin(base)
            if not (isinstance(origin, type) and issubclass(origin, capability)):
                continue
            if args := get_args(base):
                target = get_origin(args[0]) or args[0]
                if isinstance(target, type):
                    return target
    return None


def _declare(attribute: str, media_types: tuple[str, ...]) -> Callable[[type[Any]], type[Any]]:
    def decorator(cls: type[Any]) -> type[Any]:
        setattr(cls, attribute, media_types)
        return cls

    return decorator


def consumes(*media_types: str) -> Callable[[type[Any]], type[Any]]:
    """Declare the media ranges a reader accepts."""
    return _declare("consume_media_types", media_types)


def produces(*media_types: str) -> Callable[[type[Any]], type[Any]]:
    """Declare the media ranges a writer emits."""
    return _declare("produce_media_types", media_types)


__all__ = (
    "Annotations",
    "ContextResolver",
    "ExceptionMapper",
    "Headers",
    "MessageBodyReader",
    "MessageBodyWriter",
    "ParameterHandler",
    "SchemaAware",
    "consumes",
    "declared_target",
    "produces",
)

# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Plain-text reader and writer for strings and scalar values."""

from __future__ import annotations

from decimal import Decimal
from typing import IO, Any

from restweaver.core.media_type import MediaType
from restweaver.providers.base import (
    Annotations,
    Headers,
    MessageBodyReader,
    MessageBodyWriter,
    consumes,
    produces,
)
from restweaver.providers.builtin._base import ConfigurableMediaTypes, charset_of, is_class


PRIMITIVE_TYPES: tuple[type[Any], ...] = (str, int, float, bool, Decimal)

_TRUTHY = frozenset({"true", "1", "yes", "on"})


@consumes("text/plain")
@produces("text/plain")
class PrimitiveTextProvider(
    ConfigurableMediaTypes, MessageBodyReader[Any], MessageBodyWriter[Any]
):
    """Reads and writes `str`, `int`, `float`, `bool` and `Decimal` as plain text."""

    def _handles(self, type_: Any) -> bool:
        return is_class(type_) and issubclass(type_, PRIMITIVE_TYPES)

    def is_readable(
        self, type_: type[Any], generic_type: Any, annotations: Annotations, media_type: MediaType
    ) -> bool:
        return self._handles(type_)

    def is_writeable(
        self, type_: type[Any], generic_type: Any, annotations: Annotations, media_type: MediaType
    ) -> bool:
        return self._handles(type_)

    def read_from(
        self,
        type_: type[Any],
        generic_type: Any,
        annotations: Annotations,
        media_type: MediaType,
        headers: Headers,
        stream: IO[bytes],
    ) -> Any:
        text = stream.read().decode(charset_of(media_type))
        if issubclass(type_, str):
            return type_(text)
        if issubclass(type_, bool):
            return text.strip().lower() in _TRUTHY
        return type_(text.strip())

    def _encode(self, obj: Any, media_type: MediaType) -> bytes:
        text = str(obj).lower() if isinstance(obj, bool) else str(obj)
        return text.encode(charset_of(media_type))

    def get_size(
        self,
        obj: Any,
        type_: type[Any],
        generic_type: Any,
        annotations: Annotations,
        media_type: MediaType,
    ) -> int:
        return len(self._encode(obj, media_type))

    def write_to(
        self,
        obj: Any,
        type_: type[Any],
        generic_type: Any,
        annotations: Annotations,
        media_type: MediaType,
        headers: Headers,
        stream: IO[bytes],
    ) -> None:
        stream.write(self._encode(obj, media_type))


__all__ = ("PRIMITIVE_TYPES", "PrimitiveTextProvider")

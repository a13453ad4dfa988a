# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""JSON reader and writer for pydantic models and plain containers."""

from __future__ import annotations

from functools import lru_cache
from typing import IO, Any, get_origin

from pydantic import BaseModel, TypeAdapter
from pydantic_core import to_json

from restweaver.core.media_type import MediaType
from restweaver.providers.base import (
    Annotations,
    Headers,
    MessageBodyReader,
    MessageBodyWriter,
    consumes,
    produces,
)
from restweaver.providers.builtin._base import ConfigurableMediaTypes, is_class


CONTAINER_TYPES: tuple[type[Any], ...] = (dict, list)


@lru_cache(maxsize=256)
def _adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


@consumes("application/json")
@produces("application/json")
class JSONProvider(ConfigurableMediaTypes, MessageBodyReader[Any], MessageBodyWriter[Any]):
    """Binds JSON to pydantic models, `dict` and `list` (including parameterized forms).

    The generic type, when given, drives validation, so `list[Book]` reads into a list of
    `Book` models rather than a list of dicts.
    """

    def _handles(self, type_: Any, generic_type: Any) -> bool:
        candidate = get_origin(type_) or type_
        if not is_class(candidate):
            return False
        if issubclass(candidate, BaseModel):
            return True
        if issubclass(candidate, CONTAINER_TYPES):
            return True
        origin = get_origin(generic_type)
        return is_class(origin) and issubclass(origin, CONTAINER_TYPES)

    def is_readable(
        self, type_: type[Any], generic_type: Any, annotations: Annotations, media_type: MediaType
    ) -> bool:
        return self._handles(type_, generic_type)

    def is_writeable(
        self, type_: type[Any], generic_type: Any, annotations: Annotations, media_type: MediaType
    ) -> bool:
        return self._handles(type_, generic_type)

    def read_from(
        self,
        type_: type[Any],
        generic_type: Any,
        annotations: Annotations,
        media_type: MediaType,
        headers: Headers,
        stream: IO[bytes],
    ) -> Any:
        return _adapter(generic_type or type_).validate_json(stream.read())

    def get_size(
        self,
        obj: Any,
        type_: type[Any],
        generic_type: Any,
        annotations: Annotations,
        media_type: MediaType,
    ) -> int:
        return len(to_json(obj))

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
        stream.write(to_json(obj))


__all__ = ("CONTAINER_TYPES", "JSONProvider")

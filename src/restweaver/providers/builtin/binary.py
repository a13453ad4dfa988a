# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Binary reader and writer for raw bytes, binary streams and files."""

from __future__ import annotations

import io
import shutil

from pathlib import Path
from typing import IO, Any

from restweaver.core.media_type import MediaType
from restweaver.providers.base import Annotations, Headers, MessageBodyReader, MessageBodyWriter
from restweaver.providers.builtin._base import ConfigurableMediaTypes, is_class


READABLE_TYPES: tuple[type[Any], ...] = (bytes, bytearray, io.IOBase)
WRITEABLE_TYPES: tuple[type[Any], ...] = (bytes, bytearray, memoryview, io.IOBase, Path)


class BinaryDataProvider(
    ConfigurableMediaTypes, MessageBodyReader[Any], MessageBodyWriter[Any]
):
    """Passes binary content through untouched, for any media type.

    Reading into a stream type hands back the request stream itself. Writing a `Path`
    streams the file's content.
    """

    def is_readable(
        self, type_: type[Any], generic_type: Any, annotations: Annotations, media_type: MediaType
    ) -> bool:
        return is_class(type_) and issubclass(type_, READABLE_TYPES)

    def is_writeable(
        self, type_: type[Any], generic_type: Any, annotations: Annotations, media_type: MediaType
    ) -> bool:
        return is_class(type_) and issubclass(type_, WRITEABLE_TYPES)

    def read_from(
        self,
        type_: type[Any],
        generic_type: Any,
        annotations: Annotations,
        media_type: MediaType,
        headers: Headers,
        stream: IO[bytes],
    ) -> Any:
        if issubclass(type_, io.IOBase):
            return stream
        return type_(stream.read())

    def get_size(
        self,
        obj: Any,
        type_: type[Any],
        generic_type: Any,
        annotations: Annotations,
        media_type: MediaType,
    ) -> int:
        if isinstance(obj, bytes | bytearray):
            return len(obj)
        if isinstance(obj, memoryview):
            return obj.nbytes
        if isinstance(obj, Path):
            return obj.stat().st_size
        return -1

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
        if isinstance(obj, Path):
            with obj.open("rb") as source:
                shutil.copyfileobj(source, stream)
        elif isinstance(obj, io.IOBase):
            shutil.copyfileobj(obj, stream)
        else:
            stream.write(bytes(obj))


__all__ = ("READABLE_TYPES", "WRITEABLE_TYPES", "BinaryDataProvider")

# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Shared plumbing for the built-in entity providers."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from restweaver.core.media_type import MediaType


DEFAULT_CHARSET = "utf-8"


class ConfigurableMediaTypes:
    """Lets an instance override the class-level `consumes` / `produces` declaration."""

    def __init__(
        self,
        *,
        consumes: Sequence[str] | None = None,
        produces: Sequence[str] | None = None,
    ) -> None:
        """Override the declared media ranges for this instance only."""
        if consumes is not None:
            self.consume_media_types = tuple(consumes)
        if produces is not None:
            self.produce_media_types = tuple(produces)


def charset_of(media_type: MediaType) -> str:
    """The charset parameter of a media type, defaulting to UTF-8."""
    return (media_type.parameter("charset") or DEFAULT_CHARSET).strip('"')


def is_class(type_: Any) -> bool:
    """Guard for `issubclass` checks against arbitrary requested types."""
    return isinstance(type_, type)


__all__ = ("DEFAULT_CHARSET", "ConfigurableMediaTypes", "charset_of", "is_class")

# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Built-in default providers seeded into every provider factory."""

from __future__ import annotations

from restweaver.providers.builtin.binary import BinaryDataProvider
from restweaver.providers.builtin.exceptions import HTTPExceptionMapper
from restweaver.providers.builtin.json import JSONProvider
from restweaver.providers.builtin.text import PrimitiveTextProvider


def default_providers() -> tuple[object, ...]:
    """Fresh instances of the built-in providers, in registration order."""
    return (PrimitiveTextProvider(), BinaryDataProvider(), JSONProvider(), HTTPExceptionMapper())


__all__ = (
    "BinaryDataProvider",
    "HTTPExceptionMapper",
    "JSONProvider",
    "PrimitiveTextProvider",
    "default_providers",
)

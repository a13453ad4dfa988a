# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Base enum class for the RestWeaver project."""

from __future__ import annotations

import contextlib

from enum import Enum, unique
from functools import cached_property
from types import MappingProxyType
from typing import Self, cast, override

import textcase


@unique
class BaseEnum(Enum):
    """An enum class that provides common functionality for all enums in the RestWeaver project. Enum members must be unique strings.

    BaseEnum provides flexible string conversion (case, dashes vs underscores) so that
    settings files and environment variables can name members loosely, like `built-in`,
    `BUILT_IN` or `BuiltIn`.
    """

    @staticmethod
    def _deconstruct_string(value: str) -> list[str]:
        """Deconstruct a string into its component parts."""
        value = value.strip().lower().replace("-", "_").replace(" ", "_")
        return [v for v in value.split("_") if v]

    @staticmethod
    def _multiply_variations(s: str) -> set[str]:
        """Generate multiple variations of a string."""
        return {
            s,
            textcase.upper(s),
            textcase.lower(s),
            textcase.title(s),
            textcase.pascal(s),
            textcase.snake(s),
            textcase.kebab(s),
            textcase.camel(s),
        }

    @cached_property
    def _aka(self) -> tuple[str, ...]:
        """Return the known spellings of the enum member."""
        names = {self.value, self.name}
        names |= {n for name in names.copy() for n in self._multiply_variations(name)}
        return tuple(sorted(names))

    @classmethod
    def aliases(cls) -> MappingProxyType[str, Self]:
        """Map every known spelling to its member."""
        alias_map: dict[str, Self] = {
            str(value): cast(Self, member) for value, member in cls._value2member_map_.items()
        }
        alias_map.update({
            alias: member for member in cls for alias in member._aka if alias not in alias_map
        })
        return MappingProxyType(alias_map)

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Convert a string to the corresponding enum member.

        Tries exact value and name first, then known spellings, then a comparison of the
        underscore-separated parts.
        """
        lowered = str(value).strip().lower()
        if literal_value := next(
            (
                member
                for member in cls
                if member.value.lower() == lowered or member.name.lower() == lowered
            ),
            None,
        ):
            return literal_value
        if found_member := cls.aliases().get(str(value).strip()):
            return found_member
        value_parts = cls._deconstruct_string(value)
        if found_member := next(
            (member for member in cls if cls._deconstruct_string(member.name) == value_parts), None
        ):
            return found_member
        raise ValueError(f"{value} is not a valid {cls.__qualname__} member")

    @classmethod
    @override
    def _missing_(cls, value: object) -> Self | None:
        """Handle missing values when converting from string to enum member."""
        if not isinstance(value, str):
            return None
        with contextlib.suppress(ValueError):
            return cls.from_string(value)
        return None

    def __str__(self) -> str:
        """Return the string representation of the enum member."""
        return self.name.replace("_", " ").lower()


__all__ = ("BaseEnum",)

# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Defines unique sentinel objects, including the `NOT_FOUND` resolution result."""

from __future__ import annotations

import sys as _sys

from threading import Lock as _Lock
from typing import Self, cast


_lock = _Lock()
_registry: dict[str, Sentinel] = {}


class Sentinel:
    """Create a unique sentinel object.

    Sentinels are process-wide singletons keyed by class, name and module, so they
    survive pickling and compare by identity.
    """

    __slots__ = ("module_name", "name")

    name: str
    module_name: str

    def __new__(cls, name: str | None = None, module_name: str | None = None) -> Self:
        """Return the existing sentinel for this key, creating it on first use."""
        name = name or cls.__name__.upper()
        module_name = module_name or cls.__module__
        # Include the class's module and qualified name so subclasses never collide.
        registry_key = _sys.intern(f"{cls.__module__}-{cls.__qualname__}-{module_name}-{name}")
        existing = _registry.get(registry_key)
        if existing is not None:
            return cast(Self, existing)
        with _lock:
            if (existing := _registry.get(registry_key)) is not None:
                return cast(Self, existing)
            new = super().__new__(cls)
            new.name = name
            new.module_name = module_name
            _registry[registry_key] = new
            return new

    def __str__(self) -> str:
        """Return a string representation of the sentinel."""
        return self.name

    def __repr__(self) -> str:
        """Return a string representation of the sentinel."""
        return f"{type(self).__name__}(name={self.name}, module_name={self.module_name})"

    def __reduce__(self) -> tuple[type[Self], tuple[str, str]]:
        """Return state information for pickling."""
        return (self.__class__, (self.name, self.module_name))

    def __hash__(self) -> int:
        """Return the hash of the sentinel."""
        return hash((self.name, self.module_name))

    def __copy__(self) -> Self:
        return self

    def __deepcopy__(self, memo: dict[int, object]) -> Self:
        return self


class NotFound(Sentinel):
    """The explicit "no provider matched" result of every resolution call.

    It is falsy, so `if descriptor := factory.resolve_reader(...)` reads naturally.
    """

    __slots__ = ()

    def __bool__(self) -> bool:
        return False


NOT_FOUND: NotFound = NotFound("NOT_FOUND", __name__)


__all__ = ("NOT_FOUND", "NotFound", "Sentinel")

# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Process-wide directory of provider factories, keyed by mount path.

Each mount path (an application or endpoint prefix) gets its own `ProviderFactory`,
created on first access. `None`, `""` and `"/"` all name the default factory; every other
path is a distinct key. A separate shared factory exists for providers that should not be
tied to any mount path.

Usage:
    # The default factory
    factory = get_instance()

    # The factory for one mount path; "books" would be a different one
    books = get_instance("/books")

    # Teardown (tests)
    reset_directory()
"""

from __future__ import annotations

import logging
import threading

from typing import ClassVar

from restweaver.factory import ProviderFactory


logger = logging.getLogger(__name__)

DEFAULT_PATH = "/"
SHARED_PATH = "<shared>"

# Lock for thread-safe directory creation
_instance_lock = threading.Lock()


def canonical_path(path: str | None) -> str:
    """The directory key for a mount path.

    `None`, `""` and `"/"` name the default factory. Any other path is its own key, verbatim.
    """
    return DEFAULT_PATH if path in (None, "", DEFAULT_PATH) else path


class ProviderDirectory:
    """Lazily creates and hands out one provider factory per canonical mount path.

    Lookups of existing factories never lock. Creation uses double-checked locking, so
    concurrent first accesses of the same path all receive the same factory.

    Example:
        directory = ProviderDirectory.get_instance()
        factory = directory.get("/books")
    """

    _instance: ClassVar[ProviderDirectory | None] = None

    def __init__(self) -> None:
        """Create an empty directory."""
        self._factories: dict[str, ProviderFactory] = {}
        self._shared: ProviderFactory | None = None
        self._lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> ProviderDirectory:
        """Get or create the process-wide directory."""
        # Fast path: instance already exists
        if cls._instance is not None:
            return cls._instance
        with _instance_lock:
            if cls._instance is None:
                cls._instance = cls()
                logger.debug("Created provider directory")
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Discard the directory and every factory in it (primarily for testing)."""
        with _instance_lock:
            cls._instance = None

    def get(self, path: str | None = None) -> ProviderFactory:
        """The factory for `path`, created on first access."""
        key = canonical_path(path)
        if (factory := self._factories.get(key)) is not None:
            return factory
        with self._lock:
            if (factory := self._factories.get(key)) is None:
                factory = ProviderFactory(key)
                self._factories[key] = factory
                logger.debug("Created provider factory for %s", key)
        return factory

    def shared(self) -> ProviderFactory:
        """The shared factory, distinct from every path factory."""
        if self._shared is not None:
            return self._shared
        with self._lock:
            if self._shared is None:
                self._shared = ProviderFactory(SHARED_PATH)
                logger.debug("Created shared provider factory")
        return self._shared

    def paths(self) -> tuple[str, ...]:
        """Canonical paths that already have a factory."""
        return tuple(self._factories)

    def __contains__(self, path: object) -> bool:
        return (path is None or isinstance(path, str)) and canonical_path(path) in self._factories

    def __len__(self) -> int:
        return len(self._factories)


def get_instance(path: str | None = None) -> ProviderFactory:
    """Get the provider factory for a mount path (the default factory when omitted)."""
    return ProviderDirectory.get_instance().get(path)


def get_shared_instance() -> ProviderFactory:
    """Get the shared provider factory."""
    return ProviderDirectory.get_instance().shared()


def reset_directory() -> None:
    """Discard every provider factory.

    Resolution results held by callers stay valid; later accesses create fresh factories.
    """
    ProviderDirectory.reset_instance()


__all__ = (
    "DEFAULT_PATH",
    "SHARED_PATH",
    "ProviderDirectory",
    "canonical_path",
    "get_instance",
    "get_shared_instance",
    "reset_directory",
)

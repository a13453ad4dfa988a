# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Capability registries: ordered descriptor sequences, one per provider kind.

Each registry keeps its descriptors in an immutable tuple that is replaced, never
mutated, on every change. A snapshot is therefore a stable read view that later
registrations cannot tear.
"""

from __future__ import annotations

import logging
import threading

from collections.abc import Iterator
from types import MappingProxyType

from restweaver.exceptions import ProviderError
from restweaver.providers.descriptor import ProviderDescriptor, ProviderKind


logger = logging.getLogger(__name__)


class CapabilityRegistry:
    """Ordered, copy-on-write sequence of descriptors for one capability kind.

    No de-duplication happens here: registering the same provider twice yields two
    entries. Callers that need identity de-duplication check `contains_provider` first.
    """

    __slots__ = ("_descriptors", "_kind", "_lock")

    def __init__(self, kind: ProviderKind) -> None:
        """Create an empty registry for `kind`."""
        self._kind = kind
        self._descriptors: tuple[ProviderDescriptor, ...] = ()
        self._lock = threading.Lock()

    @property
    def kind(self) -> ProviderKind:
        """The capability kind this registry holds."""
        return self._kind

    def register(self, descriptor: ProviderDescriptor) -> None:
        """Append a descriptor, preserving registration order."""
        if descriptor.kind is not self._kind:
            raise ProviderError(
                f"Cannot register a {descriptor.kind.value} descriptor in the {self._kind.value} registry",
                details={"kind": descriptor.kind.value},
            )
        with self._lock:
            self._descriptors = (*self._descriptors, descriptor)
        logger.debug("Registered %r", descriptor)

    def snapshot(self) -> tuple[ProviderDescriptor, ...]:
        """The current ordered sequence."""
        return self._descriptors

    def clear(self) -> None:
        """Drop every descriptor."""
        with self._lock:
            self._descriptors = ()

    def contains_provider(self, provider: object) -> bool:
        """Whether `provider` (by identity) is already registered."""
        return any(descriptor.provider is provider for descriptor in self._descriptors)

    def __iter__(self) -> Iterator[ProviderDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self._kind.value}, size={len(self._descriptors)})"


class CapabilityRegistries:
    """The five capability registries owned by one provider factory."""

    __slots__ = ("_registries",)

    def __init__(self) -> None:
        """Create one empty registry per provider kind."""
        self._registries: MappingProxyType[ProviderKind, CapabilityRegistry] = MappingProxyType({
            kind: CapabilityRegistry(kind) for kind in ProviderKind
        })

    def register(self, descriptor: ProviderDescriptor) -> None:
        """Route a descriptor to the registry for its kind."""
        self._registries[descriptor.kind].register(descriptor)

    def snapshot(self, kind: ProviderKind) -> tuple[ProviderDescriptor, ...]:
        """The current ordered sequence for one kind."""
        return self._registries[kind].snapshot()

    def snapshots(self) -> MappingProxyType[ProviderKind, tuple[ProviderDescriptor, ...]]:
        """Current sequences for every kind."""
        return MappingProxyType({
            kind: registry.snapshot() for kind, registry in self._registries.items()
        })

    def clear(self) -> None:
        """Empty all five registries."""
        for registry in self._registries.values():
            registry.clear()

    def contains_provider(self, provider: object) -> bool:
        """Whether `provider` is registered under any kind."""
        return any(registry.contains_provider(provider) for registry in self._registries.values())

    def is_empty(self) -> bool:
        """Whether no descriptor is registered at all."""
        return not any(len(registry) for registry in self._registries.values())

    def __getitem__(self, kind: ProviderKind) -> CapabilityRegistry:
        return self._registries[kind]

    def __len__(self) -> int:
        return sum(len(registry) for registry in self._registries.values())


__all__ = ("CapabilityRegistries", "CapabilityRegistry")

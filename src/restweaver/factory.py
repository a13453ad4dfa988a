# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""The provider factory: registration and resolution of providers.

A `ProviderFactory` owns five capability registries (readers, writers, exception mappers,
context resolvers, parameter handlers) plus a layer of built-in default providers that
survives `clear_providers()`. Resolution picks the single best provider for a request:

- readers/writers: filter by declared media range and by the provider's own
  `is_readable` / `is_writeable` answer, then rank by origin (user first), media-type
  match score, and registration order (earliest first).
- exception mappers: nearest registered class in the exception's hierarchy; within one
  level user beats built-in and the latest registration wins.
- context resolvers / parameter handlers: exact target type; user beats built-in and the
  latest registration wins.

A miss returns `NOT_FOUND` rather than raising.

Thread Safety:
    Every mutation takes the factory lock, applies the change, and publishes a new
    immutable `ResolutionState` with a single attribute assignment. Resolution reads that
    attribute once and never locks, so it scales with concurrent readers and can never
    observe a half-applied registration (including `set_providers`, which clears and
    re-registers under one publication).
"""

from __future__ import annotations

import itertools
import logging
import threading

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, cast

from restweaver.config.settings import MapperPrecedence, RestWeaverSettings, get_settings
from restweaver.core.hierarchy import ExceptionHierarchy, ExceptionType
from restweaver.core.media_type import ALL_TYPES, MatchScore, MediaType, as_media_type
from restweaver.core.types.sentinel import NOT_FOUND, NotFound
from restweaver.core.types.utils import qualified_name
from restweaver.exceptions import MissingValueError, NoProviderFoundError
from restweaver.providers.base import Annotations, SchemaAware
from restweaver.providers.descriptor import Origin, ProviderDescriptor, ProviderKind, describe
from restweaver.registry.capability import CapabilityRegistries


logger = logging.getLogger(__name__)

type Resolution = ProviderDescriptor | NotFound
type DescriptorsByKind = Mapping[ProviderKind, tuple[ProviderDescriptor, ...]]

_NO_RANK = MatchScore(-1, 0.0)


def _latest_preferred(descriptor: ProviderDescriptor) -> tuple[int, int]:
    """Sort key: user before built-in, then the most recent registration."""
    return (descriptor.origin.precedence, descriptor.order)


def _declared_order(descriptor: ProviderDescriptor) -> tuple[int, int, float, int]:
    """Sort key for request-independent reader/writer listings."""
    rank = descriptor.declared_rank or _NO_RANK
    return (-descriptor.origin.precedence, -rank.specificity, -rank.quality, descriptor.order)


@dataclass(frozen=True, slots=True)
class ResolutionState:
    """Immutable snapshot of everything resolution needs.

    Built under the factory lock after each mutation. `mapper_cache` is the only mutable
    part: it memoizes exception-mapper lookups for this snapshot and is discarded with it.
    """

    registered: DescriptorsByKind
    defaults: DescriptorsByKind
    hierarchy: ExceptionHierarchy
    mappers_by_target: Mapping[type[Any], tuple[ProviderDescriptor, ...]]
    targets: Mapping[ProviderKind, Mapping[type[Any], ProviderDescriptor]]
    mapper_cache: dict[type[BaseException], Resolution] = field(default_factory=dict)

    @classmethod
    def build(cls, registered: DescriptorsByKind, defaults: DescriptorsByKind) -> ResolutionState:
        """Derive the lookup tables from registered and default descriptors."""
        mappers: dict[type[Any], list[ProviderDescriptor]] = {}
        for descriptor in cls._combined(registered, defaults, ProviderKind.EXCEPTION_MAPPER):
            mappers.setdefault(cast(type[Any], descriptor.target_type), []).append(descriptor)
        targets: dict[ProviderKind, Mapping[type[Any], ProviderDescriptor]] = {}
        for kind in (ProviderKind.CONTEXT_RESOLVER, ProviderKind.PARAMETER_HANDLER):
            winners: dict[type[Any], ProviderDescriptor] = {}
            for descriptor in cls._combined(registered, defaults, kind):
                target = cast(type[Any], descriptor.target_type)
                current = winners.get(target)
                if current is None or _latest_preferred(descriptor) > _latest_preferred(current):
                    winners[target] = descriptor
            targets[kind] = MappingProxyType(winners)
        return cls(
            registered=registered,
            defaults=defaults,
            hierarchy=ExceptionHierarchy(mappers),
            mappers_by_target=MappingProxyType({
                target: tuple(found) for target, found in mappers.items()
            }),
            targets=MappingProxyType(targets),
        )

    @staticmethod
    def _combined(
        registered: DescriptorsByKind, defaults: DescriptorsByKind, kind: ProviderKind
    ) -> tuple[ProviderDescriptor, ...]:
        return (*registered.get(kind, ()), *defaults.get(kind, ()))

    def candidates(self, kind: ProviderKind) -> tuple[ProviderDescriptor, ...]:
        """Registered descriptors of `kind` followed by the built-in defaults."""
        return self._combined(self.registered, self.defaults, kind)


class ProviderFactory:
    """Registers providers and resolves the best one for each request.

    Use `get_instance()` / `get_instance(path)` / `get_shared_instance()` to reach the
    process-wide instances; construct one directly for an isolated, unkeyed factory.
    """

    def __init__(
        self,
        mount_path: str | None = None,
        *,
        settings: RestWeaverSettings | None = None,
        defaults: Iterable[object] | None = None,
    ) -> None:
        """Create a factory.

        Args:
            mount_path: The directory key this factory serves, used in logs and reprs.
            settings: Settings to use instead of the global settings.
            defaults: Built-in providers to seed instead of the standard defaults. Ignored
                when `register_default_providers` is off and `defaults` is None.
        """
        self._settings = settings or get_settings()
        self._mount_path = mount_path
        self._lock = threading.RLock()
        self._sequence = itertools.count()
        self._registries = CapabilityRegistries()
        self._schema_locations: tuple[str, ...] = tuple(self._settings.schema_locations)
        self._defaults: DescriptorsByKind = self._build_defaults(defaults)
        self._state = ResolutionState.build(self._registries.snapshots(), self._defaults)

    # ---------- Directory accessors ----------
    @classmethod
    def get_instance(cls, path: str | None = None) -> ProviderFactory:
        """The process-wide factory for `path` (the default factory when omitted)."""
        from restweaver.directory import get_instance

        return get_instance(path)

    @classmethod
    def get_shared_instance(cls) -> ProviderFactory:
        """The process-wide shared factory, distinct from the default one."""
        from restweaver.directory import get_shared_instance

        return get_shared_instance()

    # ---------- Properties ----------
    @property
    def mount_path(self) -> str | None:
        """The directory key this factory serves, if any."""
        return self._mount_path

    @property
    def settings(self) -> RestWeaverSettings:
        """The settings this factory was created with."""
        return self._settings

    @property
    def registries(self) -> CapabilityRegistries:
        """The five capability registries (user registrations only)."""
        return self._registries

    @property
    def schema_locations(self) -> tuple[str, ...]:
        """Schema locations passed through to schema-aware providers."""
        return self._schema_locations

    # ---------- Registration ----------
    def _build_defaults(self, defaults: Iterable[object] | None) -> DescriptorsByKind:
        if defaults is None:
            if not self._settings.register_default_providers:
                return MappingProxyType({})
            from restweaver.providers.builtin import default_providers

            defaults = default_providers()
        grouped: dict[ProviderKind, list[ProviderDescriptor]] = {}
        for provider in defaults:
            order = next(self._sequence)
            for descriptor in describe(provider, origin=Origin.BUILT_IN, order=order):
                grouped.setdefault(descriptor.kind, []).append(descriptor)
        return MappingProxyType({kind: tuple(found) for kind, found in grouped.items()})

    def _publish(self) -> None:
        """Swap in a fresh resolution state. Callers hold the lock."""
        self._state = ResolutionState.build(self._registries.snapshots(), self._defaults)

    def _apply(self, provider: object, descriptors: tuple[ProviderDescriptor, ...]) -> None:
        for descriptor in descriptors:
            self._registries.register(descriptor)
        if self._schema_locations and isinstance(provider, SchemaAware):
            provider.set_schema_locations(self._schema_locations)

    def register_provider(
        self, provider: object, *, origin: Origin | str = Origin.USER
    ) -> tuple[ProviderDescriptor, ...]:
        """Register a provider for every capability it implements.

        Registering an instance that is already registered is a no-op and returns an empty
        tuple.

        Raises:
            MissingValueError: if `provider` is None.
            ProviderError: if the provider implements no capability or omits its target type.
        """
        if provider is None:
            raise MissingValueError(None, "provider")
        origin = Origin(origin)
        with self._lock:
            if self._registries.contains_provider(provider):
                logger.debug("%s is already registered; skipping", qualified_name(provider))
                return ()
            descriptors = describe(provider, origin=origin, order=next(self._sequence))
            self._apply(provider, descriptors)
            self._publish()
        logger.debug(
            "Registered %s as %s (%s) on %s",
            qualified_name(provider),
            ", ".join(descriptor.kind.value for descriptor in descriptors),
            origin.value,
            self,
        )
        return descriptors

    def set_providers(
        self, providers: Iterable[object], *, origin: Origin | str = Origin.USER
    ) -> tuple[ProviderDescriptor, ...]:
        """Replace every registration with `providers`, in order.

        All providers are described before anything changes, so a bad provider leaves the
        existing registrations intact.
        """
        origin = Origin(origin)
        with self._lock:
            staged: list[tuple[object, tuple[ProviderDescriptor, ...]]] = []
            seen: set[int] = set()
            for provider in providers:
                if provider is None:
                    raise MissingValueError(None, "provider")
                if id(provider) in seen:
                    continue
                seen.add(id(provider))
                staged.append((
                    provider,
                    describe(provider, origin=origin, order=next(self._sequence)),
                ))
            self._registries.clear()
            for provider, descriptors in staged:
                self._apply(provider, descriptors)
            self._publish()
        logger.debug("Replaced providers on %s with %d providers", self, len(staged))
        return tuple(descriptor for _, descriptors in staged for descriptor in descriptors)

    def clear_providers(self) -> None:
        """Empty all five registries. Built-in defaults and schema locations stay."""
        with self._lock:
            self._registries.clear()
            self._publish()
        logger.debug("Cleared providers on %s", self)

    def set_schema_locations(self, locations: Iterable[str]) -> None:
        """Store schema locations and hand them to every schema-aware provider."""
        with self._lock:
            self._schema_locations = tuple(locations)
            state = self._state
            providers = {
                id(descriptor.provider): descriptor.provider
                for kind in ProviderKind
                for descriptor in state.candidates(kind)
            }
            for provider in providers.values():
                if isinstance(provider, SchemaAware):
                    provider.set_schema_locations(self._schema_locations)

    # ---------- Views ----------
    def snapshot(self, kind: ProviderKind | str) -> tuple[ProviderDescriptor, ...]:
        """Registered descriptors of one kind, in registration order."""
        return self._state.registered.get(ProviderKind(kind), ())

    def defaults(self, kind: ProviderKind | str) -> tuple[ProviderDescriptor, ...]:
        """Built-in default descriptors of one kind."""
        return self._state.defaults.get(ProviderKind(kind), ())

    def message_readers(self) -> tuple[ProviderDescriptor, ...]:
        """All readers, in request-independent preference order."""
        return tuple(
            sorted(self._state.candidates(ProviderKind.MESSAGE_READER), key=_declared_order)
        )

    def message_writers(self) -> tuple[ProviderDescriptor, ...]:
        """All writers, in request-independent preference order."""
        return tuple(
            sorted(self._state.candidates(ProviderKind.MESSAGE_WRITER), key=_declared_order)
        )

    # ---------- Resolution ----------
    def resolve_reader(
        self,
        type_: type[Any],
        generic_type: Any = None,
        annotations: Annotations = (),
        media_type: str | MediaType = ALL_TYPES,
    ) -> Resolution:
        """The best reader for `type_` in `media_type`, or `NOT_FOUND`."""
        return self._resolve_entity(
            ProviderKind.MESSAGE_READER, type_, generic_type, annotations, media_type
        )

    def resolve_writer(
        self,
        type_: type[Any],
        generic_type: Any = None,
        annotations: Annotations = (),
        media_type: str | MediaType = ALL_TYPES,
    ) -> Resolution:
        """The best writer for `type_` in `media_type`, or `NOT_FOUND`."""
        return self._resolve_entity(
            ProviderKind.MESSAGE_WRITER, type_, generic_type, annotations, media_type
        )

    def _resolve_entity(
        self,
        kind: ProviderKind,
        type_: type[Any],
        generic_type: Any,
        annotations: Annotations,
        media_type: str | MediaType,
    ) -> Resolution:
        if type_ is None:
            raise MissingValueError(None, "type_", details={"kind": kind.value})
        if media_type is None:
            raise MissingValueError(None, "media_type", details={"kind": kind.value})
        requested = as_media_type(media_type)
        if requested is None:
            logger.debug("Unparsable media type %r; no %s selected", media_type, kind.value)
            return NOT_FOUND
        ranked = sorted(
            (
                ((descriptor.origin.precedence, match, -descriptor.order), descriptor)
                for descriptor in self._state.candidates(kind)
                if (match := descriptor.match(requested)) is not None
            ),
            key=lambda pair: pair[0],
            reverse=True,
        )
        generic_type = type_ if generic_type is None else generic_type
        annotations = tuple(annotations or ())
        for _, descriptor in ranked:
            if descriptor.is_capable(type_, generic_type, annotations, requested):
                return descriptor
        logger.debug(
            "No %s for %s as %s on %s", kind.value, qualified_name(type_), requested, self
        )
        return NOT_FOUND

    def resolve_exception_mapper(
        self, exception: ExceptionType | BaseException
    ) -> Resolution:
        """The mapper for the nearest class in the exception's hierarchy, or `NOT_FOUND`.

        Accepts an exception class or instance.
        """
        if exception is None:
            raise MissingValueError(None, "exception")
        exc_type = exception if isinstance(exception, type) else type(exception)
        if not issubclass(exc_type, BaseException):
            raise TypeError(f"{exc_type!r} is not an exception class")
        state = self._state
        try:
            return state.mapper_cache[exc_type]
        except KeyError:
            pass
        result = self._nearest_mapper(state, exc_type)
        state.mapper_cache[exc_type] = result
        return result

    def _nearest_mapper(self, state: ResolutionState, exc_type: ExceptionType) -> Resolution:
        levels = state.hierarchy.levels(exc_type)
        if self._settings.exception_mapper_precedence == MapperPrecedence.USER_FIRST:
            for origin in (Origin.USER, Origin.BUILT_IN):
                for target in levels:
                    found = [d for d in state.mappers_by_target[target] if d.origin is origin]
                    if found:
                        return max(found, key=_latest_preferred)
            return NOT_FOUND
        if levels:
            return max(state.mappers_by_target[levels[0]], key=_latest_preferred)
        logger.debug("No exception mapper for %s on %s", qualified_name(exc_type), self)
        return NOT_FOUND

    def resolve_context(self, target_type: type[Any]) -> Resolution:
        """The context resolver declared for exactly `target_type`, or `NOT_FOUND`."""
        return self._resolve_target(ProviderKind.CONTEXT_RESOLVER, target_type)

    def resolve_parameter_handler(self, target_type: type[Any]) -> Resolution:
        """The parameter handler declared for exactly `target_type`, or `NOT_FOUND`."""
        return self._resolve_target(ProviderKind.PARAMETER_HANDLER, target_type)

    def _resolve_target(self, kind: ProviderKind, target_type: type[Any]) -> Resolution:
        if target_type is None:
            raise MissingValueError(None, "target_type", details={"kind": kind.value})
        return self._state.targets[kind].get(target_type, NOT_FOUND)

    def __repr__(self) -> str:
        name = self._mount_path if self._mount_path is not None else hex(id(self))
        return f"{type(self).__name__}({name}, registered={len(self._registries)})"


def expect_provider(result: Resolution, what: str, **details: Any) -> ProviderDescriptor:
    """Unwrap a resolution, raising `NoProviderFoundError` on `NOT_FOUND`.

    For collaborators whose policy is to fail when nothing matches; the factory itself
    never raises for a miss.
    """
    if isinstance(result, NotFound):
        raise NoProviderFoundError(
            f"No provider found for {what}",
            details=details,
            suggestions=["Register a provider that declares this type and media type"],
        )
    return result


__all__ = ("ProviderFactory", "Resolution", "ResolutionState", "expect_provider")

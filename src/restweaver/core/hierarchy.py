# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Nearest-ancestor lookup for exception classes.

Exception mappers are registered for a target exception class. An exception is handled by
the mapper registered for the nearest class in its chain of exception ancestors: the
concrete class first, then its bases in method resolution order, up to `BaseException`.
Mixins that are not exceptions themselves are not part of the chain.

`ExceptionHierarchy` is the table the provider factory builds from its registered
targets. It memoizes, per exception class, the registered targets that class can reach,
nearest first, so repeated lookups never walk classes again.
"""

from __future__ import annotations

from collections.abc import Iterable


type ExceptionType = type[BaseException]


def exception_chain(exc_type: ExceptionType) -> tuple[ExceptionType, ...]:
    """The exception ancestors of `exc_type`, nearest first, ending at `BaseException`."""
    return tuple(
        cls
        for cls in exc_type.__mro__
        if isinstance(cls, type) and issubclass(cls, BaseException)
    )


def nearest_ancestor(
    exc_type: ExceptionType, targets: Iterable[ExceptionType]
) -> ExceptionType | None:
    """Return the registered target nearest to `exc_type`, or `None` if none is reachable."""
    registered = frozenset(targets)
    return next((cls for cls in exception_chain(exc_type) if cls in registered), None)


class ExceptionHierarchy:
    """Lookup table from exception classes to the registered targets they reach.

    The table is immutable from the outside: it is built from a fixed set of targets and
    only grows its memo as new exception classes are looked up. Concurrent lookups may
    compute the same entry twice, which is harmless since entries are pure.
    """

    __slots__ = ("_levels", "_targets")

    def __init__(self, targets: Iterable[ExceptionType] = ()) -> None:
        """Build the table, precomputing the entries for the registered targets."""
        self._targets: frozenset[ExceptionType] = frozenset(targets)
        self._levels: dict[ExceptionType, tuple[ExceptionType, ...]] = {
            target: self._reachable(target) for target in self._targets
        }

    @property
    def targets(self) -> frozenset[ExceptionType]:
        """The registered target classes."""
        return self._targets

    def _reachable(self, exc_type: ExceptionType) -> tuple[ExceptionType, ...]:
        return tuple(cls for cls in exception_chain(exc_type) if cls in self._targets)

    def levels(self, exc_type: ExceptionType) -> tuple[ExceptionType, ...]:
        """Registered targets reachable from `exc_type`, nearest first."""
        try:
            return self._levels[exc_type]
        except KeyError:
            reachable = self._reachable(exc_type)
            self._levels[exc_type] = reachable
            return reachable

    def nearest(self, exc_type: ExceptionType) -> ExceptionType | None:
        """The nearest registered target for `exc_type`, or `None`."""
        levels = self.levels(exc_type)
        return levels[0] if levels else None

    def __len__(self) -> int:
        return len(self._targets)

    def __repr__(self) -> str:
        names = sorted(target.__qualname__ for target in self._targets)
        return f"{type(self).__name__}(targets={names})"


__all__ = ("ExceptionHierarchy", "ExceptionType", "exception_chain", "nearest_ancestor")

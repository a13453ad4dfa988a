# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Unified exception hierarchy for RestWeaver.

All RestWeaver exceptions inherit from RestWeaverError. Resolution misses are *not*
exceptions: the engine returns the `NOT_FOUND` sentinel and lets the caller decide. The
errors here cover contract violations by collaborators and configuration problems.
"""

from __future__ import annotations

from typing import Any


class RestWeaverError(Exception):
    """Base exception for all RestWeaver errors.

    Provides structured error information including details and suggestions
    for resolution.
    """

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        suggestions: list[str] | None = None,
    ) -> None:
        """Initialize RestWeaver error.

        Args:
            message: Human-readable error message
            details: Additional context about the error
            suggestions: Actionable suggestions for resolving the error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.suggestions = suggestions or []

    def __str__(self) -> str:
        """Return descriptive error message with context details."""
        parts = [self.message]
        if self.details:
            detail_parts = [
                f"{key.replace('_', ' ')}: {self.details[key]}"
                for key in ("kind", "type", "media_type", "target_type", "exception_type", "path")
                if key in self.details
            ]
            if detail_parts:
                parts.append(f"({', '.join(detail_parts)})")
        return " ".join(parts)

    @property
    def report(self) -> str:
        """Generate a full error report with details and suggestions."""
        return "\n".join((
            f"- Error Message: {self.message}",
            "- Details: " + ", ".join(f"{k}: {v}" for k, v in self.details.items())
            if self.details
            else "- No additional details provided.",
            "- Suggestions: " + ", ".join(self.suggestions)
            if self.suggestions
            else "- No suggestions provided.",
        ))


class ConfigurationError(RestWeaverError):
    """Configuration and settings errors.

    Raised when settings fail validation or environment variables hold unusable values.
    """


class ProviderError(RestWeaverError):
    """Provider registration errors.

    Raised when an object handed to a provider factory cannot act as a provider, for
    example because it implements none of the capability interfaces.
    """


class NoProviderFoundError(ProviderError):
    """No registered provider can handle a request.

    Never raised by the resolution engine itself. Collaborators that prefer an exception
    over the `NOT_FOUND` result raise it through `expect_provider`.
    """


class MissingValueError(RestWeaverError):
    """A required argument was `None`.

    This signals a collaborator contract violation, not a data condition.
    """

    def __init__(
        self,
        msg: str | None,
        field: str,
        details: dict[str, Any] | None = None,
        suggestions: list[str] | None = None,
    ) -> None:
        """Initialize MissingValueError.

        Args:
            field: The name of the missing field
        """
        super().__init__(
            message=msg or f"Missing value for field: {field}",
            details=details,
            suggestions=suggestions,
        )
        self.field = field


__all__ = (
    "ConfigurationError",
    "MissingValueError",
    "NoProviderFoundError",
    "ProviderError",
    "RestWeaverError",
)

# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Media types, declared media ranges and the matcher that ranks them.

A provider declares what it consumes or produces as media-range strings such as
`application/json`, `text/*` or `application/xml;q=0.8`. Requests arrive with one
negotiated media type, which may itself carry wildcards (`text/*`). Matching is
symmetric: a wildcard on either side matches anything in that position.

Ranking (`MatchScore`) is what drives provider selection: an exact declaration beats a
subtype wildcard, which beats a full wildcard, and within the same specificity the higher
declared quality wins.

Malformed strings never raise here. They parse to `None` and therefore never match.
"""

from __future__ import annotations

import logging
import re

from collections.abc import Iterable
from functools import lru_cache
from typing import Annotated, NamedTuple

from pydantic import Field

from restweaver.core.types.models import FROZEN_BASEDMODEL_CONFIG, BasedModel


logger = logging.getLogger(__name__)

WILDCARD = "*"
QUALITY_PARAM = "q"

# RFC 9110 token characters
_TOKEN = r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+"
_TOKEN_RE = re.compile(rf"^{_TOKEN}$")
_QUOTED_RE = re.compile(r'^"(?:[^"\\]|\\.)*"$')
_QUALITY_RE = re.compile(r"^(?:0(?:\.\d{0,3})?|1(?:\.0{0,3})?)$")


class MediaType(BasedModel):
    """A parsed `type/subtype;param=value` media type."""

    model_config = FROZEN_BASEDMODEL_CONFIG

    maintype: Annotated[str, Field(description="The primary type, like `text`, or `*`.")]
    subtype: Annotated[str, Field(description="The subtype, like `html`, or `*`.")]
    parameters: Annotated[
        tuple[tuple[str, str], ...],
        Field(default_factory=tuple, description="Parameters other than the quality weight."),
    ]

    @classmethod
    def parse(cls, text: str) -> MediaType | None:
        """Parse a media type string, returning `None` when it is malformed."""
        parsed = _parse(text)
        return parsed[0] if parsed else None

    @property
    def is_wildcard_type(self) -> bool:
        """True for `*/*`."""
        return self.maintype == WILDCARD

    @property
    def is_wildcard_subtype(self) -> bool:
        """True for `type/*` and `*/*`."""
        return self.subtype == WILDCARD

    @property
    def specificity(self) -> int:
        """2 for an exact type, 1 for a subtype wildcard, 0 for `*/*`."""
        if self.is_wildcard_type:
            return 0
        return 1 if self.is_wildcard_subtype else 2

    @property
    def essence(self) -> str:
        """The `type/subtype` part without parameters."""
        return f"{self.maintype}/{self.subtype}"

    def parameter(self, name: str, default: str | None = None) -> str | None:
        """Return a parameter value by (case-insensitive) name."""
        name = name.lower()
        return next((value for key, value in self.parameters if key == name), default)

    def is_compatible(self, other: MediaType) -> bool:
        """Whether two media types can describe the same content, honoring wildcards."""
        if self.is_wildcard_type or other.is_wildcard_type:
            return True
        if self.maintype != other.maintype:
            return False
        return self.is_wildcard_subtype or other.is_wildcard_subtype or self.subtype == other.subtype

    def __str__(self) -> str:
        """Render the media type as a header value."""
        return self.essence + "".join(f";{key}={value}" for key, value in self.parameters)


class MediaRange(NamedTuple):
    """One declared media type together with its quality weight."""

    media_type: MediaType
    quality: float = 1.0

    def __str__(self) -> str:
        """Render the range as it would be declared."""
        return str(self.media_type) if self.quality == 1.0 else f"{self.media_type};q={self.quality:g}"


class MatchScore(NamedTuple):
    """Comparable rank of a declared range against a requested media type.

    Tuples compare element-wise, so specificity dominates and quality breaks ties.
    """

    specificity: int
    quality: float


ALL_TYPES = MediaType(maintype=WILDCARD, subtype=WILDCARD)
WILDCARD_RANGE = MediaRange(ALL_TYPES, 1.0)


def _split_parameters(text: str) -> list[str]:
    """Split on `;` outside of quoted strings."""
    parts: list[str] = []
    current: list[str] = []
    quoted = escaped = False
    for char in text:
        if escaped:
            escaped = False
        elif char == "\\" and quoted:
            escaped = True
        elif char == '"':
            quoted = not quoted
        elif char == ";" and not quoted:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return parts


@lru_cache(maxsize=512)
def _parse(text: str) -> tuple[MediaType, float] | None:
    """Parse a media type string into the media type and its quality weight."""
    if not isinstance(text, str) or not text.strip():
        return None
    head, *raw_params = (part.strip() for part in _split_parameters(text.strip()))
    if head == WILDCARD:
        head = f"{WILDCARD}/{WILDCARD}"
    maintype, sep, subtype = head.partition("/")
    if not sep or not _TOKEN_RE.match(maintype) or not _TOKEN_RE.match(subtype):
        return None
    if maintype == WILDCARD and subtype != WILDCARD:
        return None
    quality = 1.0
    parameters: list[tuple[str, str]] = []
    for raw in raw_params:
        if not raw:
            continue
        key, sep, value = raw.partition("=")
        key, value = key.strip().lower(), value.strip()
        if not sep or not _TOKEN_RE.match(key):
            return None
        if not (_TOKEN_RE.match(value) or _QUOTED_RE.match(value)):
            return None
        if key == QUALITY_PARAM:
            if not _QUALITY_RE.match(value):
                return None
            quality = float(value)
            continue
        parameters.append((key, value))
    media_type = MediaType(
        maintype=maintype.lower(), subtype=subtype.lower(), parameters=tuple(parameters)
    )
    return media_type, quality


def parse_media_range(text: str) -> MediaRange | None:
    """Parse a declared media range such as `application/json;q=0.9`."""
    parsed = _parse(text)
    return MediaRange(*parsed) if parsed else None


def parse_media_ranges(declared: Iterable[str | MediaType] | str | None) -> tuple[MediaRange, ...]:
    """Parse a provider's declaration, keeping order.

    An empty declaration means `*/*` with quality 1.0. Malformed entries are dropped, so
    a declaration made only of malformed entries yields an empty tuple and never matches.
    """
    if declared is None:
        return (WILDCARD_RANGE,)
    if isinstance(declared, str | MediaType):
        declared = (declared,)
    ranges: list[MediaRange] = []
    seen_any = False
    for entry in declared:
        seen_any = True
        if isinstance(entry, MediaType):
            ranges.append(MediaRange(entry, 1.0))
        elif media_range := parse_media_range(entry):
            ranges.append(media_range)
        else:
            logger.debug("Dropping malformed media range %r", entry)
    if not seen_any:
        return (WILDCARD_RANGE,)
    return tuple(ranges)


def as_media_type(value: str | MediaType) -> MediaType | None:
    """Coerce a requested media type; malformed strings become `None`."""
    if isinstance(value, MediaType):
        return value
    return MediaType.parse(value)


def matches(declared: str | MediaType, requested: str | MediaType) -> bool:
    """Whether a declared pattern matches a requested media type."""
    declared_type = as_media_type(declared)
    requested_type = as_media_type(requested)
    if declared_type is None or requested_type is None:
        return False
    return declared_type.is_compatible(requested_type)


def score(
    declared: str | MediaType, quality: float, requested: str | MediaType
) -> MatchScore | None:
    """Rank a declared pattern against a request, or `None` if they do not match."""
    declared_type = as_media_type(declared)
    requested_type = as_media_type(requested)
    if declared_type is None or requested_type is None:
        return None
    if not declared_type.is_compatible(requested_type):
        return None
    return MatchScore(declared_type.specificity, quality)


def best_score(ranges: Iterable[MediaRange], requested: MediaType) -> MatchScore | None:
    """The best rank any of the declared ranges achieves for a request."""
    return max(
        (
            MatchScore(media_range.media_type.specificity, media_range.quality)
            for media_range in ranges
            if media_range.media_type.is_compatible(requested)
        ),
        default=None,
    )


def declared_rank(ranges: Iterable[MediaRange]) -> MatchScore | None:
    """The best rank of a declaration on its own, used for request-independent ordering."""
    return max(
        (MatchScore(media_range.media_type.specificity, media_range.quality) for media_range in ranges),
        default=None,
    )


__all__ = (
    "ALL_TYPES",
    "WILDCARD_RANGE",
    "MatchScore",
    "MediaRange",
    "MediaType",
    "as_media_type",
    "best_score",
    "declared_rank",
    "matches",
    "parse_media_range",
    "parse_media_ranges",
    "score",
)

# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Core building blocks: media-type matching, exception hierarchies and base types."""

from restweaver.core.hierarchy import ExceptionHierarchy, exception_chain, nearest_ancestor
from restweaver.core.media_type import (
    ALL_TYPES,
    WILDCARD_RANGE,
    MatchScore,
    MediaRange,
    MediaType,
    best_score,
    declared_rank,
    matches,
    parse_media_range,
    parse_media_ranges,
    score,
)
from restweaver.core.types import NOT_FOUND, BasedModel, BaseEnum, NotFound


__all__ = (
    "ALL_TYPES",
    "NOT_FOUND",
    "WILDCARD_RANGE",
    "BaseEnum",
    "BasedModel",
    "ExceptionHierarchy",
    "MatchScore",
    "MediaRange",
    "MediaType",
    "NotFound",
    "best_score",
    "declared_rank",
    "exception_chain",
    "matches",
    "nearest_ancestor",
    "parse_media_range",
    "parse_media_ranges",
    "score",
)

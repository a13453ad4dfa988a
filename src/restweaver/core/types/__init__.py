# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Shared base types: pydantic models, enums and sentinels."""

from restweaver.core.types.enum import BaseEnum
from restweaver.core.types.models import BASEDMODEL_CONFIG, FROZEN_BASEDMODEL_CONFIG, BasedModel
from restweaver.core.types.sentinel import NOT_FOUND, NotFound, Sentinel
from restweaver.core.types.utils import generate_field_title, generate_title, qualified_name


__all__ = (
    "BASEDMODEL_CONFIG",
    "FROZEN_BASEDMODEL_CONFIG",
    "NOT_FOUND",
    "BaseEnum",
    "BasedModel",
    "NotFound",
    "Sentinel",
    "generate_field_title",
    "generate_title",
    "qualified_name",
)

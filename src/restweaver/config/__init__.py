# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Configuration package for RestWeaver."""

from restweaver.config.settings import (
    MapperPrecedence,
    RestWeaverSettings,
    get_settings,
    reset_settings,
)


__all__ = ("MapperPrecedence", "RestWeaverSettings", "get_settings", "reset_settings")

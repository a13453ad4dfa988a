# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Registry package for RestWeaver. This entrypoint exposes the capability registries."""

from restweaver.registry.capability import CapabilityRegistries, CapabilityRegistry


__all__ = ("CapabilityRegistries", "CapabilityRegistry")

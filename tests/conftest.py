# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Global pytest configuration and fixtures for RestWeaver tests."""

from __future__ import annotations

import os

import pytest

from restweaver.config.settings import RestWeaverSettings, reset_settings
from restweaver.directory import reset_directory
from restweaver.factory import ProviderFactory


@pytest.fixture(autouse=True)
def isolated_restweaver_state(monkeypatch: pytest.MonkeyPatch):
    """Give every test fresh settings and an empty provider directory.

    RESTWEAVER_* variables from the developer's shell are removed so tests see defaults.
    """
    for name in list(os.environ):
        if name.upper().startswith("RESTWEAVER_"):
            monkeypatch.delenv(name, raising=False)
    reset_settings()
    reset_directory()
    yield
    reset_directory()
    reset_settings()


@pytest.fixture
def factory() -> ProviderFactory:
    """An isolated factory seeded with the built-in defaults."""
    return ProviderFactory("/test")


@pytest.fixture
def bare_factory() -> ProviderFactory:
    """An isolated factory without built-in defaults."""
    return ProviderFactory("/bare", settings=RestWeaverSettings(register_default_providers=False))

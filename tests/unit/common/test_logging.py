# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0
"""Unit tests for logger setup."""

from __future__ import annotations

import logging

import pytest

from rich.logging import RichHandler

from restweaver.common.logging import get_rich_handler, setup_logger, setup_logger_from_settings
from restweaver.config.settings import RestWeaverSettings


pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def restore_logger():
    """Restore the restweaver logger after each test."""
    logger = logging.getLogger("restweaver")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


def test_get_rich_handler():
    """Test that the rich handler accepts handler options."""
    handler = get_rich_handler(show_path=False)
    assert isinstance(handler, RichHandler)


def test_setup_logger_rich():
    """Test that setup installs exactly one rich handler."""
    setup_logger(level=logging.DEBUG)
    logger = setup_logger(level=logging.INFO)
    assert logger.name == "restweaver"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], RichHandler)


def test_setup_logger_plain():
    """Test setup without rich formatting."""
    logger = setup_logger("restweaver", level=logging.ERROR, rich=False)
    assert logger.level == logging.ERROR
    assert not any(isinstance(handler, RichHandler) for handler in logger.handlers)


def test_setup_logger_from_settings():
    """Test that the settings drive the level and format."""
    logger = setup_logger_from_settings(RestWeaverSettings(log_level="debug", rich_logging=True))
    assert logger.level == logging.DEBUG
    assert isinstance(logger.handlers[0], RichHandler)

# SPDX-FileCopyrightText: 2025 Knitli Inc.
# SPDX-FileContributor: Adam Poulemanos <adam@knit.li>
#
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Set up a logger with optional rich formatting.

RestWeaver modules only ever call `logging.getLogger(__name__)`; nothing is configured on
import. Applications that want RestWeaver's output formatted call `setup_logger` (or
`setup_logger_from_settings`) once at startup.
"""

from __future__ import annotations

import logging

from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.logging import RichHandler


if TYPE_CHECKING:
    from restweaver.config.settings import RestWeaverSettings


def get_rich_handler(**kwargs: Any) -> RichHandler:
    """Build a rich handler writing to a markup-enabled console."""
    return RichHandler(console=Console(markup=True, soft_wrap=True, emoji=True), markup=True, **kwargs)


def setup_logger(
    name: str | None = "restweaver",
    *,
    level: int = logging.WARNING,
    rich: bool = True,
    rich_options: dict[str, Any] | None = None,
) -> logging.Logger:
    """Set up a logger with optional rich formatting."""
    if not rich:
        logging.basicConfig(level=level)
        logger = logging.getLogger(name)
        logger.setLevel(level)
        return logger
    handler = get_rich_handler(**(rich_options or {}))
    logger = logging.getLogger(name)
    logger.setLevel(level)
    # Clear existing handlers to prevent duplication
    logger.handlers.clear()
    logger.addHandler(handler)
    return logger


def setup_logger_from_settings(settings: RestWeaverSettings | None = None) -> logging.Logger:
    """Set up the `restweaver` logger from the level and format in the settings."""
    if settings is None:
        from restweaver.config.settings import get_settings

        settings = get_settings()
    return setup_logger("restweaver", level=settings.log_level, rich=settings.rich_logging)


__all__ = ("get_rich_handler", "setup_logger", "setup_logger_from_settings")

# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import logging

from rich.logging import RichHandler

from .env import get_env
from .errors import ConfigurationError


def setup_logging(log_level: str | None = None) -> None:
    """Configure the root logger with a rich handler."""
    level_name = (log_level or get_env("LABELRANK_LOG_LEVEL", "INFO") or "INFO").upper()
    numeric_level = getattr(logging, level_name, None)
    if not isinstance(numeric_level, int):
        raise ConfigurationError(f"Invalid log level: {level_name}")

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    if not any(isinstance(handler, RichHandler) for handler in root_logger.handlers):
        root_logger.addHandler(RichHandler(show_path=False, rich_tracebacks=True))
    logging.getLogger("sklearn").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name)

from __future__ import annotations

import importlib
import logging
from types import ModuleType

from dotenv import load_dotenv

from config import get_settings_module

from .common.logging_utils import setup_logger


def load_settings() -> ModuleType:
    """Load ``.env`` (without overriding the real environment) and import the active settings module."""

    load_dotenv(override=False)
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)

    # Attach handlers to this package, whichever import path loaded it.
    logger = setup_logger(
        __package__ or "lesson_balance",
        level=getattr(settings, "LOG_LEVEL", logging.INFO),
        log_file=getattr(settings, "LOG_FILE", None),
    )
    if getattr(settings, "DEBUG", False):
        logger.debug("settings=%s timezone=%s", settings_module, getattr(settings, "TIMEZONE", None))
    return settings

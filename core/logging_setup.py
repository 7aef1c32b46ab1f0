# core/logging_setup.py
from __future__ import annotations

import logging
import os
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_level(level: Optional[Union[int, str]] = None) -> int:
    """``KILLICK_LOG_LEVEL`` wins when no level is given; unknown names mean INFO."""
    if level is None:
        level = os.environ.get("KILLICK_LOG_LEVEL", "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    logging.basicConfig(level=resolve_level(level), format=LOG_FORMAT)

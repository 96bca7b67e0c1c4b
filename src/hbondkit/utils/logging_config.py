"""Central logging configuration.

Usage:
    from hbondkit.utils.logging_config import configure_logging
    configure_logging(json_logs=False, level="INFO")

Idempotent: safe to call multiple times. Pass ``force=True`` to rebuild the
sinks (e.g. after changing settings in tests).
"""
from __future__ import annotations
import os
import sys
from typing import Optional

from loguru import logger

from .settings import get_settings

_CONFIGURED = False
_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {name} | {message}"


def configure_logging(json_logs: Optional[bool] = None, level: Optional[str] = None, force: bool = False) -> None:
    global _CONFIGURED
    if _CONFIGURED and not force:
        return
    settings = get_settings()
    json_logs = settings.json_logging if json_logs is None else json_logs
    level = (level or settings.log_level).upper()

    logger.remove()
    if json_logs:
        logger.add(sys.stdout, level=level, serialize=True)
    else:
        logger.add(sys.stdout, level=level, format=_FORMAT)

    # Optional rotating file sink controlled by HBONDKIT_LOG_FILE
    log_file = settings.log_file
    if log_file:
        parent = os.path.dirname(log_file)
        if parent:
            os.makedirs(parent, exist_ok=True)
        logger.add(log_file, level=level, rotation="5 MB", retention=3,
                   serialize=json_logs, format=_FORMAT)
    _CONFIGURED = True


def reset_logging() -> None:
    """Forget previous configuration so the next call rebuilds sinks."""
    global _CONFIGURED
    _CONFIGURED = False


__all__ = ['configure_logging', 'reset_logging']

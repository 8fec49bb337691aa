"""
Process-wide logging setup.

Core modules log through loguru; infrastructure modules use stdlib
`logging.getLogger(__name__)`, which `InterceptHandler` forwards into loguru so
both end up in the same sinks.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, List, Optional

from loguru import logger

if TYPE_CHECKING:
    from personabot.config.models import LoggingConfig

DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(config: Optional["LoggingConfig"] = None) -> List[int]:
    """Replace loguru's sinks according to `config`; returns the new sink ids."""
    level = (config.level if config else "INFO").upper()
    logger.remove()
    sink_ids = [logger.add(sys.stderr, level=level, format=DEFAULT_FORMAT, backtrace=False)]
    if config and config.file:
        sink_ids.append(
            logger.add(
                config.file,
                level=level,
                rotation=config.rotation,
                retention=config.retention,
                serialize=config.serialize,
                enqueue=True,
            )
        )
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    return sink_ids

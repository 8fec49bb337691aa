import logging
import sys

from loguru import logger

from personabot.config import LoggingConfig
from personabot.infrastructure.logging import configure_logging


def test_stdlib_records_reach_file_sink(tmp_path):
    log_file = tmp_path / "personabot.log"
    try:
        ids = configure_logging(LoggingConfig(level="debug", file=str(log_file)))
        assert len(ids) == 2

        logging.getLogger("personabot.infrastructure.stores").warning("store degraded")
        logger.info("loguru message")
        logger.complete()

        content = log_file.read_text(encoding="utf-8")
        assert "store degraded" in content
        assert "loguru message" in content
    finally:
        logger.remove()
        logger.add(sys.stderr)
        logging.basicConfig(handlers=[], force=True)


def test_stderr_only_by_default():
    try:
        assert len(configure_logging()) == 1
    finally:
        logger.remove()
        logger.add(sys.stderr)
        logging.basicConfig(handlers=[], force=True)

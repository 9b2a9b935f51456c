"""Tests for logging setup."""

import io
import logging

from pocketledger.logging_config import configure_logging, reset_logging


def test_configure_is_idempotent():
    configure_logging(logging.INFO)
    configure_logging(logging.DEBUG)

    logger = logging.getLogger("pocketledger")
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO


def test_messages_reach_stream():
    stream = io.StringIO()
    configure_logging(logging.INFO, stream=stream)

    logging.getLogger("pocketledger.domain.posting").info("posted %s", 42)

    assert "INFO pocketledger.domain.posting: posted 42" in stream.getvalue()


def test_reset_allows_reconfiguring():
    configure_logging(logging.INFO)
    reset_logging()

    logger = logging.getLogger("pocketledger")
    assert logger.handlers == []

    configure_logging(logging.ERROR)
    assert logger.level == logging.ERROR

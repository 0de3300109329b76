import io
import logging
import sys
import uuid

from collectors.logger.logger import logger, setup_logger


def unique_name():
    return f"collectors.test.{uuid.uuid4().hex}"


def test_default_logger():
    assert logger.name == "collectors"
    assert logger.propagate is False
    assert len(logger.handlers) == 1


def test_explicit_stream():
    stream = io.StringIO()
    log = setup_logger(unique_name(), level="DEBUG", format_string="%(message)s", stream=stream)

    log.debug("chunk planned")
    assert stream.getvalue() == "chunk planned\n"


def test_default_handler_follows_current_stderr(monkeypatch):
    log = setup_logger(unique_name(), level="INFO", format_string="%(message)s")
    replacement = io.StringIO()
    monkeypatch.setattr(sys, "stderr", replacement)

    log.info("after redirect")
    assert replacement.getvalue() == "after redirect\n"


def test_setup_is_idempotent():
    name = unique_name()
    first = setup_logger(name, level="WARNING")
    second = setup_logger(name, level="DEBUG")

    assert first is second
    assert len(second.handlers) == 1
    assert second.level == logging.WARNING

"""Tests for the Rich logger configured by setup_logger."""

import logging
import uuid
from typing import Generator

import pytest
from rich.logging import RichHandler

from cpow import get_logger, setup_logger


@pytest.fixture
def logger_name() -> Generator[str, None, None]:
    name = f"cpow.test.{uuid.uuid4().hex[:8]}"
    yield name
    logger = logging.getLogger(name)
    logger.handlers.clear()
    logger.propagate = True
    logging.Logger.manager.loggerDict.pop(name, None)


def test_single_rich_handler_without_propagation(logger_name: str) -> None:
    setup_logger(logger_name)
    logger = logging.getLogger(logger_name)

    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], RichHandler)
    assert logger.propagate is False


def test_repeated_setup_does_not_stack_handlers(logger_name: str) -> None:
    setup_logger(logger_name)
    handler = logging.getLogger(logger_name).handlers[0]

    setup_logger(logger_name, level=logging.WARNING)

    logger = logging.getLogger(logger_name)
    assert logger.handlers == [handler]
    assert logger.level == logging.WARNING


def test_force_reconfigure_replaces_handler(logger_name: str) -> None:
    setup_logger(logger_name)
    original = logging.getLogger(logger_name).handlers[0]

    setup_logger(logger_name, level=logging.DEBUG, force_reconfigure=True)

    logger = logging.getLogger(logger_name)
    assert len(logger.handlers) == 1
    assert logger.handlers[0] is not original
    assert logger.level == logging.DEBUG


def test_get_logger(logger_name: str) -> None:
    logger = get_logger(logger_name, level=logging.ERROR)

    assert logger.name == logger_name
    assert logger.level == logging.ERROR
    assert isinstance(logger.handlers[0], RichHandler)

from __future__ import annotations

import logging
from typing import Iterator

import pytest

from skiperror.ports import LOGGER_NAME
from skiperror.severity import Severity


class RecordingPort:
    """Port that keeps every event it receives."""

    def __init__(self) -> None:
        self.events: list[tuple[str, Severity]] = []

    def report(self, message: str, severity: Severity) -> None:
        self.events.append((message, severity))


@pytest.fixture
def recording_port() -> RecordingPort:
    return RecordingPort()


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    # configure_logging() detaches the package logger from the root; undo it between tests.
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.filters.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True

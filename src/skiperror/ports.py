"""
Logging ports: where skipped failures are reported.

The adapter and the early-exit helpers only know the `LoggingPort` protocol. Which
backend receives the events is decided by the embedding application when it builds
the port.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol, runtime_checkable

from .outcome import render_failure
from .severity import Severity

LOGGER_NAME = "skiperror"

logger = logging.getLogger(__name__)


@runtime_checkable
class LoggingPort(Protocol):
    """Receives one rendered failure per skipped item. Fire-and-forget."""

    def report(self, message: str, severity: Severity) -> None:
        ...


class NullPort:
    """Discards every event."""

    def report(self, message: str, severity: Severity) -> None:
        del message, severity


class LoggerPort:
    """
    Forwards events to a stdlib ``logging.Logger`` at the matching level.

    Usage example
    -------------
        port = LoggerPort(logging.getLogger("ingest"))
        port.report("invalid literal for int() with base 10: 'three'", Severity.WARN)
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger if logger is not None else logging.getLogger(LOGGER_NAME)

    def report(self, message: str, severity: Severity) -> None:
        self.logger.log(severity.level, "%s", message, extra={"severity": severity.name})


class FanOutPort:
    """
    Forwards each event to several ports in order.

    A port that raises does not prevent the following ports from receiving the event.
    """

    def __init__(self, *ports: LoggingPort) -> None:
        self.ports = tuple(ports)

    def report(self, message: str, severity: Severity) -> None:
        for port in self.ports:
            _send(port, lambda: message, severity)


def _send(port: LoggingPort, render: Callable[[], str], severity: Severity) -> None:
    try:
        port.report(render(), severity)
    except Exception:
        logger.debug("Could not report skipped failure to %r; event dropped", port, exc_info=True)


def deliver(port: LoggingPort, error: object, severity: Severity) -> None:
    """
    Render `error` and hand it to `port` exactly once.

    Exceptions raised while rendering or by the port are logged at DEBUG on this
    module's logger and otherwise ignored, so a broken failure value or sink never
    aborts iteration.
    """
    _send(port, lambda: render_failure(error), severity)


def default_port() -> LoggingPort:
    """Port used when a severity is given without an explicit port."""
    return LoggerPort()

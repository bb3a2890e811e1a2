"""
skiperror: iterate over fallible items, keep the successes, report the rest.

Key primitives
--------------
- Ok / Err / attempt(): outcome values for one item
- wrap() / wrap_with_reporting(): lazy adapter yielding only success payloads
- skip_error() and friends: early-exit helpers for hand-written loops
- Severity: reporting level, mapped onto stdlib logging levels
- LoggingPort and its implementations: where skipped failures are reported
- SkipErrorConfig / configure_logging(): runtime configuration + logging setup
"""

from .adapter import SkipErrorIter, wrap, wrap_with_reporting
from .config import ConfigError, SkipErrorConfig
from .logging import JsonlEventLogger, JsonlPort, configure_logging
from .outcome import Err, Ok, Outcome, attempt, render_failure
from .ports import FanOutPort, LoggerPort, LoggingPort, NullPort
from .severity import Severity
from .sugar import (
    skip_error,
    skip_error_and_debug,
    skip_error_and_error,
    skip_error_and_info,
    skip_error_and_log,
    skip_error_and_trace,
    skip_error_and_warn,
)
from .version import __version__

__all__ = [
    "ConfigError",
    "Err",
    "FanOutPort",
    "JsonlEventLogger",
    "JsonlPort",
    "LoggerPort",
    "LoggingPort",
    "NullPort",
    "Ok",
    "Outcome",
    "Severity",
    "SkipErrorConfig",
    "SkipErrorIter",
    "__version__",
    "attempt",
    "configure_logging",
    "render_failure",
    "skip_error",
    "skip_error_and_debug",
    "skip_error_and_error",
    "skip_error_and_info",
    "skip_error_and_log",
    "skip_error_and_trace",
    "skip_error_and_warn",
    "wrap",
    "wrap_with_reporting",
]

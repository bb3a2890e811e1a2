"""
Early-exit helpers for callers that keep their own loop.

Each helper returns the success payload, or ``None`` when the item failed; the
caller checks and ``continue``s::

    for raw in lines:
        number = skip_error_and_warn(attempt(int, raw))
        if number is None:
            continue
        total += number

An ``Ok(None)`` is indistinguishable from a failure here; use the adapter when
``None`` is a legitimate payload.
"""

from __future__ import annotations

from typing import Callable, Optional, TypeVar, Union

from .outcome import Err, Ok, Outcome
from .ports import LoggingPort, default_port, deliver
from .severity import Severity

T = TypeVar("T")


def skip_error(outcome: Outcome[T, object]) -> Optional[T]:
    """Return the success payload, or None on failure."""
    if isinstance(outcome, Ok):
        return outcome.value
    if not isinstance(outcome, Err):
        raise TypeError(f"Expected Ok or Err, got {type(outcome).__name__}")
    return None


def skip_error_and_log(
    outcome: Outcome[T, object],
    severity: Union[Severity, str, None],
    *,
    port: Optional[LoggingPort] = None,
) -> Optional[T]:
    """
    Return the success payload, or report the failure at `severity` and return None.

    ``severity=None`` behaves like `skip_error`. An unknown severity raises
    ``ValueError`` whatever the outcome.
    """
    sev = Severity.parse(severity)
    if isinstance(outcome, Err):
        if sev is not None:
            deliver(port if port is not None else default_port(), outcome.error, sev)
        return None
    return skip_error(outcome)


def _at(severity: Severity) -> Callable[..., Optional[T]]:
    def helper(outcome: Outcome[T, object], *, port: Optional[LoggingPort] = None) -> Optional[T]:
        return skip_error_and_log(outcome, severity, port=port)

    helper.__name__ = f"skip_error_and_{severity.value}"
    helper.__qualname__ = helper.__name__
    helper.__doc__ = (
        f"Return the success payload, or report the failure at {severity.name} and return None."
    )
    return helper


skip_error_and_trace = _at(Severity.TRACE)
skip_error_and_debug = _at(Severity.DEBUG)
skip_error_and_info = _at(Severity.INFO)
skip_error_and_warn = _at(Severity.WARN)
skip_error_and_error = _at(Severity.ERROR)

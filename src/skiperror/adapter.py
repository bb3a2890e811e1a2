"""
Filtering adapter: keep the successes of a sequence of outcomes, skip the failures.

Usage example
-------------
    source = (attempt(int, s) for s in ["1", "2", "three", "4"])
    numbers = list(wrap_with_reporting(source, Severity.WARN))  # [1, 2, 4], one WARN record
"""

from __future__ import annotations

from typing import Generic, Iterable, Iterator, Optional, TypeVar, Union

from .outcome import Err, Ok, Outcome
from .ports import LoggingPort, default_port, deliver
from .severity import Severity

T = TypeVar("T")
E = TypeVar("E")


class SkipErrorIter(Generic[T, E]):
    """
    Lazy iterator over the success payloads of `source`.

    Each ``next()`` pulls from `source` until an ``Ok`` turns up (its value is returned)
    or the source runs out (``StopIteration``). Every ``Err`` met on the way is reported
    once to `port` when a severity is set, and dropped otherwise. Nothing is buffered
    beyond the item being examined.
    """

    def __init__(
        self,
        source: Iterable[Outcome[T, E]],
        *,
        severity: Optional[Severity] = None,
        port: Optional[LoggingPort] = None,
    ) -> None:
        self._source: Iterator[Outcome[T, E]] = iter(source)
        self._severity = severity
        self._port: Optional[LoggingPort] = None
        if severity is not None:
            self._port = port if port is not None else default_port()

    @property
    def severity(self) -> Optional[Severity]:
        return self._severity

    def __iter__(self) -> "SkipErrorIter[T, E]":
        return self

    def __next__(self) -> T:
        # Loop, never recurse: long runs of failures must not grow the stack.
        for item in self._source:
            if isinstance(item, Ok):
                return item.value
            if not isinstance(item, Err):
                raise TypeError(f"Expected Ok or Err from source, got {type(item).__name__}")
            if self._port is not None:
                deliver(self._port, item.error, self._severity)  # type: ignore[arg-type]
        raise StopIteration

    def __repr__(self) -> str:
        sev = self._severity.name if self._severity is not None else "none"
        return f"{type(self).__name__}(severity={sev})"


def wrap(source: Iterable[Outcome[T, E]]) -> SkipErrorIter[T, E]:
    """Skip failures silently."""
    return SkipErrorIter(source)


def wrap_with_reporting(
    source: Iterable[Outcome[T, E]],
    severity: Union[Severity, str, None],
    *,
    port: Optional[LoggingPort] = None,
) -> SkipErrorIter[T, E]:
    """
    Skip failures, reporting each one at `severity`.

    Parameters
    ----------
    source
        Iterable of ``Ok`` / ``Err`` values.
    severity
        A `Severity` or its name. ``None`` or ``"none"`` behaves like `wrap`.
    port
        Where reports go. Defaults to a `LoggerPort` on the "skiperror" logger.

    Usage example
    -------------
        rows = wrap_with_reporting(parse_rows(path), "info", port=LoggerPort(log))
    """
    return SkipErrorIter(source, severity=Severity.parse(severity), port=port)

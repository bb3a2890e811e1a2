from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """
    Successful outcome of one item.

    Usage example
    -------------
        out = Ok(42)
        out.value  # 42
    """
    value: T

    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err(Generic[E]):
    """
    Failed outcome of one item. `error` is usually an exception but may be any value with a text rendering.

    Usage example
    -------------
        out = Err(ValueError("bad row"))
    """
    error: E

    def is_ok(self) -> bool:
        return False


Outcome = Union[Ok[T], Err[E]]


def attempt(fn: Callable[..., T], *args: Any, **kwargs: Any) -> "Outcome[T, Exception]":
    """
    Call `fn` and capture its result as an outcome value.

    Returns
    -------
    outcome
        ``Ok(result)`` on success; ``Err(exc)`` if `fn` raised an ``Exception``.
        ``BaseException`` subclasses such as ``KeyboardInterrupt`` are not captured.

    Usage example
    -------------
        source = (attempt(int, s) for s in ["1", "2", "three"])
    """
    try:
        result = fn(*args, **kwargs)
    except Exception as exc:
        return Err(exc)
    return Ok(result)


def render_failure(error: object) -> str:
    """
    Text rendering of a failure.

    Falls back to the class name for exceptions with an empty message, and to
    ``<unprintable ClassName>`` when ``str()`` itself raises.
    """
    try:
        text = str(error)
    except Exception:
        return f"<unprintable {type(error).__name__}>"
    if not text and isinstance(error, BaseException):
        return type(error).__name__
    return text

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Union

TRACE = 5
logging.addLevelName(TRACE, "TRACE")


class Severity(str, Enum):
    """
    Level at which discarded failures are reported.

    Members are ordered TRACE < DEBUG < INFO < WARN < ERROR and map 1:1 onto stdlib
    ``logging`` levels through `level`. "No reporting" is spelled ``None`` wherever a
    severity is optional.
    """
    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def level(self) -> int:
        """Matching stdlib logging level."""
        return _LEVELS[self]

    @property
    def rank(self) -> int:
        return _ORDER.index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def parse(cls, value: Union["Severity", str, int, None]) -> Optional["Severity"]:
        """
        Coerce a user-supplied value into a severity.

        Accepts a `Severity`, a case-insensitive name ("warning" is an alias of WARN),
        or one of the stdlib integer levels in the mapping. ``None``, ``""`` and
        ``"none"`` mean "no reporting" and return ``None``.

        Raises
        ------
        ValueError
            If the value names no known severity.

        Usage example
        -------------
            Severity.parse("Warn")  # Severity.WARN
            Severity.parse("none")  # None
        """
        if value is None or isinstance(value, Severity):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Unknown severity: {value!r}")
        if isinstance(value, int):
            for sev, lvl in _LEVELS.items():
                if lvl == value:
                    return sev
            raise ValueError(f"Unknown severity level: {value}")

        name = str(value).strip().lower()
        if name in ("", "none"):
            return None
        if name == "warning":
            return cls.WARN
        try:
            return cls(name)
        except ValueError:
            choices = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown severity {value!r} (expected one of: {choices}, none)") from None


_ORDER = (Severity.TRACE, Severity.DEBUG, Severity.INFO, Severity.WARN, Severity.ERROR)

_LEVELS = {
    Severity.TRACE: TRACE,
    Severity.DEBUG: logging.DEBUG,
    Severity.INFO: logging.INFO,
    Severity.WARN: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}

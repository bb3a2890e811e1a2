from __future__ import annotations

import logging
import os
import uuid
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from .severity import Severity


class ConfigError(ValueError):
    """Raised when runtime configuration is missing or invalid."""


_CONFIG_FILENAMES = ("skiperror.yaml", "config.yaml")
_SECTION = "skiperror"


def load_config(root: Path) -> dict[str, Any]:
    """
    Load the ``skiperror:`` section of a YAML config file in `root`, if present.

    Search order:
    1) ``skiperror.yaml``
    2) ``config.yaml``

    Returns an empty dict when no file exists or the file has no ``skiperror:`` section.
    """

    for filename in _CONFIG_FILENAMES:
        config_path = root / filename
        if not config_path.exists():
            continue
        try:
            raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as error:
            raise ConfigError(f"Could not parse {config_path}: {error}") from error
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise ConfigError(f"{config_path} must contain a mapping at top level.")
        section = raw.get(_SECTION, {})
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ConfigError(f"'{_SECTION}' in {config_path} must be a mapping.")
        return section
    return {}


def _truthy(raw: str) -> bool:
    return raw.strip() not in ("0", "false", "False", "no", "")


@dataclass(frozen=True)
class SkipErrorConfig:
    """
    Configuration for reporting skipped failures.

    Parameters
    ----------
    severity
        Level at which skipped failures are reported; None disables reporting.
    log_dir
        Directory where log files and JSONL event logs are written.
    run_id
        Unique identifier for the run. If "auto", a UUID4 prefix is generated.
    console_level
        Logging level for console output.
    file_level
        Logging level for file output.
    write_jsonl
        If True, writes one JSON line per skipped failure to <log_dir>/events_<run_id>.jsonl.
    env_prefix
        Prefix for environment-variable overrides, e.g. "SKIPERROR_".

    Usage example
    -------------
        cfg = SkipErrorConfig(severity=Severity.INFO, log_dir=Path("logs"))
    """

    severity: Optional[Severity] = Severity.WARN
    log_dir: Path = Path("logs")
    run_id: str = "auto"

    console_level: int = logging.INFO
    file_level: int = logging.DEBUG

    write_jsonl: bool = False

    env_prefix: str = field(default="", repr=False)

    def resolved_run_id(self) -> str:
        """Return a non-auto run id."""
        if self.run_id != "auto":
            return self.run_id
        return uuid.uuid4().hex[:10]

    @classmethod
    def from_env(cls, *, default: Optional["SkipErrorConfig"] = None) -> "SkipErrorConfig":
        """
        Create config from environment variables.

        Supported variables (prefix controlled by env_prefix on `default`):
        - <PFX>SEVERITY: "trace" | "debug" | "info" | "warn" | "error" | "none"
        - <PFX>LOG_DIR: path
        - <PFX>WRITE_JSONL: "1"/"0"

        Invalid values fall back to `default`.

        Usage example
        -------------
            cfg = SkipErrorConfig.from_env(default=SkipErrorConfig(env_prefix="SKIPERROR_"))
        """
        base = default if default is not None else cls()
        pfx = base.env_prefix

        severity = base.severity
        severity_raw = os.getenv(f"{pfx}SEVERITY")
        if severity_raw is not None:
            try:
                severity = Severity.parse(severity_raw)
            except ValueError:
                severity = base.severity

        log_dir = Path(os.getenv(f"{pfx}LOG_DIR", str(base.log_dir)))
        write_jsonl = _truthy(os.getenv(f"{pfx}WRITE_JSONL", "1" if base.write_jsonl else "0"))

        return replace(base, severity=severity, log_dir=log_dir, write_jsonl=write_jsonl)

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        *,
        default: Optional["SkipErrorConfig"] = None,
    ) -> "SkipErrorConfig":
        """
        Overlay a config mapping (as returned by `load_config`) onto `default`.

        Recognised keys: ``severity``, ``log_dir``, ``run_id``, ``write_jsonl``.

        Raises
        ------
        ConfigError
            If ``severity`` names no known level.
        """
        base = default if default is not None else cls()
        changes: dict[str, Any] = {}

        if "severity" in data:
            try:
                changes["severity"] = Severity.parse(data["severity"])
            except ValueError as error:
                raise ConfigError(str(error)) from error
        if data.get("log_dir"):
            changes["log_dir"] = Path(str(data["log_dir"]))
        if data.get("run_id"):
            changes["run_id"] = str(data["run_id"])
        if "write_jsonl" in data:
            raw = data["write_jsonl"]
            changes["write_jsonl"] = raw if isinstance(raw, bool) else _truthy(str(raw))

        return replace(base, **changes)

"""`skiperror parse` command implementation."""

from __future__ import annotations

import argparse
import json
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, Optional, TextIO

from skiperror.adapter import wrap_with_reporting
from skiperror.config import ConfigError, SkipErrorConfig, load_config
from skiperror.logging import JsonlPort, configure_logging
from skiperror.outcome import Outcome, attempt
from skiperror.ports import FanOutPort, LoggerPort, LoggingPort
from skiperror.severity import Severity

_CONVERTERS: dict[str, Callable[[str], Any]] = {
    "int": int,
    "float": float,
    "json": json.loads,
}


def add_subparser(subparsers: argparse._SubParsersAction) -> None:
    """Register the `parse` command."""
    parser = subparsers.add_parser("parse", help="Convert each input line, skipping lines that fail.")
    parser.add_argument("path", nargs="?", default="-", help="Input file; '-' or omitted reads stdin.")
    parser.add_argument("--as", dest="kind", choices=sorted(_CONVERTERS), default="int", help="Conversion to apply.")
    parser.add_argument(
        "--severity",
        default=None,
        help="Report skipped lines at this level (trace, debug, info, warn, error, none).",
    )
    parser.add_argument("--log-dir", default=None, help="Directory for log files.")
    parser.add_argument("--jsonl", action="store_true", default=None, help="Also write skipped lines as JSONL events.")
    parser.set_defaults(command="parse")


def resolve_config(args: argparse.Namespace, root: Path) -> SkipErrorConfig:
    """Merge defaults, YAML file, environment and CLI flags (later wins)."""
    cfg = SkipErrorConfig(env_prefix="SKIPERROR_")
    cfg = SkipErrorConfig.from_mapping(load_config(root), default=cfg)
    cfg = SkipErrorConfig.from_env(default=cfg)

    overrides: dict[str, Any] = {}
    if args.severity is not None:
        try:
            overrides["severity"] = Severity.parse(args.severity)
        except ValueError as error:
            raise ConfigError(f"--severity: {error}") from error
    if args.log_dir is not None:
        overrides["log_dir"] = args.log_dir
    if args.jsonl:
        overrides["write_jsonl"] = True
    return SkipErrorConfig.from_mapping(overrides, default=cfg)


@contextmanager
def _open_input(path: str) -> Iterator[TextIO]:
    if path == "-":
        yield sys.stdin
        return
    with open(path, encoding="utf-8") as handle:
        yield handle


def iter_outcomes(lines: TextIO, convert: Callable[[str], Any]) -> Iterator[Outcome[Any, Exception]]:
    """Lazily convert each line (trailing newline removed)."""
    for line in lines:
        yield attempt(convert, line.rstrip("\r\n"))


def _render(value: Any, kind: str) -> str:
    if kind == "json":
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def run(args: argparse.Namespace) -> None:
    """Execute the `parse` command."""
    cfg = resolve_config(args, Path.cwd())
    logger, event_logger = configure_logging(cfg=cfg)

    port: LoggingPort = LoggerPort(logger)
    if event_logger is not None:
        port = FanOutPort(port, JsonlPort(event_logger))

    convert = _CONVERTERS[args.kind]
    severity: Optional[Severity] = cfg.severity
    with _open_input(args.path) as lines:
        for value in wrap_with_reporting(iter_outcomes(lines, convert), severity, port=port):
            print(_render(value, args.kind))

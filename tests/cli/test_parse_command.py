from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from skiperror.cli.commands import parse as parse_cmd
from skiperror.cli.main import build_arg_parser, main
from skiperror.config import ConfigError
from skiperror.severity import Severity


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty working directory with no config file and no SKIPERROR_* variables."""
    for name in ("SKIPERROR_SEVERITY", "SKIPERROR_LOG_DIR", "SKIPERROR_WRITE_JSONL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _log_text(log_dir: Path) -> str:
    logs = sorted(log_dir.glob("run_*.log"))
    assert len(logs) == 1
    return logs[0].read_text(encoding="utf-8")


def test_parse_file_prints_successes_and_logs_failures(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    src = workdir / "numbers.txt"
    src.write_text("1\n2\nthree\n4\n", encoding="utf-8")

    main(["parse", str(src), "--severity", "warn", "--log-dir", str(workdir / "logs")])

    assert capsys.readouterr().out == "1\n2\n4\n"
    text = _log_text(workdir / "logs")
    assert "severity=WARN | WARNING | invalid literal for int() with base 10: 'three'" in text


def test_parse_reads_stdin(workdir: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("1.5\nnan-ish\n-2\n"))

    main(["parse", "-", "--as", "float", "--log-dir", str(workdir / "logs")])

    assert capsys.readouterr().out == "1.5\n-2.0\n"


def test_parse_json_lines_with_jsonl_events(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    src = workdir / "records.jsonl"
    src.write_text('{"id": 1}\n{broken\n[1, 2]\n', encoding="utf-8")

    main(["parse", str(src), "--as", "json", "--severity", "error", "--jsonl", "--log-dir", str(workdir / "logs")])

    assert capsys.readouterr().out == '{"id": 1}\n[1, 2]\n'
    events_files = list((workdir / "logs").glob("events_*.jsonl"))
    assert len(events_files) == 1
    events = [json.loads(l) for l in events_files[0].read_text(encoding="utf-8").splitlines()]
    assert len(events) == 1
    assert events[0]["event"] == "item_skipped"
    assert events[0]["level"] == "ERROR"
    assert "Expecting property name" in events[0]["message"]


def test_parse_severity_none_logs_nothing(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    src = workdir / "numbers.txt"
    src.write_text("x\n7\n", encoding="utf-8")

    main(["parse", str(src), "--severity", "none", "--log-dir", str(workdir / "logs")])

    assert capsys.readouterr().out == "7\n"
    assert "invalid literal" not in _log_text(workdir / "logs")


def test_parse_unknown_severity_raises(workdir: Path) -> None:
    with pytest.raises(ConfigError, match="--severity"):
        main(["parse", "-", "--severity", "loud", "--log-dir", str(workdir / "logs")])


def test_resolve_config_precedence(workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (workdir / "skiperror.yaml").write_text(
        "skiperror:\n  severity: error\n  log_dir: from_yaml\n", encoding="utf-8"
    )
    parser = build_arg_parser()

    cfg = parse_cmd.resolve_config(parser.parse_args(["parse"]), workdir)
    assert cfg.severity is Severity.ERROR
    assert cfg.log_dir == Path("from_yaml")

    monkeypatch.setenv("SKIPERROR_SEVERITY", "debug")
    cfg = parse_cmd.resolve_config(parser.parse_args(["parse"]), workdir)
    assert cfg.severity is Severity.DEBUG

    cfg = parse_cmd.resolve_config(parser.parse_args(["parse", "--severity", "trace", "--log-dir", "cli"]), workdir)
    assert cfg.severity is Severity.TRACE
    assert cfg.log_dir == Path("cli")


def test_iter_outcomes_strips_line_endings() -> None:
    outcomes = list(parse_cmd.iter_outcomes(io.StringIO("1\r\n2\n"), int))
    assert [o.value for o in outcomes] == [1, 2]  # type: ignore[union-attr]

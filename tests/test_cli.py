"""CLI integration tests for batch conversion and strategy detection."""

from __future__ import annotations

from pathlib import Path
from typing import List

import pytest
import yaml
from typer.testing import CliRunner

from spoolcsv import cli


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


def _config(tmp_path: Path, **changes: object) -> Path:
    data = {
        "input_directory": str(tmp_path / "in"),
        "output_directory": str(tmp_path / "out"),
        "header_columns": ["ID", "NAME"],
        "lines_to_skip": {"top": 1, "bottom": 1},
        "footer_marker": "rows selected",
        "logs": {"base_directory": str(tmp_path / "logs")},
    }
    data.update(changes)
    path = tmp_path / "settings.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def _spool(path: Path, lines: List[str]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_run_converts_every_file(cli_runner: CliRunner, tmp_path: Path, sample_spool: List[str]) -> None:
    cfg = _config(tmp_path)
    _spool(tmp_path / "in" / "customers.txt", sample_spool)
    _spool(tmp_path / "in" / "ignored.csv", sample_spool)

    result = cli_runner.invoke(cli.app, ["run", "--config", str(cfg)])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "out" / "customers.csv").read_text(encoding="utf-8") == "ID,NAME\n1,Alice\n2,Bob\n"
    assert not (tmp_path / "out" / "ignored.csv").exists()
    assert "Successfully processed: 1 files" in result.output
    assert list((tmp_path / "logs" / "Success").glob("success_*.log"))
    assert list((tmp_path / "logs" / "ConsoleLog").glob("console_*.log"))


def test_run_with_no_input_files(cli_runner: CliRunner, tmp_path: Path) -> None:
    cfg = _config(tmp_path)

    result = cli_runner.invoke(cli.app, ["run", "-c", str(cfg)])

    assert result.exit_code == 0, result.output
    assert "No files found to process" in result.output
    assert (tmp_path / "in").is_dir()


def test_run_reports_failed_files(cli_runner: CliRunner, tmp_path: Path, sample_spool: List[str]) -> None:
    cfg = _config(tmp_path)
    _spool(tmp_path / "in" / "good.txt", sample_spool)
    bad = tmp_path / "in" / "bad.txt"
    bad.write_bytes(b"\xff\xfe\x00garbage")

    result = cli_runner.invoke(cli.app, ["run", "-c", str(cfg)])

    assert result.exit_code == 1, result.output
    assert (tmp_path / "out" / "good.csv").exists()
    assert "Failed files: 1" in result.output
    errors = list((tmp_path / "logs" / "Errors").glob("error_*.log"))
    assert len(errors) == 1
    assert "bad.txt" in errors[0].read_text(encoding="utf-8")


def test_run_with_output_override(cli_runner: CliRunner, tmp_path: Path, sample_spool: List[str]) -> None:
    cfg = _config(tmp_path)
    _spool(tmp_path / "in" / "customers.txt", sample_spool)
    target = tmp_path / "override"

    result = cli_runner.invoke(cli.app, ["run", "-c", str(cfg), "--output-dir", str(target)])

    assert result.exit_code == 0, result.output
    assert (target / "customers.csv").exists()


def test_run_rejects_invalid_config(cli_runner: CliRunner, tmp_path: Path) -> None:
    cfg = _config(tmp_path, header_columns=[])

    result = cli_runner.invoke(cli.app, ["run", "-c", str(cfg)])

    assert result.exit_code == 2
    assert "Configuration error" in result.output
    assert not (tmp_path / "out").exists()


def test_run_rejects_unusable_input_directory(cli_runner: CliRunner, tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    cfg = _config(tmp_path, input_directory=str(blocker / "in"))

    result = cli_runner.invoke(cli.app, ["run", "-c", str(cfg)])

    assert result.exit_code == 2
    assert "Cannot create directory" in result.output


def test_unknown_log_level(cli_runner: CliRunner, tmp_path: Path) -> None:
    cfg = _config(tmp_path)

    result = cli_runner.invoke(cli.app, ["--log-level", "LOUD", "run", "-c", str(cfg)])

    assert result.exit_code != 0


def test_detect_shows_strategy(cli_runner: CliRunner, tmp_path: Path, sample_spool: List[str]) -> None:
    cfg = _config(tmp_path)
    source = _spool(tmp_path / "in" / "customers.txt", sample_spool)

    result = cli_runner.invoke(cli.app, ["detect", str(source), "-c", str(cfg)])

    assert result.exit_code == 0, result.output
    assert "Strategy: Column-based parsing (header_guided)" in result.output
    assert "Column starts: [0, 5] widths: [2, 4]" in result.output
    assert "Footer marker line: 6" in result.output
    assert "Rows: 2" in result.output
    assert not (tmp_path / "out").exists()

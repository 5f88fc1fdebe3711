from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from spoolcsv.config import AppSettings, validate_settings
from spoolcsv.core import logger as core_logger


@pytest.fixture(autouse=True)
def _fresh_logger() -> None:
    """Drop handlers bound to streams that CliRunner closes between tests."""

    core_logger.reset_logger()
    yield
    core_logger.reset_logger()


@pytest.fixture()
def make_settings(tmp_path: Path) -> Callable[..., AppSettings]:
    def _make(**overrides: Any) -> AppSettings:
        data: dict[str, Any] = {
            "input_directory": str(tmp_path / "in"),
            "output_directory": str(tmp_path / "out"),
            "header_columns": ["ID", "NAME"],
            "lines_to_skip": {"top": 1, "bottom": 1},
            "logs": {"base_directory": str(tmp_path / "logs")},
        }
        data.update(overrides)
        return validate_settings(data)

    return _make


@pytest.fixture()
def sample_spool() -> list[str]:
    return [
        "SELECT id, name FROM customers;",
        "ID   NAME",
        "--   ----",
        "1    Alice",
        "2    Bob",
        "5 rows selected",
    ]

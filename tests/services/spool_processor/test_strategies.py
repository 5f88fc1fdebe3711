"""Tests for the ordered strategy cascade."""

from __future__ import annotations

import pytest

from spoolcsv.services.spool_processor.models import (
    FixedWidth,
    HeaderSpec,
    ParsedRows,
    PositionBased,
    StrategyContext,
)
from spoolcsv.services.spool_processor.strategies import (
    COMPOUND_DELIMITED,
    HEADER_GUIDED,
    STRATEGIES,
    STRUCTURE_DETECTION,
    Strategy,
    compound_delimited,
    header_guided,
    run_cascade,
    structure_detection,
)


def _ctx(*columns: str, marker: str | None = None) -> StrategyContext:
    return StrategyContext(header=HeaderSpec.of(columns), footer_marker=marker)


def test_strategy_order_is_declared() -> None:
    assert [s.name for s in STRATEGIES] == [HEADER_GUIDED, STRUCTURE_DETECTION, COMPOUND_DELIMITED]


def test_header_and_ruler_use_fixed_width_parsing() -> None:
    lines = ["ID   NAME", "--   ----", "1    Alice", "2    Bob"]

    parsed = run_cascade(lines, _ctx("ID", "NAME"))

    assert parsed.strategy == HEADER_GUIDED
    assert parsed.layout == FixedWidth(starts=(0, 5), widths=(2, 4))
    assert parsed.rows == [["1", "Alice"], ["2", "Bob"]]


def test_header_as_last_line_is_not_usable() -> None:
    assert header_guided(["1    Alice", "ID   NAME"], _ctx("ID", "NAME")) is None


def test_ruler_mismatch_falls_back_to_structure_detection() -> None:
    lines = ["ID   NAME", "-- - ----", "1    Alice", "2    Bob"]

    assert header_guided(lines, _ctx("ID", "NAME")) is None

    parsed = run_cascade(lines, _ctx("ID", "NAME"))

    assert parsed.strategy == STRUCTURE_DETECTION
    assert parsed.layout == PositionBased(starts=(0, 5))
    # the header and ruler lines are part of the content this strategy sees
    assert parsed.rows[0] == ["ID", "NAME"]
    assert parsed.rows[-2:] == [["1", "Alice"], ["2", "Bob"]]


def test_headerless_aligned_data_uses_positions() -> None:
    lines = ["1001  2025-04-09  150.00", "1002  2025-04-10   75.50", "1003  2025-04-11    9.99"]

    parsed = run_cascade(lines, _ctx("ACCOUNT", "TXN_DATE", "AMOUNT"))

    assert parsed.strategy == STRUCTURE_DETECTION
    assert parsed.rows[1] == ["1002", "2025-04-10", "75.50"]


def test_ragged_lines_fall_through_to_compound_parsing() -> None:
    lines = ["1 Alice Smith Corp", "22 Bob Jones Ltd"]

    parsed = run_cascade(lines, _ctx("ID", "FIRST", "COMPANY"))

    assert parsed.strategy == COMPOUND_DELIMITED
    assert parsed.layout is None
    assert parsed.rows == [["1", "Alice", "Smith Corp"], ["22", "Bob", "Jones Ltd"]]


def test_compound_strategy_always_returns_rows() -> None:
    parsed = compound_delimited([], _ctx("ID"))

    assert parsed == ParsedRows(strategy=COMPOUND_DELIMITED, label=parsed.label, rows=[])


def test_structure_detection_stops_at_footer_marker() -> None:
    lines = ["1    Alice", "2    Bob", "2 rows selected", "3    Ghost"]

    parsed = structure_detection(lines, _ctx("ID", "NAME", marker="rows selected"))

    assert parsed is not None
    assert parsed.rows == [["1", "Alice"], ["2", "Bob"]]


def test_cascade_commits_to_first_success() -> None:
    calls: list[str] = []

    def declines(lines, ctx):  # type: ignore[no-untyped-def]
        calls.append("declines")
        return None

    def accepts(lines, ctx):  # type: ignore[no-untyped-def]
        calls.append("accepts")
        return ParsedRows(strategy="accepts", label="Accepts", rows=[["x"]])

    def never(lines, ctx):  # type: ignore[no-untyped-def]
        calls.append("never")
        return None

    strategies = [Strategy("declines", "", declines), Strategy("accepts", "", accepts), Strategy("never", "", never)]

    parsed = run_cascade(["x"], _ctx("A"), strategies)

    assert parsed.strategy == "accepts"
    assert calls == ["declines", "accepts"]


def test_cascade_without_terminal_strategy_raises() -> None:
    with pytest.raises(ValueError):
        run_cascade(["x"], _ctx("A"), [Strategy("declines", "", lambda lines, ctx: None)])

"""Ordered parsing strategies for spool content.

Each strategy maps ``(content lines, context)`` to :class:`ParsedRows` or
``None``. :func:`run_cascade` tries them in declaration order and commits to
the first result; the last strategy never returns ``None``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .header import find_header_line
from .models import ParsedRows, StrategyContext
from .parsers import parse_compound_lines, parse_fixed_width_lines, parse_position_lines
from .positions import detect_column_positions, sample_lines
from .widths import detect_column_widths

LOGGER = logging.getLogger(__name__)

StrategyFn = Callable[[Sequence[str], StrategyContext], Optional[ParsedRows]]

HEADER_GUIDED = "header_guided"
STRUCTURE_DETECTION = "structure_detection"
COMPOUND_DELIMITED = "compound_delimited"

_LABELS = {
    HEADER_GUIDED: "Column-based parsing",
    STRUCTURE_DETECTION: "Intelligent data structure detection",
    COMPOUND_DELIMITED: "Delimiter-based parsing with compound values",
}


@dataclass(frozen=True)
class Strategy:
    name: str
    label: str
    parse: StrategyFn


def header_guided(lines: Sequence[str], ctx: StrategyContext) -> Optional[ParsedRows]:
    """Use a located header line and the ruler under it as fixed-width guide."""

    header_idx = find_header_line(lines, ctx.header.columns)
    if header_idx is None or header_idx + 1 >= len(lines):
        LOGGER.info("No header line found")
        return None

    LOGGER.info("Header line found at content line %s", header_idx + 1)
    layout = detect_column_widths(lines[header_idx], lines[header_idx + 1], ctx.header.count)
    if layout is None:
        LOGGER.info("Could not determine column widths from header")
        return None

    LOGGER.info("Detected %s columns using header line; using fixed-width parsing", layout.column_count)
    rows = parse_fixed_width_lines(lines[header_idx + 2 :], layout.starts, layout.widths)
    return ParsedRows(strategy=HEADER_GUIDED, label=_LABELS[HEADER_GUIDED], rows=rows, layout=layout)


def _cut_at_footer(lines: Sequence[str], marker: Optional[str]) -> Sequence[str]:
    if not marker:
        return lines
    for idx, line in enumerate(lines):
        if marker in line:
            LOGGER.info("Footer marker %r inside content at line %s; keeping %s lines", marker, idx + 1, idx)
            return lines[:idx]
    return lines


def structure_detection(lines: Sequence[str], ctx: StrategyContext) -> Optional[ParsedRows]:
    """Infer column starts from a data sample and parse by position."""

    content = _cut_at_footer(lines, ctx.footer_marker)
    sample = sample_lines(content, ctx.sample_size)
    layout = detect_column_positions(sample, ctx.header.count)
    if layout is None:
        return None

    LOGGER.info("Detected %s column positions from data analysis; using position-based parsing", layout.column_count)
    rows = parse_position_lines(content, layout.starts)
    return ParsedRows(strategy=STRUCTURE_DETECTION, label=_LABELS[STRUCTURE_DETECTION], rows=rows, layout=layout)


def compound_delimited(lines: Sequence[str], ctx: StrategyContext) -> ParsedRows:
    """Split on whitespace and fold the overflow into the last column."""

    LOGGER.info("Using delimiter-based parsing with compound value handling")
    content = _cut_at_footer(lines, ctx.footer_marker)
    rows = parse_compound_lines(content, ctx.header.count)
    return ParsedRows(strategy=COMPOUND_DELIMITED, label=_LABELS[COMPOUND_DELIMITED], rows=rows)


STRATEGIES: tuple[Strategy, ...] = (
    Strategy(HEADER_GUIDED, _LABELS[HEADER_GUIDED], header_guided),
    Strategy(STRUCTURE_DETECTION, _LABELS[STRUCTURE_DETECTION], structure_detection),
    Strategy(COMPOUND_DELIMITED, _LABELS[COMPOUND_DELIMITED], compound_delimited),
)


def run_cascade(
    lines: Sequence[str],
    ctx: StrategyContext,
    strategies: Sequence[Strategy] = STRATEGIES,
) -> ParsedRows:
    """Run ``strategies`` in order and return the first result."""

    for strategy in strategies:
        parsed = strategy.parse(lines, ctx)
        if parsed is not None:
            LOGGER.info("Strategy %s produced %s rows", strategy.name, len(parsed.rows))
            return parsed
        LOGGER.debug("Strategy %s declined, falling back", strategy.name)
    raise ValueError("strategy list must end with a strategy that always succeeds")


__all__ = [
    "COMPOUND_DELIMITED",
    "HEADER_GUIDED",
    "STRATEGIES",
    "STRUCTURE_DETECTION",
    "Strategy",
    "compound_delimited",
    "header_guided",
    "run_cascade",
    "structure_detection",
]

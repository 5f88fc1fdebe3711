"""Line parsers turning spool text into raw field lists."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from .cleaning import clean_text, is_blank
from .models import DataRow


def split_at_positions(line: str, starts: Sequence[int]) -> DataRow:
    """Slice ``line`` into one trimmed field per column start.

    Each column ends where the next one starts; the last runs to the end of
    the line. Offsets past the end of the line give empty fields.
    """

    fields: DataRow = []
    length = len(line)
    for idx, start in enumerate(starts):
        end = starts[idx + 1] if idx + 1 < len(starts) else length
        if start >= length:
            fields.append("")
            continue
        fields.append(line[start : min(end, length)].strip())
    return fields


def split_compound(line: str, column_count: int) -> DataRow:
    """Tokenize on whitespace, folding surplus tokens into the last column.

    ``"1 Alice Smith Corp"`` with three columns gives
    ``["1", "Alice", "Smith Corp"]``; short lines are padded with ``""``.
    """

    tokens = line.split()
    if len(tokens) <= column_count:
        return tokens + [""] * (column_count - len(tokens))
    head = tokens[: column_count - 1]
    return head + [" ".join(tokens[column_count - 1 :])]


def _keep(fields: DataRow) -> bool:
    return any(not is_blank(f) for f in fields)


def parse_position_lines(lines: Iterable[str], starts: Sequence[int]) -> List[DataRow]:
    """Parse lines with known column starts, dropping blank and all-empty rows."""

    rows: List[DataRow] = []
    for line in lines:
        if is_blank(line):
            continue
        fields = split_at_positions(line, starts)
        if _keep(fields):
            rows.append(fields)
    return rows


def parse_fixed_width_lines(lines: Iterable[str], starts: Sequence[int], widths: Sequence[int]) -> List[DataRow]:
    """Parse lines laid out under a ruler.

    Column boundaries come from the ruler segment starts; ``widths`` only has
    to agree with them in length.
    """

    if len(starts) != len(widths):
        raise ValueError("each ruler segment needs both a start and a width")
    return parse_position_lines(lines, starts)


def parse_compound_lines(lines: Iterable[str], column_count: int) -> List[DataRow]:
    rows: List[DataRow] = []
    for line in lines:
        if is_blank(line):
            continue
        fields = split_compound(clean_text(line), column_count)
        if _keep(fields):
            rows.append(fields)
    return rows


__all__ = [
    "parse_compound_lines",
    "parse_fixed_width_lines",
    "parse_position_lines",
    "split_at_positions",
    "split_compound",
]

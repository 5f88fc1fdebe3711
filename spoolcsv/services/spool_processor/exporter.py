"""CSV rendering and persistence for parsed spool rows."""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import IO, Iterable, Optional, Sequence

from .cleaning import sanitize_field
from .models import DataRow, HeaderSpec

LINE_TERMINATOR = "\n"


def normalize_row(row: Sequence[str], width: int) -> DataRow:
    """Truncate or pad ``row`` with ``""`` to exactly ``width`` fields."""

    fields = list(row[:width])
    if len(fields) < width:
        fields.extend([""] * (width - len(fields)))
    return fields


def sanitize_row(row: Sequence[str], header: HeaderSpec, date_column_index: Optional[int] = None) -> DataRow:
    fields = normalize_row(row, header.count)
    return [sanitize_field(value, is_date_column=(idx == date_column_index)) for idx, value in enumerate(fields)]


def write_rows(
    handle: IO[str],
    rows: Iterable[Sequence[str]],
    header: HeaderSpec,
    date_column_index: Optional[int] = None,
) -> int:
    """Write the header and every sanitized row to ``handle``.

    ``csv.writer`` quotes any cell, header names included, that holds the
    delimiter, a double quote or a line break.
    """

    writer = csv.writer(handle, delimiter=header.delimiter, lineterminator=LINE_TERMINATOR)
    writer.writerow(header.columns)
    count = 0
    for row in rows:
        writer.writerow(sanitize_row(row, header, date_column_index))
        count += 1
    return count


def render_csv(
    rows: Iterable[Sequence[str]],
    header: HeaderSpec,
    date_column_index: Optional[int] = None,
) -> str:
    """Render the header line followed by one line per row."""

    buffer = io.StringIO()
    write_rows(buffer, rows, header, date_column_index)
    return buffer.getvalue()


def write_csv(
    path: Path,
    rows: Sequence[Sequence[str]],
    header: HeaderSpec,
    date_column_index: Optional[int] = None,
) -> int:
    """Overwrite ``path`` with the rendered CSV and return the data row count.

    An empty row set still writes the header line so every input leaves a
    current output behind. A failed write removes the temp file and keeps
    any previous output.
    """

    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8", newline="") as handle:
            count = write_rows(handle, rows, header, date_column_index)
        tmp_path.replace(path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    return count

"""Locate the column-name header line inside a content window."""

from __future__ import annotations

from typing import Optional, Sequence

HEADER_MATCH_RATIO = 0.7


def count_header_matches(line: str, columns: Sequence[str]) -> int:
    return sum(1 for name in columns if name in line)


def find_header_line(lines: Sequence[str], columns: Sequence[str]) -> Optional[int]:
    """Index of the first line naming at least 70% of ``columns``, else ``None``.

    Matching is case-sensitive substring containment, so a data row can also
    qualify; the first qualifying line wins.
    """

    threshold = len(columns) * HEADER_MATCH_RATIO
    for idx, line in enumerate(lines):
        if count_header_matches(line, columns) >= threshold:
            return idx
    return None

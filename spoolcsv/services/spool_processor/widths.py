"""Column-width detection from a header line and the ruler beneath it."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .models import FixedWidth

LOGGER = logging.getLogger(__name__)

RULER_CHARS = frozenset("-=_")


def ruler_segments(ruler_line: str) -> List[Tuple[int, int]]:
    """Return ``(start, width)`` for every run of ruler characters, left to right."""

    segments: List[Tuple[int, int]] = []
    start: Optional[int] = None
    for idx, char in enumerate(ruler_line):
        if char in RULER_CHARS:
            if start is None:
                start = idx
        elif start is not None:
            segments.append((start, idx - start))
            start = None
    if start is not None:
        segments.append((start, len(ruler_line) - start))
    return segments


def detect_column_widths(header_line: str, ruler_line: str, expected: int) -> Optional[FixedWidth]:
    """Read column spans off ``ruler_line``.

    Returns ``None`` when the ruler yields a different number of segments than
    ``expected`` so the caller can fall back to structure detection.
    """

    segments = ruler_segments(ruler_line)
    if len(segments) != expected:
        LOGGER.debug(
            "Ruler below header %r has %s segments, expected %s",
            header_line.strip(),
            len(segments),
            expected,
        )
        return None
    return FixedWidth(
        starts=tuple(start for start, _ in segments),
        widths=tuple(width for _, width in segments),
    )

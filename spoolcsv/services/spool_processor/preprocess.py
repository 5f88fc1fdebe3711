"""Trim echoed queries and summary footers from raw spool lines."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .models import ContentWindow, SkipBoundaries

LOGGER = logging.getLogger(__name__)


def find_footer_marker(lines: Sequence[str], marker: Optional[str]) -> Optional[int]:
    """Index of the last line containing ``marker``."""

    if not marker:
        return None
    for idx in range(len(lines) - 1, -1, -1):
        if marker in lines[idx]:
            return idx
    return None


def window_length(total: int, skip: SkipBoundaries) -> int:
    return max(0, total - skip.top - skip.bottom)


def build_content_window(
    lines: Sequence[str],
    skip: SkipBoundaries,
    footer_marker: Optional[str] = None,
) -> ContentWindow:
    """Drop ``skip.top`` leading and ``skip.bottom`` trailing lines.

    The footer marker is only reported; the configured bottom count is used
    whether or not the marker is found.
    """

    footer_index = find_footer_marker(lines, footer_marker)
    if footer_index is not None:
        LOGGER.info("Found footer marker %r at line %s", footer_marker, footer_index + 1)
        LOGGER.info("Keeping configured footer skip of %s lines", skip.bottom)

    length = window_length(len(lines), skip)
    content = tuple(lines[skip.top : skip.top + length])
    return ContentWindow(lines=content, skip=skip, total_lines=len(lines), footer_index=footer_index)

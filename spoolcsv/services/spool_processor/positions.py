"""Infer column start offsets from a sample of data lines.

Every sampled line contributes one vote to each character offset where it
has a non-whitespace character. Runs of occupied offsets become candidate
columns. When there are more candidates than configured columns, the densest
ones are kept in left-to-right order.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .models import PositionBased

LOGGER = logging.getLogger(__name__)

DEFAULT_SAMPLE_SIZE = 100


def sample_lines(lines: Sequence[str], sample_size: int = DEFAULT_SAMPLE_SIZE) -> List[str]:
    """Spread a sample of at most ``sample_size`` lines across ``lines``."""

    if len(lines) <= sample_size:
        return list(lines)
    stride = max(1, len(lines) // sample_size)
    return [line for idx, line in enumerate(lines) if idx % stride == 0][:sample_size]


def occupancy_histogram(lines: Sequence[str]) -> List[int]:
    width = max((len(line) for line in lines), default=0)
    histogram = [0] * width
    for line in lines:
        for idx, char in enumerate(line):
            if not char.isspace():
                histogram[idx] += 1
    return histogram


def candidate_starts(histogram: Sequence[int]) -> List[int]:
    """Offsets where occupancy rises from zero; the first column may start at 0."""

    starts: List[int] = []
    in_column = False
    for idx, count in enumerate(histogram):
        if count > 0 and not in_column:
            starts.append(idx)
            in_column = True
        elif count == 0 and in_column:
            in_column = False
    return starts


def column_densities(histogram: Sequence[int], starts: Sequence[int]) -> List[int]:
    densities = []
    for idx, start in enumerate(starts):
        end = starts[idx + 1] if idx + 1 < len(starts) else len(histogram)
        densities.append(sum(histogram[start:end]))
    return densities


def keep_densest(starts: Sequence[int], densities: Sequence[int], count: int) -> List[int]:
    # sorted() is stable, so equal densities keep the leftmost candidate
    ranked = sorted(range(len(starts)), key=lambda i: densities[i], reverse=True)[:count]
    return [starts[i] for i in sorted(ranked)]


def detect_column_positions(sample: Sequence[str], expected: int) -> Optional[PositionBased]:
    """Return ``expected`` column starts inferred from ``sample`` or ``None``."""

    histogram = occupancy_histogram(sample)
    starts = candidate_starts(histogram)
    LOGGER.debug("Occupancy scan over %s lines found %s candidate columns", len(sample), len(starts))

    if len(starts) > expected:
        starts = keep_densest(starts, column_densities(histogram, starts), expected)

    if len(starts) != expected:
        LOGGER.info(
            "Column position detection yielded %s positions but %s expected",
            len(starts),
            expected,
        )
        return None
    return PositionBased(starts=tuple(starts))

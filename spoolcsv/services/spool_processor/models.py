"""Data models used by the spool processor service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from spoolcsv.core.errors import ConfigError

RawDocument = Tuple[str, ...]
DataRow = List[str]


@dataclass(frozen=True, slots=True)
class SkipBoundaries:
    """Lines removed from the top and bottom of a raw document."""

    top: int
    bottom: int

    def __post_init__(self) -> None:
        if self.top < 0 or self.bottom < 0:
            raise ValueError("skip boundaries must be non-negative")


@dataclass(frozen=True, slots=True)
class ContentWindow:
    """Lines left after trimming boilerplate, plus where the footer marker sat."""

    lines: Tuple[str, ...]
    skip: SkipBoundaries
    total_lines: int
    footer_index: Optional[int] = None

    def __len__(self) -> int:
        return len(self.lines)


@dataclass(frozen=True, slots=True)
class HeaderSpec:
    """Configured output columns; its length is the expected column count."""

    columns: Tuple[str, ...]
    delimiter: str = ","

    def __post_init__(self) -> None:
        if not self.columns:
            raise ConfigError("header columns are required")
        if len(self.delimiter) != 1:
            raise ConfigError("delimiter must be exactly one character")
        if self.delimiter in "\"\r\n":
            raise ConfigError("delimiter cannot be a double quote or a line break")

    @classmethod
    def of(cls, columns: Sequence[str], delimiter: str = ",") -> "HeaderSpec":
        return cls(columns=tuple(columns), delimiter=delimiter)

    @property
    def count(self) -> int:
        return len(self.columns)


@dataclass(frozen=True, slots=True)
class FixedWidth:
    """Column spans read off a ruler line."""

    starts: Tuple[int, ...]
    widths: Tuple[int, ...]

    @property
    def column_count(self) -> int:
        return len(self.widths)


@dataclass(frozen=True, slots=True)
class PositionBased:
    """Column start offsets inferred from a data sample."""

    starts: Tuple[int, ...]

    @property
    def column_count(self) -> int:
        return len(self.starts)


ColumnLayout = Union[FixedWidth, PositionBased, None]


@dataclass(frozen=True, slots=True)
class StrategyContext:
    """Inputs shared by every parsing strategy for one file."""

    header: HeaderSpec
    footer_marker: Optional[str] = None
    sample_size: int = 100


@dataclass(slots=True)
class ParsedRows:
    """Rows produced by the strategy that won the cascade."""

    strategy: str
    label: str
    rows: List[DataRow]
    layout: ColumnLayout = None


@dataclass(slots=True)
class ProcessingResult:
    """Outcome of converting one input file."""

    file_name: str
    output_path: str = ""
    success: bool = False
    total_lines_read: int = 0
    skipped_lines_top: int = 0
    skipped_lines_bottom: int = 0
    content_lines: int = 0
    rows_written: int = 0
    strategy: str = ""
    strategy_label: str = ""
    error_message: str = ""
    error_type: str = ""
    error_trace: str = ""
    elapsed_seconds: float = 0.0

    @property
    def rows_per_second(self) -> float:
        return self.rows_written / max(1.0, self.elapsed_seconds)


__all__ = [
    "ColumnLayout",
    "ContentWindow",
    "DataRow",
    "FixedWidth",
    "HeaderSpec",
    "ParsedRows",
    "PositionBased",
    "ProcessingResult",
    "RawDocument",
    "SkipBoundaries",
    "StrategyContext",
]

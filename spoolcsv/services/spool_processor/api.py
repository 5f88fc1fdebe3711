"""Public API for the spool processor service."""

from __future__ import annotations

import logging
import time
import traceback
from pathlib import Path
from typing import Optional, Sequence

from spoolcsv.config import AppSettings
from spoolcsv.core.errors import FileAccessError

from .exporter import write_csv
from .models import ContentWindow, HeaderSpec, ParsedRows, ProcessingResult, RawDocument, SkipBoundaries, StrategyContext
from .preprocess import build_content_window
from .strategies import STRATEGIES, Strategy, run_cascade

LOGGER = logging.getLogger(__name__)


def header_spec(settings: AppSettings) -> HeaderSpec:
    return HeaderSpec.of(settings.header_columns, settings.delimiter)


def skip_boundaries(settings: AppSettings) -> SkipBoundaries:
    return SkipBoundaries(top=settings.lines_to_skip.top, bottom=settings.lines_to_skip.bottom)


def output_path_for(input_path: Path, output_dir: Path) -> Path:
    return output_dir / f"{input_path.stem}.csv"


def read_document(path: Path, encoding: str = "utf-8") -> RawDocument:
    """Read ``path`` as lines, accepting ``\\n``, ``\\r\\n`` and ``\\r`` endings."""

    try:
        with path.open("r", encoding=encoding, newline=None) as fh:
            return tuple(line.rstrip("\n") for line in fh)
    except (OSError, UnicodeDecodeError) as exc:
        raise FileAccessError(f"Cannot read input file {path}: {exc}") from exc


def parse_document(
    lines: Sequence[str],
    header: HeaderSpec,
    skip: SkipBoundaries,
    footer_marker: Optional[str] = None,
    strategies: Sequence[Strategy] = STRATEGIES,
) -> tuple[ContentWindow, ParsedRows]:
    """Window the raw lines and run the strategy cascade over the content."""

    window = build_content_window(lines, skip, footer_marker)
    ctx = StrategyContext(header=header, footer_marker=footer_marker)
    return window, run_cascade(window.lines, ctx, strategies)


def process_file(path: str | Path, settings: AppSettings) -> ProcessingResult:
    """Convert one spool file to ``<output_directory>/<stem>.csv``.

    Failures are recorded on the returned result instead of raised, so a batch
    can move on to the next file. Configuration problems are raised before the
    file is touched.
    """

    header = header_spec(settings)
    skip = skip_boundaries(settings)

    source = Path(path)
    output_path = output_path_for(source, settings.output_path)
    result = ProcessingResult(file_name=source.name, output_path=str(output_path))

    started = time.perf_counter()
    try:
        LOGGER.info("Reading file: %s", source.name)
        lines = read_document(source, settings.encoding)
        result.total_lines_read = len(lines)
        result.skipped_lines_top = skip.top
        result.skipped_lines_bottom = skip.bottom

        window, parsed = parse_document(lines, header, skip, settings.footer_marker)
        result.content_lines = len(window)
        result.strategy = parsed.strategy
        result.strategy_label = parsed.label

        try:
            rows_written = write_csv(output_path, parsed.rows, header, settings.date_column_index)
        except OSError as exc:
            raise FileAccessError(f"Cannot write output file {output_path}: {exc}") from exc
        result.rows_written = rows_written
        result.success = True
        LOGGER.info("Successfully processed %s: %s rows written", source.name, rows_written)
    except Exception as exc:  # noqa: BLE001 - one bad file must not stop the batch
        result.success = False
        result.error_message = str(exc)
        result.error_type = type(exc).__name__
        result.error_trace = traceback.format_exc()
        LOGGER.error("Error processing %s: %s", source.name, exc, exc_info=True)
    finally:
        result.elapsed_seconds = time.perf_counter() - started

    return result


def detect_file(path: str | Path, settings: AppSettings) -> tuple[ContentWindow, ParsedRows]:
    """Run the engine on one file without writing any output."""

    lines = read_document(Path(path), settings.encoding)
    return parse_document(lines, header_spec(settings), skip_boundaries(settings), settings.footer_marker)


__all__ = [
    "detect_file",
    "header_spec",
    "output_path_for",
    "parse_document",
    "process_file",
    "read_document",
    "skip_boundaries",
]

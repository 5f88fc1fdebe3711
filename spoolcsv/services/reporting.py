"""Reporting collaborators consuming per-file processing results."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Protocol

from spoolcsv.services.spool_processor.models import ProcessingResult

LOGGER = logging.getLogger(__name__)

SEPARATOR = "-" * 50


class ResultReporter(Protocol):
    """Anything that accepts a finished ``ProcessingResult``."""

    def __call__(self, result: ProcessingResult) -> None:  # pragma: no cover - interface definition
        ...


class ResultLog:
    """Append success and error entries to per-session log files."""

    def __init__(self, success_dir: Path, error_dir: Path, session_id: str) -> None:
        self.success_path = Path(success_dir) / f"success_{session_id}.log"
        self.error_path = Path(error_dir) / f"error_{session_id}.log"

    def __call__(self, result: ProcessingResult) -> None:
        if result.success:
            self.log_success(result)
        else:
            self.log_error(result)

    def log_success(self, result: ProcessingResult) -> None:
        lines = [
            f"[{_now()}] File processed successfully: {result.file_name}",
            f"Rows processed: {result.rows_written}",
            f"Parsing strategy: {result.strategy_label}",
            f"Processing time: {result.elapsed_seconds:.2f} seconds",
            SEPARATOR,
        ]
        self._append(self.success_path, lines)

    def log_error(self, result: ProcessingResult) -> None:
        lines = [
            f"[{_now()}] Error processing file: {result.file_name}",
            f"Error Message: {result.error_message}",
        ]
        if result.error_type:
            lines.append(f"Exception Type: {result.error_type}")
        if result.error_trace:
            lines.append(f"Stack Trace: {result.error_trace.rstrip()}")
        lines.append(SEPARATOR)
        self._append(self.error_path, lines)

    @staticmethod
    def _append(path: Path, lines: List[str]) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("a", encoding="utf-8") as fh:
                fh.write("\n".join(lines) + "\n")
        except OSError as exc:
            LOGGER.error("Failed to write to log file %s: %s", path, exc)


def _now() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


@dataclass
class BatchSummary:
    """Running totals over a batch; also usable as a reporter."""

    results: List[ProcessingResult] = field(default_factory=list)

    def __call__(self, result: ProcessingResult) -> None:
        self.results.append(result)

    @property
    def total_files(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return self.total_files - self.succeeded

    @property
    def total_rows(self) -> int:
        return sum(r.rows_written for r in self.results if r.success)

    @property
    def total_seconds(self) -> float:
        return sum(r.elapsed_seconds for r in self.results)

    @property
    def average_seconds(self) -> float:
        if not self.results:
            return 0.0
        return self.total_seconds / self.total_files

    def render(self) -> List[str]:
        lines = [
            "SUMMARY:",
            f"  Total files processed: {self.total_files}",
            f"  Successfully processed: {self.succeeded} files",
        ]
        if self.failed:
            lines.append(f"  Failed files: {self.failed}")
            lines.extend(f"    - {r.file_name}: {r.error_message}" for r in self.results if not r.success)
        lines.append(f"  Total rows processed: {self.total_rows:,}")
        lines.append(f"  Total execution time: {self.total_seconds:.2f} seconds")
        lines.append(f"  Average processing time: {self.average_seconds:.2f} seconds per file")
        return lines


def describe_result(result: ProcessingResult) -> List[str]:
    """Per-file detail lines for console output."""

    if not result.success:
        return [f"Error processing {result.file_name}: {result.error_message}"]
    return [
        f"Successfully processed {result.file_name}",
        f"  Lines read: {result.total_lines_read:,}",
        f"  Skipped lines (top): {result.skipped_lines_top}",
        f"  Skipped lines (bottom): {result.skipped_lines_bottom}",
        f"  Parsing strategy: {result.strategy_label}",
        f"  CSV rows written: {result.rows_written:,}",
        f"  Processing speed: {result.rows_per_second:,.0f} rows/second",
        f"  Output: {result.output_path}",
    ]


def prune_old_logs(directory: Path, retention_days: int) -> List[Path]:
    """Delete log files (rotated backups included) older than ``retention_days``.

    A retention of zero keeps everything.
    """

    if retention_days <= 0 or not directory.is_dir():
        return []
    cutoff = time.time() - retention_days * 86400
    removed: List[Path] = []
    for path in directory.rglob("*.log*"):
        if not path.is_file() or path.stat().st_mtime >= cutoff:
            continue
        try:
            path.unlink()
        except OSError as exc:
            LOGGER.warning("Could not remove old log %s: %s", path, exc)
            continue
        removed.append(path)
    if removed:
        LOGGER.info("Removed %s log files older than %s days", len(removed), retention_days)
    return removed

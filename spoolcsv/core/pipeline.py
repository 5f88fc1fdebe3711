from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Sequence

from spoolcsv.config import AppSettings
from spoolcsv.services.reporting import ResultReporter
from spoolcsv.services.spool_processor import ProcessingResult, process_file
from spoolcsv.services.spool_processor.api import header_spec

from .logger import get_logger


ProgressCB = Callable[[int, int, str], None]


class SpoolBatch:
    """Converts spool files one at a time and hands each result to reporters."""

    def __init__(
        self,
        settings: AppSettings,
        reporters: Sequence[ResultReporter] = (),
        progress_cb: ProgressCB | None = None,
        logger=None,
    ) -> None:
        # Surfaces a ConfigError before any file is opened.
        header_spec(settings)
        self.settings = settings
        self.reporters = list(reporters)
        self.progress_cb = progress_cb
        self.logger = logger or get_logger()

    def iter_results(self, paths: Iterable[Path]) -> Iterator[ProcessingResult]:
        ordered = list(paths)
        total = len(ordered)
        for index, path in enumerate(ordered, start=1):
            name = Path(path).name
            if self.progress_cb:
                self.progress_cb(index, total, name)
            self.logger.info("[%s/%s] Processing started: %s", index, total, name)
            result = process_file(path, self.settings)
            status = "completed" if result.success else "failed"
            self.logger.info(
                "File %s/%s %s in %.2f seconds", index, total, status, result.elapsed_seconds
            )
            for reporter in self.reporters:
                reporter(result)
            yield result

    def run(self, paths: Iterable[Path]) -> List[ProcessingResult]:
        return list(self.iter_results(paths))

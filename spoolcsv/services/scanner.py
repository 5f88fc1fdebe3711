"""Enumerate spool files waiting in the input directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List

from spoolcsv.core.errors import FileAccessError

LOGGER = logging.getLogger(__name__)


def scan_input_files(directory: Path, extensions: Iterable[str]) -> List[Path]:
    """Return files in ``directory`` with an allowed suffix, oldest first.

    Files are ordered by creation time and then by name so batches run in a
    stable order.

    Raises:
        FileAccessError: When ``directory`` does not exist.
    """

    if not directory.is_dir():
        raise FileAccessError(f"Input directory not found: {directory}")

    allowed = {ext.lower() for ext in extensions}
    files = [p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in allowed]
    files.sort(key=lambda p: (p.stat().st_ctime, p.name))

    if files:
        LOGGER.info("Found %s files to process in %s", len(files), directory)
    else:
        LOGGER.warning("No files with extensions %s found in %s", ", ".join(sorted(allowed)), directory)
    return files

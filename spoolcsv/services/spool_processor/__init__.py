"""Spool processor service package."""

from .api import detect_file, parse_document, process_file
from .models import HeaderSpec, ProcessingResult, SkipBoundaries
from .strategies import STRATEGIES, run_cascade

__all__ = [
    "HeaderSpec",
    "ProcessingResult",
    "STRATEGIES",
    "SkipBoundaries",
    "detect_file",
    "parse_document",
    "process_file",
    "run_cascade",
]

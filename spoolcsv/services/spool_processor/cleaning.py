"""Field sanitation helpers for spool rows."""

from __future__ import annotations

import re
from typing import Optional

import pandas as pd

NULL_TOKEN = "NULL"
DATE_OUTPUT_FORMAT = "%d-%b-%Y"

_WHITESPACE_RUN = re.compile(r"\s+")
_CONTROL_CHARS = re.compile(r"[\x00-\x1F\x7F]")
# Day/month/year triples with numeric or named months, optionally followed by a time.
_DATE_SHAPE = re.compile(
    r"^(\d{1,4}[-/. ](\d{1,2}|[A-Za-z]{3,9})[-/. ,]+\d{2,4}"
    r"|[A-Za-z]{3,9} \d{1,2},? \d{4})"
    r"(?:[ T]\d{1,2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?: ?[AaPp][Mm])?)?$"
)


def clean_text(value: str) -> str:
    """Collapse whitespace runs to one space and strip control characters."""

    if not value:
        return ""
    cleaned = _WHITESPACE_RUN.sub(" ", value).strip()
    return _CONTROL_CHARS.sub("", cleaned)


def is_blank(value: Optional[str]) -> bool:
    return value is None or value.strip() == ""


def normalize_date(value: str) -> Optional[str]:
    """Return ``value`` as ``DD-Mon-YYYY`` when it reads as a calendar date."""

    text = value.strip()
    if not _DATE_SHAPE.match(text):
        return None
    parsed = pd.to_datetime(text, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.strftime(DATE_OUTPUT_FORMAT)


def sanitize_field(value: Optional[str], *, is_date_column: bool = False) -> str:
    """Render one parsed value as an output cell.

    Blank values become ``NULL``. Values in the date column that parse as a
    date are reformatted; everything else is trimmed. Quoting is left to the
    CSV writer.
    """

    if is_blank(value):
        return NULL_TOKEN
    text = value.strip()
    if is_date_column:
        formatted = normalize_date(text)
        if formatted is not None:
            return formatted
    return text


__all__ = [
    "NULL_TOKEN",
    "clean_text",
    "is_blank",
    "normalize_date",
    "sanitize_field",
]

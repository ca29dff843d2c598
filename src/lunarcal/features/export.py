# src/lunarcal/features/export.py
from __future__ import annotations

"""
CSV export (Google Calendar import layout).

    <BOM>Subject,Start Date,All Day Event
    {title},{YYYY-MM-DD},TRUE
    ...

File save / clipboard are host capabilities; failures surface as ExportFailure.
"""

import csv
import io
import logging
from pathlib import Path
from typing import Callable, Union

from lunarcal.features.config import (
    CSV_ALL_DAY,
    CSV_BOM,
    CSV_FILENAME_FALLBACK_STEM,
    CSV_FILENAME_SUFFIX,
    CSV_HEADER,
    FILENAME_HOSTILE_CHARS,
)
from lunarcal.features.occurrences import ConversionResult

log = logging.getLogger("lunarcal.features.export")

ClipboardWriter = Callable[[str], None]


class ExportFailure(RuntimeError):
    """File save or clipboard write was unavailable or rejected by the host."""

    def __init__(self, target: str, message: str) -> None:
        super().__init__(f"{target}: {message}")
        self.target = target


def to_csv(result: ConversionResult) -> str:
    buf = io.StringIO()
    w = csv.writer(buf, lineterminator="\n")
    w.writerow(CSV_HEADER)
    title = result.anniversary.title
    for occ in result.occurrences:
        w.writerow([title, occ.solar_date.isoformat(), CSV_ALL_DAY])
    # rows are newline-separated, not terminated
    return CSV_BOM + buf.getvalue().rstrip("\n")


def sanitize_filename_stem(title: str) -> str:
    chars = []
    for ch in title:
        if ch in FILENAME_HOSTILE_CHARS or ord(ch) < 0x20 or ord(ch) == 0x7F:
            chars.append("_")
        else:
            chars.append(ch)
    # leading/trailing dots and spaces are rejected on Windows
    stem = "".join(chars).strip(" .")
    return stem or CSV_FILENAME_FALLBACK_STEM


def suggested_filename(result: ConversionResult) -> str:
    return sanitize_filename_stem(result.anniversary.title) + CSV_FILENAME_SUFFIX


def save_csv(result: ConversionResult, directory: Union[str, Path]) -> Path:
    """
    Write the CSV under ``directory`` using the suggested filename.
    """
    path = Path(directory).expanduser() / suggested_filename(result)
    text = to_csv(result)
    try:
        # BOM is already part of the text; newline="" keeps "\n" as-is
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(text)
    except OSError as e:
        log.exception("csv save failed: path=%s", path)
        raise ExportFailure("file", f"cannot write {path}: {e}") from e
    log.info("csv saved: path=%s rows=%d", path, len(result.occurrences))
    return path


def copy_csv(result: ConversionResult, clipboard: ClipboardWriter) -> str:
    """
    Hand the CSV text to a clipboard capability. Returns the copied text.
    """
    text = to_csv(result)
    try:
        clipboard(text)
    except Exception as e:
        log.exception("clipboard write failed")
        raise ExportFailure("clipboard", str(e) or type(e).__name__) from e
    return text

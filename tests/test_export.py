from __future__ import annotations

import re
from datetime import date

import pytest

from lunarcal.core.reference import read_reference_table
from lunarcal.features.export import (
    ExportFailure,
    copy_csv,
    save_csv,
    suggested_filename,
    to_csv,
)
from lunarcal.features.occurrences import ConversionResult, LunarAnniversary, generate_occurrences

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _result(title: str = "설날", month: int = 1, day: int = 1) -> ConversionResult:
    return generate_occurrences(read_reference_table(), LunarAnniversary(title, month, day), date(2025, 6, 1))


def test_csv_layout():
    result = _result()
    text = to_csv(result)

    assert text.startswith("\ufeff")
    lines = text[1:].split("\n")
    assert len(lines) == 1 + len(result.occurrences)
    assert lines[0] == "Subject,Start Date,All Day Event"
    assert lines[1] == "설날,2026-02-17,TRUE"
    for line in lines[1:]:
        subject, start, all_day = line.split(",")
        assert subject == "설날"
        assert DATE_RE.match(start)
        assert all_day == "TRUE"


def test_csv_quotes_title_with_comma():
    text = to_csv(_result(title='생신, "할머니"'))
    assert text.split("\n")[1] == '"생신, ""할머니""",2026-02-17,TRUE'


def test_csv_for_empty_result_is_header_only():
    empty = ConversionResult(anniversary=LunarAnniversary("x", 2, 30), today=date(2025, 1, 1))
    assert to_csv(empty) == "\ufeffSubject,Start Date,All Day Event"


@pytest.mark.parametrize(
    "title, filename",
    [
        ("설날", "설날_음력달력.csv"),
        ("a/b:c*d", "a_b_c_d_음력달력.csv"),
        ('<x>|"y"?\\', "_x___y____음력달력.csv"),
        ("...", "anniversary_음력달력.csv"),
    ],
)
def test_suggested_filename(title, filename):
    result = ConversionResult(anniversary=LunarAnniversary(title, 1, 1), today=date(2025, 1, 1))
    assert suggested_filename(result) == filename


def test_save_csv_writes_bom_and_rows(tmp_path):
    result = _result()
    path = save_csv(result, tmp_path)

    assert path == tmp_path / "설날_음력달력.csv"
    raw = path.read_bytes()
    assert raw.startswith(b"\xef\xbb\xbf")
    assert raw.decode("utf-8") == to_csv(result)


def test_save_csv_failure_is_reported(tmp_path):
    with pytest.raises(ExportFailure) as ei:
        save_csv(_result(), tmp_path / "no" / "such" / "dir")
    assert ei.value.target == "file"


def test_copy_csv_hands_text_to_clipboard():
    copied = []
    result = _result()
    text = copy_csv(result, copied.append)
    assert copied == [text]
    assert text == to_csv(result)


def test_copy_csv_failure_is_reported():
    def rejecting_clipboard(text: str) -> None:
        raise PermissionError("clipboard access denied")

    with pytest.raises(ExportFailure) as ei:
        copy_csv(_result(), rejecting_clipboard)
    assert ei.value.target == "clipboard"
    assert "denied" in str(ei.value)
    assert isinstance(ei.value.__cause__, PermissionError)

from __future__ import annotations

from pathlib import Path

import pytest

from competency_reformat.models.competency import TARGET_COLUMNS, InputRecord, OutputRow, ProgramContext
from competency_reformat.services.csv_writer import UTF8_BOM, quote_value, to_csv_string, write_csv
from competency_reformat.services.hierarchy import reformat


@pytest.mark.parametrize(
    "value,expected",
    [
        ("PE-K", "PE-K"),
        ("Knowledge", "Knowledge"),
        ("Theoretical Understanding", '"Theoretical Understanding"'),
        ("a,b", '"a,b"'),
        ('say "hi"', '"say ""hi"""'),
        ("line\nbreak", '"line\nbreak"'),
        ('[{"scaleid":"2"}]', '"[{""scaleid"":""2""}]"'),
        (1, "1"),
        ("", ""),
        (None, ""),
    ],
)
def test_quote_value(value, expected):
    assert quote_value(value) == expected


def test_to_csv_string_header_and_rows():
    rows = [OutputRow.from_columns({"ID number": "100", "Short name": "Physical Education", "Is framework": 1})]
    text = to_csv_string(rows)
    lines = text.split("\n")
    assert lines[0] == ",".join(TARGET_COLUMNS)
    fields = lines[1].split(",")
    assert fields[1] == "100"
    assert fields[2] == '"Physical Education"'
    assert fields[12] == "1"
    assert text.endswith("\n")


def test_to_csv_string_empty():
    assert to_csv_string([]) == ""


def test_to_csv_string_accepts_plain_dicts():
    text = to_csv_string([{"ID number": "X"}])
    assert text.splitlines()[1] == "," + "X" + "," * 12


def test_write_csv_has_bom(tmp_path: Path):
    records = [InputRecord("Physical Education", "Program desc"), InputRecord("Knowledge", "")]
    rows = reformat(records, ProgramContext("Physical Education", "100"))
    out = write_csv(tmp_path / "out.csv", rows)
    raw = out.read_bytes()
    assert raw.startswith(b"\xef\xbb\xbf")
    text = raw.decode("utf-8")
    assert text[0] == UTF8_BOM
    assert text[1:] == to_csv_string(rows)
    # scale configuration is quoted because of '['
    assert '"[{""scaleid"":""2""},{""id"":2,""scaledefault"":1,""proficient"":1}]"' in text

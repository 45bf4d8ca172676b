from __future__ import annotations

import json

from competency_reformat.models.error_record import ErrorRecord

"""Unit tests for the ErrorRecord model."""


def test_error_record_row_minus_one_support():
    """File-level errors carry row=-1."""
    rec = ErrorRecord.create(
        file="broken.xlsx",
        row=-1,
        error_type="PARSE_ERROR",
        message="File is not a zip file",
    )

    assert rec.row == -1
    data = json.loads(rec.to_json_line())
    assert data["row"] == -1
    assert data["file"] == "broken.xlsx"
    assert data["error_type"] == "PARSE_ERROR"
    assert data["message"] == "File is not a zip file"
    assert data["timestamp"].endswith("Z")
    assert set(data.keys()) == {"timestamp", "file", "row", "error_type", "message"}


def test_error_record_positive_row_number():
    rec = ErrorRecord.create("Nursing.csv", 7, "ORPHANED_ROW", "no default parent for 'Unrelated Topic'")
    assert json.loads(rec.to_json_line())["row"] == 7


def test_error_record_keeps_non_ascii():
    rec = ErrorRecord.create("قسم.csv", -1, "EMPTY_INPUT", "لا توجد بيانات")
    line = rec.to_json_line()
    assert "قسم.csv" in line
    assert "لا توجد بيانات" in line

from __future__ import annotations

import re
from datetime import datetime, timezone

import pytest

from competency_reformat.models.processing_result import FileStat, ProcessingResult
from competency_reformat.services.summary import render_summary_line

"""Unit tests for SUMMARY line rendering."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY files=\d+ success=\d+ skipped=\d+ failed=\d+ rows=\d+ orphaned=\d+ elapsed_sec=[0-9.]+$"
)


def _result(**kwargs) -> ProcessingResult:
    t = datetime(2024, 1, 1, tzinfo=timezone.utc)
    base = dict(
        success_files=0,
        skipped_files=0,
        failed_files=0,
        total_rows=0,
        orphaned_rows=0,
        start_time=t,
        end_time=t,
        elapsed_seconds=0.0,
    )
    base.update(kwargs)
    return ProcessingResult(**base)


def test_render_summary_line_format():
    line = render_summary_line(
        _result(success_files=3, skipped_files=1, failed_files=1, total_rows=120, orphaned_rows=2, elapsed_seconds=2.346)
    )
    assert SUMMARY_PATTERN.match(line)
    assert line == "SUMMARY files=5 success=3 skipped=1 failed=1 rows=120 orphaned=2 elapsed_sec=2.35"


@pytest.mark.parametrize(
    "seconds,rendered",
    [
        (0.0, "0"),
        (3.0, "3"),
        (1.5, "1.5"),
        (0.004, "0.004"),
        (12.3456, "12.35"),
    ],
)
def test_elapsed_formatting(seconds, rendered):
    line = render_summary_line(_result(elapsed_seconds=seconds))
    assert line.endswith(f"elapsed_sec={rendered}")
    assert "e-" not in line


def test_total_files_counts_every_status():
    result = _result(
        success_files=1,
        skipped_files=2,
        failed_files=3,
        file_stats=[FileStat("a.csv", "success", 10, 0, 0.1, "Reformatted - a.csv")],
    )
    assert result.total_files == 6
    assert render_summary_line(result).startswith("SUMMARY files=6 ")

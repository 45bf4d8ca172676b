from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from competency_reformat.cli import main as cli_main

"""Integration test: partial failure (one output cannot be written, others succeed).

- The failing file is reported, the batch continues
- Exit code 2
- SUMMARY counts success / skipped / failed separately
- The error log names the failing and the skipped file
"""


@pytest.fixture
def partial_failure_setup(temp_workdir: Path, write_config: Any, make_framework_file) -> dict[str, Path]:
    good = make_framework_file("Physical Education.csv")
    blocked = make_framework_file("Blocked.xlsx")
    empty = make_framework_file("Empty.csv", [["meta", ""], ["Name", "Description"]])
    # a directory where the output file should go makes the write fail
    (temp_workdir / "after-convert" / "Reformatted - Blocked.csv").mkdir()
    return {"good": good, "blocked": blocked, "empty": empty}


def test_run_partial_failure(partial_failure_setup, temp_workdir: Path, capsys):
    code = cli_main([])
    out = capsys.readouterr().out

    assert code == 2
    assert "SUMMARY files=3 success=1 skipped=1 failed=1 rows=11 orphaned=0" in out
    assert "ERROR Error writing" in out
    assert "WARN Skipping Empty.csv: Could not parse any meaningful data." in out

    assert (temp_workdir / "after-convert" / "Reformatted - Physical Education.csv").is_file()
    assert not (temp_workdir / "after-convert" / "Reformatted - Empty.csv").exists()

    log_files = list((temp_workdir / "logs").glob("errors-*.log"))
    assert len(log_files) == 1
    entries = [json.loads(line) for line in log_files[0].read_text(encoding="utf-8").splitlines()]
    assert {(e["file"], e["error_type"]) for e in entries} == {
        ("Blocked.xlsx", "IO_ERROR"),
        ("Empty.csv", "EMPTY_INPUT"),
    }


def test_run_continues_after_unreadable_file(temp_workdir: Path, write_config: Any, make_framework_file, capsys):
    (temp_workdir / "before-convert" / "AAA corrupt.xlsx").write_bytes(b"\x00\x01 not excel")
    make_framework_file("Physical Education.csv")

    code = cli_main([])
    out = capsys.readouterr().out

    # skipped files do not change the exit code
    assert code == 0
    assert "success=1 skipped=1 failed=0" in out
    assert "WARN Skipping AAA corrupt.xlsx: could not parse file:" in out

# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pytest

from competency_reformat.logging.init import reset_logging
from competency_reformat.models.competency import InputRecord

PE_ROWS: list[list[object]] = [
    ["Physical Education - Program Learning Outcomes", ""],
    ["Name", "Description"],
    ["Physical Education", "Program desc"],
    ["Knowledge", ""],
    ["Theoretical Understanding", ""],
    ["K1", "Outcome 1"],
    ["K2", "Outcome 2"],
    ["Skills", ""],
    ["Generic Problem Solving", ""],
    ["S1", "Solve problems, in teams"],
    ["Competence", ""],
    ["Autonomy & Responsibility", ""],
    ["C1", "Act \"independently\""],
]


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "before-convert").mkdir()
        (p / "after-convert").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("REFORMAT_SOURCE_DIR", "REFORMAT_OUTPUT_DIR", "REFORMAT_LOG_DIR", "REFORMAT_DEFAULT_ROOT_ID"):
        monkeypatch.delenv(var, raising=False)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./before-convert
output_directory: ./after-convert
log_directory: ./logs
default_root_id: "2299"
interactive: false
root_ids:
  Physical Education.csv: "100"
program_prefixes:
  قسم التربية البدنية: PE
seed_major_areas: false
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "reformat.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def _write_csv(path: Path, rows: list[list[object]]) -> Path:
    pd.DataFrame(rows).to_csv(path, header=False, index=False, encoding="utf-8")
    return path


def _write_xlsx(path: Path, rows: list[list[object]]) -> Path:
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name="Outcomes", header=False, index=False)
    return path


@pytest.fixture()
def make_framework_file(temp_workdir: Path) -> Callable[..., Path]:
    """Write a two-row-header framework file into before-convert/ (suffix picks the format)."""
    def _make(name: str, rows: list[list[object]] | None = None) -> Path:
        path = temp_workdir / "before-convert" / name
        data = PE_ROWS if rows is None else rows
        if path.suffix.lower() == ".csv":
            return _write_csv(path, data)
        return _write_xlsx(path, data)
    return _make


@pytest.fixture()
def pe_records() -> list[InputRecord]:
    return [
        InputRecord("Physical Education", "Program desc"),
        InputRecord("Knowledge", ""),
        InputRecord("Theoretical Understanding", ""),
        InputRecord("K1", "Outcome 1"),
    ]

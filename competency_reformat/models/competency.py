from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, fields

"""Competency domain models: input records, program context and output rows.

The output schema is fixed by the competency-management importer; the column
order below is the order of the generated CSV.
"""

__all__ = [
    "TARGET_COLUMNS",
    "FRAMEWORK_STANDARD_VALUES",
    "ROW_STANDARD_VALUES",
    "DEFAULT_ROOT_ID",
    "InputRecord",
    "ProgramContext",
    "OutputRow",
]

TARGET_COLUMNS: tuple[str, ...] = (
    "Parent ID number",
    "ID number",
    "Short name",
    "Description",
    "Description format",
    "Scale values",
    "Scale configuration",
    "Rule type (optional)",
    "Rule outcome (optional)",
    "Rule config (optional)",
    "Cross-referenced competency ID numbers",
    "Exported ID (optional)",
    "Is framework",
    "Taxonomy",
)

TAXONOMY = "competency,competency,competency,competency,competency"

# Framework row carries the proficiency scale; child rows inherit it in the target system
FRAMEWORK_STANDARD_VALUES: dict[str, object] = {
    "Description format": 1,
    "Scale values": "Not yet competent,Competent",
    "Scale configuration": '[{"scaleid":"2"},{"id":2,"scaledefault":1,"proficient":1}]',
    "Taxonomy": TAXONOMY,
}

ROW_STANDARD_VALUES: dict[str, object] = {
    "Description format": 1,
    "Scale values": "",
    "Scale configuration": "",
    "Taxonomy": TAXONOMY,
}

DEFAULT_ROOT_ID = "2299"


@dataclass(frozen=True)
class InputRecord:
    """One source row (Name / Description columns), in file order."""
    name: str
    description: str = ""


@dataclass(frozen=True)
class ProgramContext:
    """Per-file context supplied by the batch driver."""
    program_name: str  # source file base name without extension
    root_id: str = DEFAULT_ROOT_ID  # framework ID number in the target system


@dataclass(frozen=True)
class OutputRow(Mapping[str, object]):
    """One row of the 14-column import schema.

    Behaves as a read-only mapping keyed by the column headers, so
    ``row["ID number"]`` and ``dict(row)`` both work; attributes use the
    snake_case names.
    """
    parent_id_number: str = ""
    id_number: str = ""
    short_name: str = ""
    description: str = ""
    description_format: object = ""
    scale_values: str = ""
    scale_configuration: str = ""
    rule_type: str = ""
    rule_outcome: str = ""
    rule_config: str = ""
    cross_referenced_competency_id_numbers: str = ""
    exported_id: str = ""
    is_framework: object = ""
    taxonomy: str = ""

    @classmethod
    def from_columns(cls, values: Mapping[str, object]) -> OutputRow:
        """Build a row from column-header keyed values; missing columns stay empty."""
        unknown = set(values) - set(TARGET_COLUMNS)
        if unknown:
            raise KeyError(f"unknown output columns: {sorted(unknown)}")
        kwargs = {_COLUMN_TO_FIELD[col]: val for col, val in values.items()}
        return cls(**kwargs)

    def __getitem__(self, column: str) -> object:
        try:
            return getattr(self, _COLUMN_TO_FIELD[column])
        except KeyError:
            raise KeyError(column) from None

    def __iter__(self) -> Iterator[str]:
        return iter(TARGET_COLUMNS)

    def __len__(self) -> int:
        return len(TARGET_COLUMNS)

    def as_dict(self) -> dict[str, object]:
        return {col: self[col] for col in TARGET_COLUMNS}


_COLUMN_TO_FIELD: dict[str, str] = {
    col: f.name for col, f in zip(TARGET_COLUMNS, fields(OutputRow), strict=True)
}

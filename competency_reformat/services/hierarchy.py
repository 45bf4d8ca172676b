from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from ..models.competency import (
    FRAMEWORK_STANDARD_VALUES,
    ROW_STANDARD_VALUES,
    InputRecord,
    OutputRow,
    ProgramContext,
)
from ..models.config_models import AreaDefinition, HierarchySettings
from .identifiers import synthesize_code, synthesize_program_prefix

"""Hierarchy reformatter: flat (name, description) records -> 14-column rows.

The first record is the framework itself. Every later record is placed in the
three-tier scheme (major area -> sub-area -> leaf outcome) by an ordered list
of (predicate, resolver) rules; the first matching rule wins. Areas seen while
scanning are remembered in a per-call table so later rows can reference them.

Placement never fails: anything unrecognised falls through to the generic rule,
which at worst emits the row at top level and reports a notice.
"""

__all__ = [
    "EmptyInputError",
    "NoticeKind",
    "HierarchyNotice",
    "HierarchyResult",
    "AreaNode",
    "build_hierarchy",
    "reformat",
]

logger = logging.getLogger(__name__)

LEAF_PATTERN = re.compile(r"^[KkSsCc]\d+$")


class EmptyInputError(Exception):
    """Raised when there is no record at all (not even the framework row)."""


class NoticeKind(Enum):
    ORPHANED_ROW = "ORPHANED_ROW"  # no parent could be inferred
    DETACHED_SUB_AREA = "DETACHED_SUB_AREA"  # sub-area seen before its major area


@dataclass(frozen=True)
class HierarchyNotice:
    """Degraded-but-accepted placement of one input row."""
    row: int  # 1-based position in the input records (framework = 1)
    name: str
    kind: NoticeKind
    message: str


@dataclass(frozen=True)
class AreaNode:
    id_number: str
    parent_id_number: str


@dataclass(frozen=True)
class HierarchyResult:
    rows: list[OutputRow]
    notices: list[HierarchyNotice]

    @property
    def orphaned_rows(self) -> int:
        return sum(1 for n in self.notices if n.kind is NoticeKind.ORPHANED_ROW)


@dataclass(frozen=True)
class _Placement:
    parent_id_number: str
    id_number: str


@dataclass
class _ScanState:
    """Mutable state of one reformat call; discarded afterwards."""
    prefix: str
    settings: HierarchySettings
    areas: dict[str, AreaDefinition]
    area_table: dict[str, AreaNode] = field(default_factory=dict)
    notices: list[HierarchyNotice] = field(default_factory=list)
    row: int = 0

    def notice(self, name: str, kind: NoticeKind, message: str) -> None:
        self.notices.append(HierarchyNotice(row=self.row, name=name, kind=kind, message=message))

    def default_parent(self, name: str) -> AreaNode | None:
        """Known sub-area adopting rows whose name starts with K/S/C."""
        label = self.settings.leaf_parents.get(name[:1].upper())
        if label is None:
            return None
        return self.area_table.get(label)


def _is_canonical_area(name: str, state: _ScanState) -> bool:
    return name in state.areas


def _resolve_canonical_area(name: str, state: _ScanState) -> _Placement:
    area = state.areas[name]
    id_number = f"{state.prefix}-{area.code}"
    parent_id = ""
    if not area.is_major:
        parent = state.area_table.get(area.parent or "")
        if parent is not None:
            parent_id = parent.id_number
        else:
            state.notice(
                name,
                NoticeKind.DETACHED_SUB_AREA,
                f"sub-area '{name}' precedes its major area '{area.parent}'; emitted without parent",
            )
    state.area_table[name] = AreaNode(id_number=id_number, parent_id_number=parent_id)
    return _Placement(parent_id, id_number)


def _is_leaf_outcome(name: str, state: _ScanState) -> bool:
    # an unseen default sub-area leaves the row to the generic rule
    return bool(LEAF_PATTERN.match(name)) and state.default_parent(name) is not None


def _resolve_leaf_outcome(name: str, state: _ScanState) -> _Placement:
    parent = state.area_table[state.settings.leaf_parents[name[0].upper()]]
    return _Placement(parent.id_number, f"{parent.id_number}-{name.upper()}")


def _always(name: str, state: _ScanState) -> bool:
    return True


def _resolve_generic(name: str, state: _ScanState) -> _Placement:
    code = synthesize_code(name)
    parent = state.default_parent(name)
    if parent is not None:
        return _Placement(parent.id_number, f"{parent.id_number}-{code}")
    state.notice(
        name,
        NoticeKind.ORPHANED_ROW,
        f"no parent area known for '{name}'; emitted at top level",
    )
    return _Placement("", f"{state.prefix}-{code}")


Rule = tuple[Callable[[str, _ScanState], bool], Callable[[str, _ScanState], _Placement]]

RULES: tuple[Rule, ...] = (
    (_is_canonical_area, _resolve_canonical_area),
    (_is_leaf_outcome, _resolve_leaf_outcome),
    (_always, _resolve_generic),
)


def _place(name: str, state: _ScanState) -> _Placement:
    for predicate, resolver in RULES:
        if predicate(name, state):
            return resolver(name, state)
    raise AssertionError("generic rule must match")  # pragma: no cover


def _program_prefix(records: Sequence[InputRecord], context: ProgramContext, settings: HierarchySettings) -> str:
    """Prefix from the program (file) name; the framework row name stands in when blank."""
    known = settings.program_prefixes
    for candidate in (context.program_name, records[0].name):
        if candidate in known:
            return known[candidate]
    source = context.program_name.strip() or records[0].name.strip()
    return synthesize_program_prefix(source, boilerplate=settings.boilerplate) or context.root_id


def build_hierarchy(
    records: Sequence[InputRecord],
    context: ProgramContext,
    settings: HierarchySettings | None = None,
) -> HierarchyResult:
    """Reformat one program's records, returning rows and placement notices.

    Raises:
        EmptyInputError: ``records`` is empty
    """
    if not records:
        raise EmptyInputError(f"no records for program '{context.program_name}'")
    settings = settings or HierarchySettings()

    framework = records[0]
    state = _ScanState(
        prefix=_program_prefix(records, context, settings),
        settings=settings,
        areas=settings.area_by_label(),
    )
    if settings.seed_major_areas:
        for area in settings.areas:
            if area.is_major:
                state.area_table[area.label] = AreaNode(f"{state.prefix}-{area.code}", "")

    rows = [
        OutputRow.from_columns({
            "Parent ID number": "",
            "ID number": context.root_id,
            "Short name": framework.name,
            "Description": framework.description,
            "Is framework": 1,
            **FRAMEWORK_STANDARD_VALUES,
        })
    ]

    for position, record in enumerate(records[1:], start=2):
        name = record.name.strip()
        if not name:
            continue
        state.row = position
        placement = _place(name, state)
        rows.append(
            OutputRow.from_columns({
                "Parent ID number": placement.parent_id_number,
                "ID number": placement.id_number,
                "Short name": record.name,
                "Description": record.description,
                "Is framework": "",
                **ROW_STANDARD_VALUES,
            })
        )

    logger.debug(
        "program=%s prefix=%s rows=%d notices=%d",
        context.program_name,
        state.prefix,
        len(rows),
        len(state.notices),
    )
    return HierarchyResult(rows=rows, notices=state.notices)


def reformat(
    records: Sequence[InputRecord],
    context: ProgramContext,
    settings: HierarchySettings | None = None,
) -> list[OutputRow]:
    """Reformat one program's records into output rows (framework row first)."""
    return build_hierarchy(records, context, settings).rows

from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the competency framework reformatter.

Two layers:
- ``HierarchySettings``: everything the pure hierarchy/identifier core needs
  (area table, leaf defaults, curated program prefixes, boilerplate phrases).
- ``ReformatConfig``: the batch-level settings (directories, root ids,
  prompting) plus one ``HierarchySettings``.
"""

__all__ = [
    "AreaDefinition",
    "DEFAULT_AREAS",
    "DEFAULT_LEAF_PARENTS",
    "DEFAULT_BOILERPLATE",
    "HierarchySettings",
    "ReformatConfig",
]


@dataclass(frozen=True)
class AreaDefinition:
    """A canonical area label and its fixed code.

    Major areas have ``parent=None``; sub-areas name their major area and use
    a compound code (``K-TU``) so the identifier reads ``{prefix}-K-TU``.
    """
    label: str
    code: str
    parent: str | None = None

    @property
    def is_major(self) -> bool:
        return self.parent is None


DEFAULT_AREAS: tuple[AreaDefinition, ...] = (
    AreaDefinition("Knowledge", "K"),
    AreaDefinition("Skills", "S"),
    AreaDefinition("Competence", "C"),
    AreaDefinition("Theoretical Understanding", "K-TU", "Knowledge"),
    AreaDefinition("Applied Knowledge", "K-AK", "Knowledge"),
    AreaDefinition("Practical Application", "K-PA", "Knowledge"),
    AreaDefinition("Communication Skills", "S-CS", "Skills"),
    AreaDefinition("Generic Problem Solving", "S-GPS", "Skills"),
    AreaDefinition("Critical Thinking", "S-CT", "Skills"),
    AreaDefinition("Autonomy & Responsibility", "C-AR", "Competence"),
)

# Leaf letter -> sub-area that adopts K1/S1/C1 style rows
DEFAULT_LEAF_PARENTS: dict[str, str] = {
    "K": "Theoretical Understanding",
    "S": "Generic Problem Solving",
    "C": "Autonomy & Responsibility",
}

# Longest first: phrases are stripped in order
DEFAULT_BOILERPLATE: tuple[str, ...] = (
    "مخرجات تعلم برنامج",
    "مخرجات برنامج",
    "Program Learning Outcomes",
    "Learning Outcomes of",
    "Outcomes of Program",
    "Outcomes of",
    "Department of",
    "Department",
    "قسم",
)


@dataclass(frozen=True)
class HierarchySettings:
    """Configuration of the hierarchy inference.

    ``program_prefixes`` is the curated program-name -> prefix table (empty by
    default: prefixes are then derived procedurally). ``seed_major_areas``
    pre-registers Knowledge/Skills/Competence before scanning, so sub-areas
    always get a parent even when the major-area row is absent.
    """
    areas: tuple[AreaDefinition, ...] = DEFAULT_AREAS
    leaf_parents: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_LEAF_PARENTS))
    program_prefixes: dict[str, str] = field(default_factory=dict)
    boilerplate: tuple[str, ...] = DEFAULT_BOILERPLATE
    seed_major_areas: bool = False

    def area_by_label(self) -> dict[str, AreaDefinition]:
        return {a.label: a for a in self.areas}


@dataclass(frozen=True)
class ReformatConfig:
    """Root configuration object for a batch run."""
    source_directory: str = "./before-convert"  # scanned non-recursively
    output_directory: str = "./after-convert"
    log_directory: str = "./logs"  # JSON Lines error log destination
    default_root_id: str = "2299"
    interactive: bool = True  # ask for a root id per file
    root_ids: dict[str, str] = field(default_factory=dict)  # file name or stem -> root id
    hierarchy: HierarchySettings = field(default_factory=HierarchySettings)

"""Domain models for the competency framework reformatter."""

from .competency import (
    DEFAULT_ROOT_ID,
    FRAMEWORK_STANDARD_VALUES,
    ROW_STANDARD_VALUES,
    TARGET_COLUMNS,
    InputRecord,
    OutputRow,
    ProgramContext,
)
from .config_models import AreaDefinition, HierarchySettings, ReformatConfig

__all__ = [
    # Competency records
    "DEFAULT_ROOT_ID",
    "FRAMEWORK_STANDARD_VALUES",
    "ROW_STANDARD_VALUES",
    "TARGET_COLUMNS",
    "InputRecord",
    "OutputRow",
    "ProgramContext",
    # Configuration models
    "AreaDefinition",
    "HierarchySettings",
    "ReformatConfig",
]

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Processing result models: per-file stats and the aggregated batch result."""


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics."""
    file_name: str
    status: str  # success/skipped/failed
    rows_written: int
    orphaned_rows: int
    elapsed_seconds: float
    output_name: str | None = None


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of one batch run, source of the SUMMARY line."""
    success_files: int
    skipped_files: int
    failed_files: int
    total_rows: int
    orphaned_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.skipped_files + self.failed_files

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

"""ConvertedFile domain model and FileStatus enum.

A ConvertedFile is the processing context of one input framework file, from
discovery to its reformatted CSV (or the reason it was skipped or failed).
"""


class FileStatus(Enum):
    """Lifecycle of an input file.

    - PENDING: discovered, not yet processed
    - SUCCESS: reformatted CSV written
    - SKIPPED: nothing usable parsed (empty or malformed input)
    - FAILED: file-system error while reading or writing
    """
    PENDING = "pending"
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class ConvertedFile:
    """Processing context for a single input file."""
    path: Path
    name: str
    program_name: str
    root_id: str
    output_path: Path | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    status: FileStatus = FileStatus.PENDING
    rows_written: int = 0  # framework row included
    orphaned_rows: int = 0
    error: str | None = None

from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering."""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.2f}".rstrip("0").rstrip(".")


def render_summary_line(result: ProcessingResult) -> str:
    """Render the final batch line.

    >>> from datetime import datetime, timezone
    >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
    >>> render_summary_line(ProcessingResult(
    ...     success_files=2, skipped_files=1, failed_files=0, total_rows=40,
    ...     orphaned_rows=3, start_time=t, end_time=t, elapsed_seconds=1.5))
    'SUMMARY files=3 success=2 skipped=1 failed=0 rows=40 orphaned=3 elapsed_sec=1.5'
    """
    return (
        f"SUMMARY files={result.total_files} "
        f"success={result.success_files} "
        f"skipped={result.skipped_files} "
        f"failed={result.failed_files} "
        f"rows={result.total_rows} "
        f"orphaned={result.orphaned_rows} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )

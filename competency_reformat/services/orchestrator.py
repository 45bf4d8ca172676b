from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.competency import ProgramContext
from ..models.config_models import HierarchySettings, ReformatConfig
from ..models.converted_file import ConvertedFile, FileStatus
from ..models.processing_result import FileStat, ProcessingResult
from ..tabular.reader import SUPPORTED_SUFFIXES, TabularReadError, read_records
from .csv_writer import write_csv
from .hierarchy import EmptyInputError, build_hierarchy
from .progress import ProgressTracker
from .prompt import RootIdPrompt

"""Batch driver: every framework file in the source directory -> one reformatted CSV.

Flow per run:
1. Ensure source/output directories exist, scan the source directory
   (non-recursive, .csv/.xls/.xlsx)
2. Resolve a root id per file (config mapping, interactive prompt, default)
3. For each file: read records, build the hierarchy, write
   ``Reformatted - {stem}.csv``
4. Aggregate metrics; flush the JSON Lines error log once

A problem with one file never stops the batch: unreadable or empty files are
skipped, file-system failures mark the file failed.
"""

logger = logging.getLogger(__name__)

OUTPUT_NAME_TEMPLATE = "Reformatted - {stem}.csv"
FILE_LEVEL_ROW = -1


class ProcessingError(Exception):
    """Fatal batch error (unusable source or output directory)."""


def ensure_directory(directory: Path) -> None:
    if directory.exists():
        if not directory.is_dir():
            raise ProcessingError(f"Path is not a directory: {directory}")
        return
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ProcessingError(f"Cannot create directory {directory}: {e}") from e
    logger.info("Created directory: %s", directory)


def scan_input_files(directory: Path) -> list[Path]:
    """Scan ``directory`` for framework files (non-recursive, sorted by name).

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        return sorted(
            (p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in SUPPORTED_SUFFIXES),
            key=lambda p: p.name,
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def output_name_for(path: Path) -> str:
    return OUTPUT_NAME_TEMPLATE.format(stem=path.stem)


def resolve_root_id(path: Path, config: ReformatConfig, prompt: RootIdPrompt | None = None) -> str:
    """Root id for one file: ``root_ids`` mapping (name, then stem), prompt, default."""
    for key in (path.name, path.stem):
        if key in config.root_ids:
            return config.root_ids[key]
    if prompt is not None:
        return prompt(path.name, config.default_root_id).strip() or config.default_root_id
    return config.default_root_id


def process_all(config: ReformatConfig, prompt: RootIdPrompt | None = None) -> ProcessingResult:
    """Reformat every framework file of the configured source directory.

    Args:
        config: Batch configuration
        prompt: Called once per file for its root id (None = no prompting)

    Returns:
        ProcessingResult with aggregated metrics and per-file stats

    Raises:
        ProcessingError: For fatal errors that prevent processing
    """
    start_time = datetime.now(UTC)
    error_log = ErrorLogBuffer(Path(config.log_directory))

    source_dir = Path(config.source_directory)
    output_dir = Path(config.output_directory)
    ensure_directory(source_dir)
    ensure_directory(output_dir)

    file_paths = scan_input_files(source_dir)
    if not file_paths:
        logger.info("No CSV or Excel files found in %s", source_dir)
    else:
        logger.info("Found %d files to process", len(file_paths))

    # asked up front so prompts do not interleave with the progress bar
    root_ids = {path: resolve_root_id(path, config, prompt) for path in file_paths}

    file_stats: list[FileStat] = []
    counts = {status: 0 for status in FileStatus}
    total_rows = 0
    orphaned_rows = 0

    with ProgressTracker(len(file_paths)) as progress:
        for path in file_paths:
            progress.start_file(path)
            file_start = datetime.now(UTC)
            converted = _process_single_file(
                path, root_ids[path], output_dir, config.hierarchy, error_log
            )
            file_elapsed = (datetime.now(UTC) - file_start).total_seconds()

            counts[converted.status] += 1
            total_rows += converted.rows_written
            orphaned_rows += converted.orphaned_rows

            progress.set_postfix(
                success=counts[FileStatus.SUCCESS],
                skipped=counts[FileStatus.SKIPPED],
                failed=counts[FileStatus.FAILED],
            )
            progress.finish_file()

            file_stats.append(
                FileStat(
                    file_name=path.name,
                    status=converted.status.value,
                    rows_written=converted.rows_written,
                    orphaned_rows=converted.orphaned_rows,
                    elapsed_seconds=file_elapsed,
                    output_name=converted.output_path.name if converted.output_path else None,
                )
            )

    try:
        log_path = error_log.flush()
    except OSError as e:
        logger.error("could not write error log: %s", e)
    else:
        if log_path is not None:
            logger.info("Error log written: %s", log_path)

    end_time = datetime.now(UTC)
    return ProcessingResult(
        success_files=counts[FileStatus.SUCCESS],
        skipped_files=counts[FileStatus.SKIPPED],
        failed_files=counts[FileStatus.FAILED],
        total_rows=total_rows,
        orphaned_rows=orphaned_rows,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )


def _process_single_file(
    path: Path,
    root_id: str,
    output_dir: Path,
    settings: HierarchySettings,
    error_log: ErrorLogBuffer,
) -> ConvertedFile:
    """Read, reformat and write one file. Never raises for per-file problems."""
    start_time = datetime.now(UTC)
    context = ProgramContext(program_name=path.stem, root_id=root_id)

    def _finish(status: FileStatus, error_type: str | None = None, error: str | None = None) -> ConvertedFile:
        if error_type is not None:
            error_log.append(ErrorRecord.create(path.name, FILE_LEVEL_ROW, error_type, error or ""))
        return ConvertedFile(
            path=path,
            name=path.name,
            program_name=context.program_name,
            root_id=root_id,
            start_time=start_time,
            end_time=datetime.now(UTC),
            status=status,
            error=error,
        )

    try:
        records = read_records(path)
        result = build_hierarchy(records, context, settings)
    except TabularReadError as e:
        logger.warning("Skipping %s: could not parse file: %s", path.name, e)
        return _finish(FileStatus.SKIPPED, "PARSE_ERROR", str(e))
    except EmptyInputError as e:
        logger.warning("Skipping %s: Could not parse any meaningful data.", path.name)
        return _finish(FileStatus.SKIPPED, "EMPTY_INPUT", str(e))
    except OSError as e:
        logger.error("Error reading file %s: %s", path.name, e)
        return _finish(FileStatus.FAILED, "IO_ERROR", str(e))
    except Exception as e:
        logger.error("Error processing file %s: %s", path.name, e)
        return _finish(FileStatus.FAILED, "PROCESSING_ERROR", str(e))

    for notice in result.notices:
        logger.warning("%s row=%d %s", path.name, notice.row, notice.message)
        error_log.append(ErrorRecord.create(path.name, notice.row, notice.kind.value, notice.message))

    output_path = output_dir / output_name_for(path)
    try:
        write_csv(output_path, result.rows)
    except OSError as e:
        logger.error("Error writing %s: %s", output_path, e)
        return _finish(FileStatus.FAILED, "IO_ERROR", str(e))

    logger.info("Processed: %s -> %s (ID: %s)", path.name, output_path.name, root_id)
    return ConvertedFile(
        path=path,
        name=path.name,
        program_name=context.program_name,
        root_id=root_id,
        output_path=output_path,
        start_time=start_time,
        end_time=datetime.now(UTC),
        status=FileStatus.SUCCESS,
        rows_written=len(result.rows),
        orphaned_rows=result.orphaned_rows,
        error=None,
    )

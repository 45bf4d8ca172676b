from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from competency_reformat.config.loader import DEFAULT_CONFIG_PATH, ConfigError, apply_env_overrides, load_config
from competency_reformat.logging.init import log_summary, setup_logging
from competency_reformat.models.config_models import ReformatConfig
from competency_reformat.services.orchestrator import ProcessingError, process_all
from competency_reformat.services.prompt import prompt_root_id
from competency_reformat.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, the optional YAML config and command line overrides
- Reformat every framework file of the source directory
- Print one SUMMARY line and map the outcome to an exit code
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; its values win over the process environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="competency-reformat",
        description="Competency framework CSV/Excel -> hierarchical import CSV",
    )
    p.add_argument("--config", type=Path, help=f"YAML config (default: {DEFAULT_CONFIG_PATH} if present)")
    p.add_argument("--source", help="Directory with input .csv/.xls/.xlsx files")
    p.add_argument("--output", help="Directory for the reformatted CSV files")
    p.add_argument("--root-id", help="Framework ID number for every file (disables prompting)")
    p.add_argument("--no-prompt", action="store_true", help="Never ask for ID numbers; use config/defaults")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print detected columns & first records then exit")
    return p.parse_args(argv)


def _resolve_config(args: argparse.Namespace) -> ReformatConfig:
    if args.config is not None:
        cfg = load_config(args.config)
    elif DEFAULT_CONFIG_PATH.exists():
        cfg = load_config(DEFAULT_CONFIG_PATH)
    else:
        cfg = ReformatConfig()
    cfg = apply_env_overrides(cfg)

    overrides: dict[str, object] = {}
    if args.source:
        overrides["source_directory"] = args.source
    if args.output:
        overrides["output_directory"] = args.output
    if args.root_id:
        overrides["default_root_id"] = args.root_id
        overrides["interactive"] = False
    if args.no_prompt:
        overrides["interactive"] = False
    return replace(cfg, **overrides) if overrides else cfg


def _inspect_data(cfg: ReformatConfig) -> int:
    from competency_reformat.services.identifiers import synthesize_program_prefix
    from competency_reformat.services.orchestrator import scan_input_files
    from competency_reformat.tabular.reader import TabularReadError, normalize_sheet, read_raw_frame

    directory = Path(cfg.source_directory)
    if not directory.exists():
        print(f"inspect: directory not found: {directory}")
        return EXIT_FATAL
    files = scan_input_files(directory)
    if not files:
        print("inspect: no .csv/.xls/.xlsx files")
        return EXIT_SUCCESS_ALL
    for f in files:
        prefix = synthesize_program_prefix(
            f.stem, cfg.hierarchy.program_prefixes, cfg.hierarchy.boilerplate
        )
        print(f"FILE: {f.name} prefix={prefix}")
        try:
            sheet = normalize_sheet(read_raw_frame(f), f.stem)
        except (TabularReadError, OSError) as e:
            print(f"  read_error: {e}")
            continue
        print(f"  cols={sheet.columns} name={sheet.name_column!r} description={sheet.description_column!r}")
        for rec in sheet.records[:3]:
            print(f"    {rec.name!r}: {rec.description[:60]!r}")
        print(f"  records={len(sheet.records)}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an explicit [] must not fall back to sys.argv (pytest flags)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    try:
        cfg = _resolve_config(args)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        for h in logger.handlers:
            h.setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
        logger.debug("debug mode enabled")

    if args.inspect_data:
        return _inspect_data(cfg)

    logger.info(f"Processing files from: {cfg.source_directory}")
    prompt = prompt_root_id if cfg.interactive else None
    try:
        result = process_all(cfg, prompt=prompt)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    summary_line = render_summary_line(result)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

#!/usr/bin/env python3
"""Generate synthetic competency framework files for manual and batch testing.

Every generated file follows the reader's expected layout:
- Row 1: metadata row (program title)
- Row 2: header row (``Name``, ``Description``)
- Row 3+: framework row, then major areas, sub-areas and K/S/C outcomes

Some outcomes can be given names outside the K/S/C scheme (``--noise``) to
exercise the fallback placement.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

AREAS: dict[str, list[str]] = {
    "Knowledge": ["Theoretical Understanding", "Applied Knowledge", "Practical Application"],
    "Skills": ["Communication Skills", "Generic Problem Solving", "Critical Thinking"],
    "Competence": ["Autonomy & Responsibility"],
}
VERBS = ["Explain", "Apply", "Evaluate", "Design", "Communicate", "Demonstrate", "Analyse"]
TOPICS = ["core principles", "field methods", "ethical practice", "team projects", "research findings"]
NOISE_NAMES = ["Graduate Attributes", "Unrelated Topic", "Professional Ethics", "Lifelong Learning"]


def generate_framework_rows(
    program: str, outcomes_per_area: int, noise: int, seed: int = 42
) -> list[list[str]]:
    """Build the data rows (framework row first) of one program."""
    rng = np.random.default_rng(seed)
    rows: list[list[str]] = [[program, f"Learning outcomes of the {program} program"]]

    for major, subs in AREAS.items():
        rows.append([major, ""])
        letter = major[0]
        for sub in subs:
            rows.append([sub, ""])
        for i in range(1, outcomes_per_area + 1):
            verb = rng.choice(VERBS)
            topic = rng.choice(TOPICS)
            rows.append([f"{letter}{i}", f"{verb} {topic} of {program.lower()}."])

    for name in rng.choice(NOISE_NAMES, size=min(noise, len(NOISE_NAMES)), replace=False):
        rows.append([str(name), "Outcome without a K/S/C code."])
    return rows


def create_framework_file(
    output_path: Path, program: str, outcomes_per_area: int = 5, noise: int = 0, seed: int = 42
) -> None:
    """Write one framework file; the suffix picks CSV or Excel."""
    sheet = [[f"{program} - Program Learning Outcomes", ""], ["Name", "Description"]]
    sheet.extend(generate_framework_rows(program, outcomes_per_area, noise, seed))
    df = pd.DataFrame(sheet)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    if output_path.suffix.lower() == ".csv":
        df.to_csv(output_path, header=False, index=False, encoding="utf-8")
    else:
        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Outcomes", header=False, index=False)

    print(f"Created framework file: {output_path}")
    print(f"  Program: {program}")
    print(f"  Data rows: {len(sheet) - 2} (+ 2 header rows)")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate synthetic competency framework files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # One CSV per program into before-convert/
  %(prog)s before-convert --programs "Physical Education" "Computer Science"

  # Excel output with orphan-producing rows
  %(prog)s before-convert --programs Mathematics --format xlsx --noise 2
        """
    )
    parser.add_argument("output_dir", type=Path, help="Directory to write files into")
    parser.add_argument("--programs", nargs="+", default=["Physical Education"], help="Program names")
    parser.add_argument("--format", choices=["csv", "xlsx"], default="csv", help="Output format (default: csv)")
    parser.add_argument("--outcomes", type=int, default=5, help="Outcomes per major area (default: 5)")
    parser.add_argument("--noise", type=int, default=0, help="Rows outside the K/S/C scheme (default: 0)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.outcomes <= 0:
        print("Error: --outcomes must be positive", file=sys.stderr)
        return 1

    try:
        for offset, program in enumerate(args.programs):
            path = args.output_dir / f"{program}.{args.format}"
            create_framework_file(path, program, args.outcomes, args.noise, args.seed + offset)
    except OSError as e:
        print(f"Error generating files: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

from ..models.competency import TARGET_COLUMNS

"""CSV serializer for the competency import schema.

Quoting is deliberately broader than RFC 4180: the downstream importer also
expects values with a space or a ``[`` to be quoted.
"""

__all__ = [
    "UTF8_BOM",
    "quote_value",
    "to_csv_string",
    "write_csv",
]

UTF8_BOM = "\ufeff"
_QUOTE_TRIGGERS = (",", '"', "\n", " ", "[")


def quote_value(value: object) -> str:
    text = "" if value is None else str(value)
    if any(ch in text for ch in _QUOTE_TRIGGERS):
        return '"' + text.replace('"', '""') + '"'
    return text


def to_csv_string(rows: Iterable[Mapping[str, object]]) -> str:
    """Render rows (header line first, ``\\n`` terminated); no rows -> empty string."""
    rows = list(rows)
    if not rows:
        return ""
    lines = [",".join(TARGET_COLUMNS)]
    for row in rows:
        lines.append(",".join(quote_value(row.get(col, "")) for col in TARGET_COLUMNS))
    return "\n".join(lines) + "\n"


def write_csv(path: Path, rows: Iterable[Mapping[str, object]]) -> Path:
    """Write rows to ``path`` as UTF-8 with a leading byte-order mark."""
    path.write_text(UTF8_BOM + to_csv_string(rows), encoding="utf-8", newline="")
    return path

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

from ..models.config_models import DEFAULT_BOILERPLATE

"""Identifier synthesis: short codes from row names, prefixes from program names.

Both functions are pure; identical input always yields identical output.
"""

__all__ = [
    "synthesize_code",
    "synthesize_program_prefix",
    "strip_boilerplate",
]

# K1, S12, CO3 ... rows that already carry their own code
PRECODED_PATTERN = re.compile(r"^[A-Za-z]+\d+$")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")
_UPPER_LATIN = re.compile(r"[A-Z]")
_TITLE_SEPARATOR = " - "


def synthesize_code(name: str) -> str:
    """Return a short code for ``name``.

    Pre-coded names (letters followed by digits) pass through unchanged,
    anything else becomes the acronym of its words:

    >>> synthesize_code("K1")
    'K1'
    >>> synthesize_code("Autonomy & Responsibility")
    'AR'
    """
    if not name:
        return ""
    name = name.strip()
    if PRECODED_PATTERN.match(name):
        return name

    code = ""
    for word in name.split():
        clean = _NON_ALNUM.sub("", word)
        if clean:
            code += clean[0].upper()
    return code or name


def strip_boilerplate(text: str, phrases: Iterable[str] = DEFAULT_BOILERPLATE) -> str:
    """Remove whole-phrase boilerplate ("outcomes of program", "department", ...)."""
    for phrase in phrases:
        pattern = rf"(?<!\w){re.escape(phrase)}(?!\w)"
        text = re.sub(pattern, " ", text, flags=re.IGNORECASE)
    return " ".join(text.split())


def synthesize_program_prefix(
    program_name: str,
    known_prefixes: Mapping[str, str] | None = None,
    boilerplate: Iterable[str] = DEFAULT_BOILERPLATE,
) -> str:
    """Derive the namespace prefix for every identifier of a program.

    Resolution order:
    1. ``known_prefixes`` curated table, exact program name match
    2. boilerplate stripped, text after ``" - "`` dropped
    3. multi-word: embedded uppercase Latin abbreviation (2+ letters) if any,
       else initials of the first two words
    4. single word: first three characters
    5. nothing left: acronym of the raw name
    """
    if known_prefixes and program_name in known_prefixes:
        return known_prefixes[program_name]

    cleaned = strip_boilerplate(program_name, boilerplate)
    if _TITLE_SEPARATOR in cleaned:
        cleaned = cleaned.split(_TITLE_SEPARATOR, 1)[0].strip()

    parts = cleaned.split()
    if len(parts) >= 2:
        capitals = _UPPER_LATIN.findall(cleaned)
        if len(capitals) >= 2:
            return "".join(capitals)
        return (parts[0][0] + parts[1][0]).upper()
    if len(parts) == 1:
        return parts[0][:3].upper()
    return synthesize_code(program_name)

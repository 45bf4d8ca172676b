"""Core services: identifier synthesis, hierarchy reformatting, CSV output, batch driver."""

from .hierarchy import EmptyInputError, build_hierarchy, reformat
from .identifiers import synthesize_code, synthesize_program_prefix

__all__ = [
    "EmptyInputError",
    "build_hierarchy",
    "reformat",
    "synthesize_code",
    "synthesize_program_prefix",
]

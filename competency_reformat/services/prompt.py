from __future__ import annotations

from collections.abc import Callable

"""Interactive root-id prompt used by the batch driver."""

__all__ = [
    "RootIdPrompt",
    "prompt_root_id",
]

# (file name, default root id) -> chosen root id
RootIdPrompt = Callable[[str, str], str]


def prompt_root_id(file_name: str, default: str, input_fn: Callable[[str], str] | None = None) -> str:
    """Ask for the framework ID number of ``file_name``; Enter keeps ``default``."""
    ask = input_fn or input
    try:
        answer = ask(f'Enter ID number for "{file_name}" (press Enter for default {default}): ')
    except EOFError:
        # stdin closed (piped / non-interactive run)
        answer = ""
    return answer.strip() or default

"""Process-wide CLI state shared between the callback and the commands."""

from __future__ import annotations

from pathlib import Path


class _Context:
    def __init__(self) -> None:
        self.config_path: Path | None = None
        self.strict = False


_context = _Context()


def get_config_path() -> Path | None:
    """Config file given with --config, if any."""
    return _context.config_path


def set_config_path(path: Path | None) -> None:
    _context.config_path = path


def is_strict() -> bool:
    """Whether rejected nodes/edges in input files are errors."""
    return _context.strict


def set_strict(strict: bool) -> None:
    _context.strict = strict


def reset() -> None:
    """Restore defaults (used between CLI invocations in tests)."""
    _context.config_path = None
    _context.strict = False

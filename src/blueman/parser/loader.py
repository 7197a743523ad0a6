"""Read description text from disk."""

from __future__ import annotations

from pathlib import Path

from blueman.exceptions import InputReadError


def read_description(path: Path) -> str:
    """Return the UTF-8 text of the description at *path*.

    Raises:
        InputReadError: If the file is missing, unreadable, or not UTF-8.
    """
    if not path.is_file():
        raise InputReadError(f"Description file not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise InputReadError(f"Description file is not valid UTF-8: {path}") from exc
    except OSError as exc:
        raise InputReadError(f"Failed to read description file {path}: {exc}") from exc

from __future__ import annotations

import os
from pathlib import Path

from .errors import FileAccessError


def is_readable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.R_OK)


def is_writable(path: Path) -> bool:
    """Return ``True`` if *path* (a file or a directory) accepts writes."""
    return path.exists() and os.access(path, os.W_OK)


def read_text(path: Path) -> str:
    try:
        with path.open("r", encoding="utf-8") as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise FileAccessError(path, "read", str(exc)) from exc


def write_text(path: Path, text: str) -> None:
    """Write *text* to *path* through a temporary sibling file."""
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        with tmp.open("w", encoding="utf-8", newline="\n") as fh:
            fh.write(text)
        tmp.replace(path)
    except OSError as exc:
        tmp.unlink(missing_ok=True)
        raise FileAccessError(path, "write", str(exc)) from exc

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from depinfo_core.utils.text import strip_comment


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def write_text_atomic(path: Path, text: str, *, encoding: str = "utf-8") -> None:
    """Write text to a file atomically."""
    ensure_dir(path.parent)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        with tmp_path.open("w", encoding=encoding, newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()


def read_lines(path: Path, *, encoding: str = "utf-8") -> list[str]:
    """Read a text file as a list of lines without line terminators."""
    return path.read_text(encoding=encoding).splitlines()


def iter_data_lines(path: Path) -> Iterator[tuple[int, str]]:
    """Yield (line number, text) for non-blank, non-comment lines."""
    for lineno, raw in enumerate(read_lines(path), start=1):
        line = strip_comment(raw)
        if line:
            yield lineno, line

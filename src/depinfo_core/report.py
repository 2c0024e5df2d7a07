from __future__ import annotations

import csv
import io
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from depinfo_core.coordinates import Dependency
from depinfo_core.exceptions import ReportWriteError
from depinfo_core.utils.io import write_text_atomic


@dataclass(frozen=True)
class DependencyInfo:
    """One report line: ``group:name,version,url,license``."""

    dependency: Dependency
    url: str
    license_type: str

    def as_row(self) -> list[str]:
        return [
            self.dependency.group_artifact,
            str(self.dependency.version),
            self.url,
            self.license_type,
        ]


def render_csv(rows: Iterable[DependencyInfo]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    for row in rows:
        writer.writerow(row.as_row())
    return buffer.getvalue()


def write_report(path: Path, rows: Iterable[DependencyInfo]) -> None:
    text = render_csv(rows)
    try:
        write_text_atomic(path, text)
    except OSError as exc:
        raise ReportWriteError(
            f"failed to write dependencies report {path}: {exc}",
            context={"path": str(path), "error": str(exc)},
        ) from exc

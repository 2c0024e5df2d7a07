"""Load the runtime dependency list and the compile-only artifact set."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from depinfo_core.coordinates import Dependency, parse_coordinate
from depinfo_core.exceptions import CoordinateParseError
from depinfo_core.utils.io import iter_data_lines, read_lines

logger = logging.getLogger(__name__)

DEFAULT_RUNTIME_CONFIGURATION = "runtimeClasspath"
DEFAULT_COMPILE_ONLY_CONFIGURATION = "compileOnly"

_LOCKFILE_LINE_RE = re.compile(r"^(?P<coordinate>[^=]+)=(?P<configurations>.*)$")


@dataclass
class DependencySources:
    runtime: list[Dependency] = field(default_factory=list)
    compile_only: set[str] = field(default_factory=set)


def unique_dependencies(dependencies: Iterable[Dependency]) -> list[Dependency]:
    """Drop repeated coordinates, keeping the first occurrence."""
    seen: set[str] = set()
    result: list[Dependency] = []
    for dependency in dependencies:
        if dependency.key in seen:
            continue
        seen.add(dependency.key)
        result.append(dependency)
    return result


def parse_coordinates(values: Iterable[str], *, source: str | None = None) -> list[Dependency]:
    return [parse_coordinate(value, source=source) for value in values]


def read_coordinates_file(path: Path) -> list[Dependency]:
    """Read one ``group:name:version`` per line; blank lines and ``#`` comments are skipped."""
    dependencies = []
    for lineno, line in iter_data_lines(path):
        dependencies.append(parse_coordinate(line, source=f"{path}:{lineno}"))
    return dependencies


def read_gradle_lockfile(path: Path) -> dict[str, list[Dependency]]:
    """Parse a Gradle lockfile into configuration name -> dependencies.

    Lines look like ``group:name:version=conf1,conf2``; comments and the
    trailing ``empty=`` line are ignored.
    """
    by_configuration: dict[str, list[Dependency]] = {}
    for lineno, raw in enumerate(read_lines(path), start=1):
        line = raw.strip()
        if not line or line.startswith("#") or line.startswith("empty="):
            continue
        match = _LOCKFILE_LINE_RE.match(line)
        if not match:
            raise CoordinateParseError(
                f"Invalid lockfile entry {line!r}",
                coordinate=line,
                source=f"{path}:{lineno}",
            )
        dependency = parse_coordinate(match.group("coordinate"), source=f"{path}:{lineno}")
        for configuration in match.group("configurations").split(","):
            configuration = configuration.strip()
            if configuration:
                by_configuration.setdefault(configuration, []).append(dependency)
    return by_configuration


def from_lockfile(
    path: Path,
    *,
    runtime_configuration: str = DEFAULT_RUNTIME_CONFIGURATION,
    compile_only_configuration: str = DEFAULT_COMPILE_ONLY_CONFIGURATION,
) -> DependencySources:
    by_configuration = read_gradle_lockfile(path)
    if runtime_configuration not in by_configuration:
        logger.warning("configuration %s not found in lockfile %s", runtime_configuration, path)
    return DependencySources(
        runtime=unique_dependencies(by_configuration.get(runtime_configuration, [])),
        compile_only={dep.key for dep in by_configuration.get(compile_only_configuration, [])},
    )


def load_sources(
    *,
    runtime: Iterable[str] = (),
    compile_only: Iterable[str] = (),
    runtime_files: Iterable[Path] = (),
    compile_only_files: Iterable[Path] = (),
    lockfile: Path | None = None,
    runtime_configuration: str = DEFAULT_RUNTIME_CONFIGURATION,
    compile_only_configuration: str = DEFAULT_COMPILE_ONLY_CONFIGURATION,
) -> DependencySources:
    """Merge every configured source: lockfile entries first, then explicit coordinates."""
    sources = DependencySources()
    if lockfile is not None:
        sources = from_lockfile(
            lockfile,
            runtime_configuration=runtime_configuration,
            compile_only_configuration=compile_only_configuration,
        )

    runtime_deps = list(sources.runtime)
    runtime_deps.extend(parse_coordinates(runtime, source="runtime"))
    for path in runtime_files:
        runtime_deps.extend(read_coordinates_file(path))

    compile_only_keys = set(sources.compile_only)
    compile_only_keys.update(dep.key for dep in parse_coordinates(compile_only, source="compile_only"))
    for path in compile_only_files:
        compile_only_keys.update(dep.key for dep in read_coordinates_file(path))

    return DependencySources(runtime=unique_dependencies(runtime_deps), compile_only=compile_only_keys)

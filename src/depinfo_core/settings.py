"""Resolved settings for a dependencies info run.

Values come from, in order of precedence: command line flags, the YAML task
file, environment variables, then defaults relative to the project directory.
"""

from __future__ import annotations

import argparse
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from depinfo_core.config_validator import read_yaml
from depinfo_core.coordinates import DEFAULT_INTERNAL_GROUPS, merge_internal_groups
from depinfo_core.exceptions import ConfigValidationError
from depinfo_core.licenses.classifier import (
    DEFAULT_BUILD_BRANCH,
    DEFAULT_LICENSE_BASE_URL,
    DEFAULT_REPOSITORY_NAME,
)
from depinfo_core.mappings import validate_mappings
from depinfo_core.sources import DEFAULT_COMPILE_ONLY_CONFIGURATION, DEFAULT_RUNTIME_CONFIGURATION

CONFIG_SCHEMA = "dependencies_info"
BUILD_BRANCH_ENV = "BUILD_BRANCH"
DEFAULT_LICENSES_DIRNAME = "licenses"
DEFAULT_OUTPUT_RELPATH = Path("build") / "reports" / "dependencies" / "dependencies.csv"


@dataclass
class TaskSettings:
    project_dir: Path
    licenses_dir: Path
    output_file: Path
    runtime: list[str] = field(default_factory=list)
    compile_only: list[str] = field(default_factory=list)
    runtime_files: list[Path] = field(default_factory=list)
    compile_only_files: list[Path] = field(default_factory=list)
    lockfile: Path | None = None
    runtime_configuration: str = DEFAULT_RUNTIME_CONFIGURATION
    compile_only_configuration: str = DEFAULT_COMPILE_ONLY_CONFIGURATION
    mappings: dict[str, str] = field(default_factory=dict)
    internal_groups: tuple[str, ...] = DEFAULT_INTERNAL_GROUPS
    build_branch: str = DEFAULT_BUILD_BRANCH
    repository_name: str = DEFAULT_REPOSITORY_NAME
    license_base_url: str = DEFAULT_LICENSE_BASE_URL

    @classmethod
    def for_project(cls, project_dir: Path, **overrides: Any) -> TaskSettings:
        """Settings with the conventional licenses/ and build/reports locations."""
        project_dir = Path(project_dir)
        overrides.setdefault("licenses_dir", project_dir / DEFAULT_LICENSES_DIRNAME)
        overrides.setdefault("output_file", project_dir / DEFAULT_OUTPUT_RELPATH)
        return cls(project_dir=project_dir, **overrides)


def _resolve(base: Path, value: str | Path | None) -> Path | None:
    if value is None:
        return None
    path = Path(value).expanduser()
    return path if path.is_absolute() else base / path


def parse_mapping_args(values: list[str] | None) -> dict[str, str]:
    """Parse repeated ``REGEX=NAME`` flags, keeping their order."""
    mappings: dict[str, str] = {}
    for value in values or []:
        pattern, sep, name = value.rpartition("=")
        if not sep or not pattern or not name:
            raise ConfigValidationError(
                f"Invalid mapping {value!r}; expected REGEX=NAME",
                context={"mapping": value},
            )
        mappings[pattern] = name
    return mappings


def load_config_file(path: Path) -> dict[str, Any]:
    return read_yaml(path, schema_name=CONFIG_SCHEMA)


def load_settings(
    args: argparse.Namespace,
    *,
    environ: Mapping[str, str] | None = None,
) -> TaskSettings:
    env = os.environ if environ is None else environ
    config: dict[str, Any] = {}
    config_dir = Path.cwd()
    if getattr(args, "config", None):
        config_path = Path(args.config).expanduser().resolve()
        config = load_config_file(config_path)
        config_dir = config_path.parent

    if getattr(args, "project_dir", None):
        project_dir = Path(args.project_dir).expanduser().resolve()
    else:
        project_dir = (_resolve(config_dir, config.get("project_dir")) or config_dir).resolve()

    licenses_dir = _resolve(project_dir, getattr(args, "licenses_dir", None) or config.get("licenses_dir"))
    output_file = _resolve(project_dir, getattr(args, "output", None) or config.get("output_file"))
    lockfile = _resolve(project_dir, getattr(args, "lockfile", None) or config.get("lockfile"))

    mappings = dict(config.get("mappings") or {})
    mappings.update(parse_mapping_args(getattr(args, "mapping", None)))
    validate_mappings(mappings)

    build_branch = (
        getattr(args, "build_branch", None)
        or config.get("build_branch")
        or env.get(BUILD_BRANCH_ENV)
        or DEFAULT_BUILD_BRANCH
    )

    locations: dict[str, Path] = {}
    if licenses_dir is not None:
        locations["licenses_dir"] = licenses_dir
    if output_file is not None:
        locations["output_file"] = output_file

    return TaskSettings.for_project(
        project_dir,
        **locations,
        runtime=list(config.get("runtime") or []),
        compile_only=list(config.get("compile_only") or []),
        runtime_files=[_resolve(project_dir, p) for p in getattr(args, "runtime", None) or []],
        compile_only_files=[_resolve(project_dir, p) for p in getattr(args, "compile_only", None) or []],
        lockfile=lockfile,
        runtime_configuration=getattr(args, "runtime_configuration", None)
        or config.get("runtime_configuration")
        or DEFAULT_RUNTIME_CONFIGURATION,
        compile_only_configuration=getattr(args, "compile_only_configuration", None)
        or config.get("compile_only_configuration")
        or DEFAULT_COMPILE_ONLY_CONFIGURATION,
        mappings=mappings,
        internal_groups=merge_internal_groups(config.get("internal_groups") or ()),
        build_branch=build_branch,
        repository_name=config.get("repository_name") or DEFAULT_REPOSITORY_NAME,
        license_base_url=config.get("license_base_url") or DEFAULT_LICENSE_BASE_URL,
    )

"""Gather information about the dependencies and export it into a CSV file.

Each report line carries:

- name: the library identity (``group:artifact``),
- version,
- url: Maven Central location of the artifact,
- license: an SPDX identifier, ``Custom;<url>`` or ``UNKNOWN``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from depinfo_core.coordinates import Dependency, is_internal, maven_central_url
from depinfo_core.exceptions import ReportWriteError
from depinfo_core.licenses.classifier import LicenseClassifier
from depinfo_core.licenses.templates import UNKNOWN
from depinfo_core.logging_config import LogContext
from depinfo_core.mappings import get_dependency_name
from depinfo_core.report import DependencyInfo, write_report
from depinfo_core.settings import TaskSettings
from depinfo_core.sources import DependencySources, load_sources
from depinfo_core.utils.logging import log_event

logger = logging.getLogger(__name__)


@dataclass
class TaskResult:
    output_file: Path
    rows: list[DependencyInfo] = field(default_factory=list)
    written: bool = False
    skipped_compile_only: list[Dependency] = field(default_factory=list)
    skipped_internal: list[Dependency] = field(default_factory=list)


class DependenciesInfoTask:
    description = "Create a CSV file with dependencies information."

    def __init__(self, settings: TaskSettings, *, sources: DependencySources | None = None) -> None:
        self.settings = settings
        self._sources = sources
        self.classifier = LicenseClassifier(
            settings.licenses_dir,
            repository_name=settings.repository_name,
            build_branch=settings.build_branch,
            base_url=settings.license_base_url,
        )

    @property
    def sources(self) -> DependencySources:
        if self._sources is None:
            self._sources = load_sources(
                runtime=self.settings.runtime,
                compile_only=self.settings.compile_only,
                runtime_files=self.settings.runtime_files,
                compile_only_files=self.settings.compile_only_files,
                lockfile=self.settings.lockfile,
                runtime_configuration=self.settings.runtime_configuration,
                compile_only_configuration=self.settings.compile_only_configuration,
            )
        return self._sources

    def describe(self, dependency: Dependency) -> DependencyInfo:
        url = maven_central_url(dependency.group, dependency.name, dependency.version)
        dependency_name = get_dependency_name(self.settings.mappings, dependency.name)
        logger.info(
            "mapped dependency %s:%s to %s for license info",
            dependency.group,
            dependency.name,
            dependency_name,
        )
        license_type = self.classifier.get_license_type(dependency.group, dependency_name)
        return DependencyInfo(dependency=dependency, url=url, license_type=license_type)

    def collect(self, result: TaskResult | None = None) -> list[DependencyInfo]:
        sources = self.sources
        rows: list[DependencyInfo] = []
        for dependency in sources.runtime:
            # compile-only dependencies are not shipped
            if dependency.key in sources.compile_only:
                logger.debug("skipping compile-only dependency %s", dependency)
                if result is not None:
                    result.skipped_compile_only.append(dependency)
                continue
            # only external dependencies are checked
            if is_internal(dependency, self.settings.internal_groups):
                logger.debug("skipping internal dependency %s", dependency)
                if result is not None:
                    result.skipped_internal.append(dependency)
                continue
            with LogContext(dependency=dependency.key):
                rows.append(self.describe(dependency))
        return rows

    def generate_dependencies_info(self) -> TaskResult:
        result = TaskResult(output_file=self.settings.output_file)
        result.rows = self.collect(result)
        try:
            write_report(self.settings.output_file, result.rows)
            result.written = True
        except ReportWriteError as exc:
            logger.error("%s", exc.message)

        log_event(
            logger,
            "dependencies info generated",
            output_file=str(result.output_file),
            written=result.written,
            dependencies=len(result.rows),
            skipped_compile_only=len(result.skipped_compile_only),
            skipped_internal=len(result.skipped_internal),
            unknown_licenses=sum(1 for row in result.rows if row.license_type == UNKNOWN),
        )
        return result

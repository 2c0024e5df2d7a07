"""Dependency license information report."""

from depinfo_core.coordinates import Dependency, is_internal, maven_central_url, parse_coordinate
from depinfo_core.licenses import LicenseClassifier, check_spdx_license
from depinfo_core.mappings import get_dependency_name
from depinfo_core.report import DependencyInfo, render_csv, write_report
from depinfo_core.settings import TaskSettings, load_settings
from depinfo_core.task import DependenciesInfoTask, TaskResult

__all__ = [
    "Dependency",
    "parse_coordinate",
    "maven_central_url",
    "is_internal",
    "get_dependency_name",
    "check_spdx_license",
    "LicenseClassifier",
    "DependencyInfo",
    "render_csv",
    "write_report",
    "TaskSettings",
    "load_settings",
    "DependenciesInfoTask",
    "TaskResult",
]

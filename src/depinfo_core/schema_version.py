"""Schema version checks for task configuration files."""

from __future__ import annotations

import re
from typing import Any

from depinfo_core.exceptions import ConfigValidationError

CURRENT_VERSIONS = {
    "dependencies_info": "1.0",
}

MIN_SUPPORTED_VERSIONS = {
    "dependencies_info": "1.0",
}

_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)(?:\.(\d+))?")


class IncompatibleVersionError(ConfigValidationError):
    code = "incompatible_schema_version"


class MissingVersionError(ConfigValidationError):
    code = "missing_schema_version"


def parse_version(version_str: str) -> tuple[int, int, int]:
    """Parse "1.0", "1.0.0" or "v1.0" into a comparable tuple."""
    match = _VERSION_RE.match(str(version_str or "").strip())
    if not match:
        raise ValueError(f"Invalid version format: {version_str}")
    major, minor, patch = match.groups()
    return int(major), int(minor), int(patch or 0)


def validate_schema_version(schema_name: str, config: Any) -> None:
    if schema_name not in CURRENT_VERSIONS or not isinstance(config, dict):
        return
    raw = config.get("schema_version")
    if raw is None:
        raise MissingVersionError(
            f"{schema_name} config is missing schema_version",
            context={"schema": schema_name},
        )
    try:
        version = parse_version(str(raw))
    except ValueError as exc:
        raise IncompatibleVersionError(
            str(exc), context={"schema": schema_name, "version": str(raw)}
        ) from exc
    minimum = parse_version(MIN_SUPPORTED_VERSIONS[schema_name])
    current = parse_version(CURRENT_VERSIONS[schema_name])
    if version < minimum or version[0] > current[0]:
        raise IncompatibleVersionError(
            f"{schema_name} schema_version {raw} is not supported "
            f"(supported: {MIN_SUPPORTED_VERSIONS[schema_name]} to {CURRENT_VERSIONS[schema_name]})",
            context={"schema": schema_name, "version": str(raw)},
        )

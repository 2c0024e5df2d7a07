from __future__ import annotations

import re
from collections.abc import Mapping

from depinfo_core.exceptions import ConfigValidationError


def validate_mappings(mappings: Mapping[str, str] | None) -> None:
    """Compile every mapping pattern, reporting the first invalid one."""
    for pattern, mapped in (mappings or {}).items():
        try:
            re.compile(pattern)
        except re.error as exc:
            raise ConfigValidationError(
                f"Invalid mapping pattern {pattern!r}: {exc}",
                context={"mapping": f"{pattern}={mapped}", "error": str(exc)},
            ) from exc


def get_dependency_name(mappings: Mapping[str, str] | None, dependency_name: str) -> str:
    """Map a dependency name to the name its LICENSE file is stored under.

    Mapping keys are regular expressions. They are combined into one
    alternation in insertion order; when the whole name matches, the value
    paired with the first matching alternative is returned. Unmapped names
    come back unchanged.
    """
    if not mappings:
        return dependency_name
    patterns = list(mappings.keys())
    names = list(mappings.values())
    combined = re.compile("|".join(f"({pattern})" for pattern in patterns))
    match = combined.fullmatch(dependency_name)
    if not match:
        return dependency_name
    # Keys may contain their own groups, so walk the outer groups by offset.
    group_index = 1
    for pattern, mapped in zip(patterns, names):
        if match.group(group_index) is not None:
            return mapped
        group_index += re.compile(pattern).groups + 1
    return dependency_name

"""Maven coordinates of a resolved dependency."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from depinfo_core.exceptions import CoordinateParseError

MAVEN_CENTRAL_BASE_URL = "https://repo1.maven.org/maven2"
DEFAULT_INTERNAL_GROUPS = ("org.elasticsearch",)


@dataclass(frozen=True)
class Dependency:
    group: str | None
    name: str
    version: str | None

    @property
    def key(self) -> str:
        """``group:name:version``, the identity used to match compile-only artifacts."""
        return f"{self.group}:{self.name}:{self.version}"

    @property
    def group_artifact(self) -> str:
        return f"{self.group}:{self.name}"

    def __str__(self) -> str:
        return self.key


def parse_coordinate(text: str, *, source: str | None = None) -> Dependency:
    """Parse ``group:name:version`` (an optional trailing classifier is ignored)."""
    raw = (text or "").strip()
    parts = [part.strip() for part in raw.split(":")]
    if len(parts) not in (3, 4) or not all(parts[:3]):
        raise CoordinateParseError(
            f"Invalid dependency coordinate {raw!r}; expected group:name:version",
            coordinate=raw,
            source=source,
        )
    group, name, version = parts[:3]
    return Dependency(group=group, name=name, version=version)


def maven_central_url(group: str | None, name: str, version: str | None) -> str:
    """Create a URL on Maven Central based on dependency coordinates."""
    group_path = (group or "").replace(".", "/")
    return f"{MAVEN_CENTRAL_BASE_URL}/{group_path}/{name}/{version}"


def merge_internal_groups(extra_groups: Iterable[str] = ()) -> tuple[str, ...]:
    """Default internal groups followed by any extra ones, without repeats."""
    merged = list(DEFAULT_INTERNAL_GROUPS)
    for group in extra_groups:
        if group and group not in merged:
            merged.append(group)
    return tuple(merged)


def is_internal(dependency: Dependency, internal_groups: Iterable[str] = ()) -> bool:
    """True when the group contains a default or extra internal group name.

    The default groups always apply; ``internal_groups`` can only add to them.
    """
    if dependency.group is None:
        return False
    return any(internal in dependency.group for internal in merge_internal_groups(internal_groups))

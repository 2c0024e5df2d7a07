"""Resolve the license type of a dependency from the licenses directory.

The license type is one of:

- ``UNKNOWN`` when no LICENSE file is present for the dependency,
- an SPDX identifier when the LICENSE content matches a known template,
- ``Custom;<url>`` otherwise, where the URL points at the LICENSE file in the
  hosted source repository.
"""

from __future__ import annotations

import fnmatch
import logging
import os
import re
from collections.abc import Iterable
from pathlib import Path

from depinfo_core.exceptions import LicenseDirectoryError
from depinfo_core.licenses.templates import UNKNOWN, check_spdx_license
from depinfo_core.utils.io import read_lines
from depinfo_core.utils.text import collapse_whitespace

logger = logging.getLogger(__name__)

LICENSE_FILE_GLOB = "*-LICENSE*"
CUSTOM_PREFIX = "Custom"
DEFAULT_REPOSITORY_NAME = "elasticsearch"
DEFAULT_BUILD_BRANCH = "master"
DEFAULT_LICENSE_BASE_URL = "https://raw.githubusercontent.com/elastic/{repository}/{branch}/"

_LICENSE_SUFFIX_RE = re.compile(r"-LICENSE.*")


def normalize_license_text(lines: Iterable[str]) -> str:
    # '*' is sometimes used at line starts as if the license were a block comment.
    return " ".join(collapse_whitespace(line).replace("*", " ") for line in lines)


def license_file_prefix(filename: str) -> str:
    return _LICENSE_SUFFIX_RE.split(filename, maxsplit=1)[0]


def list_license_files(licenses_dir: Path) -> list[Path]:
    try:
        entries = sorted(licenses_dir.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise LicenseDirectoryError(
            f"failed to obtain files in licenses directory {licenses_dir}",
            context={"path": str(licenses_dir), "error": str(exc)},
        ) from exc
    return [path for path in entries if fnmatch.fnmatchcase(path.name, LICENSE_FILE_GLOB)]


def find_license_file(licenses_dir: Path, group: str | None, name: str) -> Path | None:
    """Return the first LICENSE file whose prefix occurs in the group or name."""
    group = group or ""
    for path in list_license_files(licenses_dir):
        prefix = license_file_prefix(path.name)
        if not prefix:
            continue
        if prefix in group or prefix in name:
            return path
    return None


def custom_license_url(
    license_file: Path,
    *,
    repository_name: str = DEFAULT_REPOSITORY_NAME,
    build_branch: str = DEFAULT_BUILD_BRANCH,
    base_url: str = DEFAULT_LICENSE_BASE_URL,
) -> str:
    """Rewrite a license file's real path into its URL in the hosted repository."""
    real_path = os.path.realpath(license_file, strict=True)
    resolved_base = base_url.format(repository=repository_name, branch=build_branch)
    pattern = re.compile(rf".*/{re.escape(repository_name)}/")
    return pattern.sub(lambda _: resolved_base, Path(real_path).as_posix(), count=1)


class LicenseClassifier:
    def __init__(
        self,
        licenses_dir: Path,
        *,
        repository_name: str = DEFAULT_REPOSITORY_NAME,
        build_branch: str = DEFAULT_BUILD_BRANCH,
        base_url: str = DEFAULT_LICENSE_BASE_URL,
    ) -> None:
        self.licenses_dir = Path(licenses_dir)
        self.repository_name = repository_name
        self.build_branch = build_branch
        self.base_url = base_url

    def get_license_type(self, group: str | None, name: str) -> str:
        """Read the LICENSE file associated with the dependency and determine a license type."""
        try:
            license_file = find_license_file(self.licenses_dir, group, name)
        except LicenseDirectoryError as exc:
            logger.error("%s", exc.message)
            return UNKNOWN
        if license_file is None:
            logger.debug("no LICENSE file for %s:%s in %s", group, name, self.licenses_dir)
            return UNKNOWN
        return self.license_type_for_file(license_file) or UNKNOWN

    def license_type_for_file(self, license_file: Path) -> str | None:
        try:
            text = normalize_license_text(read_lines(license_file))
        except (OSError, UnicodeDecodeError):
            logger.error("failed to retrieve contents of license file %s", license_file, exc_info=True)
            return None

        spdx = check_spdx_license(text)
        if spdx:
            return spdx
        return self.custom_license_type(license_file)

    def custom_license_type(self, license_file: Path) -> str | None:
        try:
            url = custom_license_url(
                license_file,
                repository_name=self.repository_name,
                build_branch=self.build_branch,
                base_url=self.base_url,
            )
        except OSError:
            logger.error("failed to get license file's real path %s", license_file, exc_info=True)
            return None
        return f"{CUSTOM_PREFIX};{url}"

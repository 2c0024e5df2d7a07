from depinfo_core.licenses.classifier import (
    LicenseClassifier,
    custom_license_url,
    find_license_file,
    normalize_license_text,
)
from depinfo_core.licenses.templates import UNKNOWN, check_spdx_license, spdx_identifiers

__all__ = [
    "UNKNOWN",
    "LicenseClassifier",
    "check_spdx_license",
    "custom_license_url",
    "find_license_file",
    "normalize_license_text",
    "spdx_identifiers",
]

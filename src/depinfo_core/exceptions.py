from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass
class DepInfoError(Exception):
    message: str
    code: str = "depinfo_error"
    context: dict[str, Any] = field(default_factory=dict)

    def __init__(self, message: str, *, code: str | None = None, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.code
        self.context = dict(context or {})

    def as_log_fields(self) -> dict[str, Any]:
        return {
            "error_code": self.code,
            "error_message": self.message,
            "error_context": self.context,
        }


class ConfigValidationError(DepInfoError):
    code = "config_validation_error"


class YamlParseError(DepInfoError):
    code = "yaml_parse_error"


class CoordinateParseError(DepInfoError):
    code = "coordinate_parse_error"

    def __init__(self, message: str, *, coordinate: str, source: str | None = None) -> None:
        context = {"coordinate": coordinate}
        if source:
            context["source"] = source
        super().__init__(message, context=context)


class LicenseDirectoryError(DepInfoError):
    code = "license_directory_error"


class ReportWriteError(DepInfoError):
    code = "report_write_error"

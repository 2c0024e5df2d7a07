from __future__ import annotations

import argparse
from pathlib import Path

import pytest

from depinfo_core.config_validator import read_yaml
from depinfo_core.exceptions import ConfigValidationError, YamlParseError
from depinfo_core.schema_version import (
    IncompatibleVersionError,
    MissingVersionError,
    validate_schema_version,
)
from depinfo_core.settings import load_settings, parse_mapping_args


def _args(**kwargs) -> argparse.Namespace:
    defaults = {
        "config": None,
        "project_dir": None,
        "licenses_dir": None,
        "output": None,
        "runtime": None,
        "compile_only": None,
        "lockfile": None,
        "runtime_configuration": None,
        "compile_only_configuration": None,
        "mapping": None,
        "build_branch": None,
    }
    defaults.update(kwargs)
    return argparse.Namespace(**defaults)


def test_defaults_are_relative_to_project_dir(tmp_path: Path) -> None:
    settings = load_settings(_args(project_dir=str(tmp_path)), environ={})
    assert settings.project_dir == tmp_path.resolve()
    assert settings.licenses_dir == tmp_path.resolve() / "licenses"
    assert settings.output_file == tmp_path.resolve() / "build/reports/dependencies/dependencies.csv"
    assert settings.build_branch == "master"
    assert settings.internal_groups == ("org.elasticsearch",)
    assert settings.runtime_configuration == "runtimeClasspath"
    assert settings.compile_only_configuration == "compileOnly"


def test_build_branch_from_environment(tmp_path: Path) -> None:
    settings = load_settings(_args(project_dir=str(tmp_path)), environ={"BUILD_BRANCH": "7.x"})
    assert settings.build_branch == "7.x"
    settings = load_settings(
        _args(project_dir=str(tmp_path), build_branch="6.8"), environ={"BUILD_BRANCH": "7.x"}
    )
    assert settings.build_branch == "6.8"


def test_config_file_values_and_cli_overrides(tmp_path: Path) -> None:
    config = tmp_path / "depinfo.yaml"
    config.write_text(
        "schema_version: '1.0'\n"
        "project_dir: server\n"
        "licenses_dir: third-party/licenses\n"
        "build_branch: '6.x'\n"
        "internal_groups: [com.example]\n"
        "mappings:\n"
        "  'lucene-.*': lucene\n"
        "  'jackson-.*': jackson\n"
        "runtime:\n"
        "  - joda-time:joda-time:2.9.9\n"
        "compile_only:\n"
        "  - org.apache.logging.log4j:log4j-api:2.9.1\n",
        encoding="utf-8",
    )
    settings = load_settings(
        _args(config=str(config), output="out/deps.csv", mapping=["netty-.*=netty"]),
        environ={"BUILD_BRANCH": "ignored"},
    )
    project = (tmp_path / "server").resolve()
    assert settings.project_dir == project
    assert settings.licenses_dir == project / "third-party/licenses"
    assert settings.output_file == project / "out/deps.csv"
    assert settings.build_branch == "6.x"
    assert settings.internal_groups == ("org.elasticsearch", "com.example")
    assert list(settings.mappings.items()) == [
        ("lucene-.*", "lucene"),
        ("jackson-.*", "jackson"),
        ("netty-.*", "netty"),
    ]
    assert settings.runtime == ["joda-time:joda-time:2.9.9"]
    assert settings.compile_only == ["org.apache.logging.log4j:log4j-api:2.9.1"]


def test_parse_mapping_args_rejects_missing_name() -> None:
    assert parse_mapping_args(["a=b=c"]) == {"a=b": "c"}
    with pytest.raises(ConfigValidationError):
        parse_mapping_args(["lucene-.*"])


def test_invalid_mapping_pattern_in_config_file(tmp_path: Path) -> None:
    config = tmp_path / "depinfo.yaml"
    config.write_text("schema_version: '1.0'\nmappings:\n  'lucene-[': lucene\n", encoding="utf-8")
    with pytest.raises(ConfigValidationError) as excinfo:
        load_settings(_args(config=str(config)))
    assert excinfo.value.context["mapping"] == "lucene-[=lucene"


def test_yaml_parse_error_includes_context(tmp_path: Path) -> None:
    bad_yaml = tmp_path / "bad.yaml"
    bad_yaml.write_text("foo: [\n", encoding="utf-8")
    with pytest.raises(YamlParseError) as excinfo:
        read_yaml(bad_yaml)
    assert excinfo.value.code == "yaml_parse_error"
    assert excinfo.value.context["path"] == str(bad_yaml)


def test_config_validation_error_includes_context(tmp_path: Path) -> None:
    invalid = tmp_path / "depinfo.yaml"
    invalid.write_text("schema_version: '1.0'\nruntime: [not-a-coordinate]\nunknown_key: 1\n", encoding="utf-8")
    with pytest.raises(ConfigValidationError) as excinfo:
        read_yaml(invalid, schema_name="dependencies_info")
    assert excinfo.value.code == "config_validation_error"
    assert excinfo.value.context["schema"] == "dependencies_info"
    assert excinfo.value.context["path"] == str(invalid)
    paths = {error["path"] for error in excinfo.value.context["errors"]}
    assert {"runtime.0", "<root>"} <= paths


def test_schema_version_is_required(tmp_path: Path) -> None:
    config = tmp_path / "depinfo.yaml"
    config.write_text("runtime: []\n", encoding="utf-8")
    with pytest.raises(ConfigValidationError):
        read_yaml(config, schema_name="dependencies_info")

    with pytest.raises(MissingVersionError):
        validate_schema_version("dependencies_info", {})


def test_unsupported_schema_version(tmp_path: Path) -> None:
    config = tmp_path / "depinfo.yaml"
    config.write_text("schema_version: '2.0'\n", encoding="utf-8")
    with pytest.raises(IncompatibleVersionError) as excinfo:
        read_yaml(config, schema_name="dependencies_info")
    assert excinfo.value.context["version"] == "2.0"

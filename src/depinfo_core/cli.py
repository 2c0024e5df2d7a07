#!/usr/bin/env python3
"""Command line entrypoint for the dependencies info report."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from depinfo_core.exceptions import DepInfoError
from depinfo_core.licenses.classifier import CUSTOM_PREFIX, normalize_license_text
from depinfo_core.licenses.templates import check_spdx_license, spdx_identifiers
from depinfo_core.logging_config import LogContext, add_logging_args, configure_logging
from depinfo_core.settings import load_settings
from depinfo_core.task import DependenciesInfoTask
from depinfo_core.utils.io import read_lines

logger = logging.getLogger("depinfo_core.cli")

COMMAND_GENERATE = "generate"
COMMAND_CLASSIFY = "classify"
COMMAND_TEMPLATES = "templates"

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="depinfo",
        description="Dependency license information report.",
    )
    add_logging_args(parser)
    sub = parser.add_subparsers(dest="command")

    generate = sub.add_parser(COMMAND_GENERATE, help=DependenciesInfoTask.description)
    generate.add_argument("--config", help="YAML task file.")
    generate.add_argument(
        "--project-dir",
        help="Project directory; licenses/ and build/ default below it (default: config dir or cwd).",
    )
    generate.add_argument("--licenses-dir", help="Directory holding *-LICENSE* files.")
    generate.add_argument("--output", help="CSV report path.")
    generate.add_argument(
        "--runtime",
        action="append",
        metavar="FILE",
        help="File of runtime group:name:version coordinates (repeatable).",
    )
    generate.add_argument(
        "--compile-only",
        action="append",
        metavar="FILE",
        help="File of compile-only coordinates to leave out (repeatable).",
    )
    generate.add_argument("--lockfile", help="Gradle lockfile to read dependencies from.")
    generate.add_argument(
        "--runtime-configuration",
        help="Lockfile configuration holding runtime dependencies (default: runtimeClasspath).",
    )
    generate.add_argument(
        "--compile-only-configuration",
        help="Lockfile configuration holding compile-only dependencies (default: compileOnly).",
    )
    generate.add_argument(
        "--mapping",
        action="append",
        metavar="REGEX=NAME",
        help="Map dependency names matching REGEX to NAME for license lookup (repeatable).",
    )
    generate.add_argument(
        "--build-branch",
        help="Branch used in Custom license URLs (default: $BUILD_BRANCH or master).",
    )

    classify = sub.add_parser(COMMAND_CLASSIFY, help="Print the SPDX identifier of a LICENSE file.")
    classify.add_argument("license_file", help="LICENSE file to classify.")

    sub.add_parser(COMMAND_TEMPLATES, help="List the SPDX identifiers recognised in LICENSE files.")
    return parser


def _run_generate(args: argparse.Namespace) -> int:
    settings = load_settings(args)
    result = DependenciesInfoTask(settings).generate_dependencies_info()
    if not result.written:
        return EXIT_FAILURE
    print(result.output_file)
    return EXIT_OK


def _run_classify(args: argparse.Namespace) -> int:
    path = Path(args.license_file)
    try:
        text = normalize_license_text(read_lines(path))
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("failed to retrieve contents of license file %s: %s", path, exc)
        return EXIT_FAILURE
    print(check_spdx_license(text) or CUSTOM_PREFIX)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=args.log_level, fmt=args.log_format)

    if not args.command:
        parser.print_help(sys.stderr)
        return EXIT_CONFIG_ERROR

    if args.command == COMMAND_TEMPLATES:
        for spdx in spdx_identifiers():
            print(spdx)
        return EXIT_OK

    if args.command == COMMAND_CLASSIFY:
        return _run_classify(args)

    try:
        return _run_generate(args)
    except DepInfoError as exc:
        with LogContext(**exc.as_log_fields()):
            logger.error("%s", exc.message)
        return EXIT_CONFIG_ERROR
    except OSError as exc:
        logger.error("failed to read task input: %s", exc)
        return EXIT_CONFIG_ERROR


if __name__ == "__main__":
    raise SystemExit(main())

"""Command-line interface router for rpgmaker-scraper."""

from __future__ import annotations

import argparse
import json
import os
import sys
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from rpgmaker_scraper.config import (
    LOG_LEVELS,
    ConfigLoadError,
    ConfigValidationError,
    dump_effective_config,
    load_config,
)
from rpgmaker_scraper.domain.query import Query, ScanMode
from rpgmaker_scraper.main import ExitCode
from rpgmaker_scraper.observability.logging import setup_logging, shutdown_logging
from rpgmaker_scraper.project import NameNotFoundError, NameTables, ProjectLoadError, load_project
from rpgmaker_scraper.scanning import ResultAggregator, ScanEngine
from rpgmaker_scraper.ui.render import (
    ConsoleReportWriter,
    color_allowed,
    render_json_report,
    render_text_report,
)


@dataclass(frozen=True, slots=True)
class CLIError(RuntimeError):
    """Typed CLI failure with an explicit process exit code."""

    message: str
    exit_code: int = int(ExitCode.INTERNAL_ERROR)

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _query_id(raw: str) -> int:
    try:
        value = int(raw, 10)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {raw!r}") from exc
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {raw!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse command router for all supported CLI workflows."""

    parser = argparse.ArgumentParser(
        prog="rpgscrape",
        description=(
            "rpgmaker-scraper — find where an RPG Maker MV/MZ project reads or writes\n"
            "a single variable or switch.\n\n"
            "Common workflows:\n"
            "  rpgscrape scan -v 5 --project ./MyGame     Usages of variable #005\n"
            "  rpgscrape scan -s 12 --json                Usages of switch #012 as JSON\n"
            "  rpgscrape config                           Show effective configuration\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Path to rpgscrape TOML config (default: ./rpgscrape.toml if present).",
    )
    common.add_argument(
        "--profile",
        default=None,
        help="Optional config profile overlay name.",
    )
    common.add_argument(
        "--log-level",
        dest="log_level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Override observability.log_level for this invocation.",
    )
    common.add_argument(
        "--no-color",
        action="store_true",
        default=False,
        help="Disable colored output (also respects NO_COLOR env var).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # scan ----------------------------------------------------------------
    scan_parser = subparsers.add_parser(
        "scan",
        parents=[common],
        help="Report every read and write of one variable or switch",
        description=(
            "Scan every map event page and common event of a project for one variable\n"
            "or switch id.\n\n"
            "Exit codes: 0 found, 1 nothing found, 2 config/project error,\n"
            "3 unknown id, 4 internal error.\n\n"
            "Examples:\n"
            "  rpgscrape scan -v 5 --project ./MyGame\n"
            "  rpgscrape scan -s 12 --output switch12.txt\n"
            "  rpgscrape scan -v 5 --json --output var5.json\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    target = scan_parser.add_mutually_exclusive_group(required=True)
    target.add_argument(
        "-v",
        "--variable",
        dest="variable_id",
        type=_query_id,
        metavar="ID",
        help="Variable id to search for.",
    )
    target.add_argument(
        "-s",
        "--switch",
        dest="switch_id",
        type=_query_id,
        metavar="ID",
        help="Switch id to search for.",
    )
    scan_parser.add_argument(
        "--project",
        default=None,
        help="Project root folder containing data/ (default: project.root from config).",
    )
    scan_parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Also write the uncolored report (or JSON with --json) to this file.",
    )
    scan_parser.add_argument("--json", action="store_true", help="Emit JSON output")
    scan_parser.set_defaults(handler=_cmd_scan)

    # config --------------------------------------------------------------
    config_parser = subparsers.add_parser(
        "config",
        parents=[common],
        help="Show effective configuration",
        description=(
            "Display the effective config after merging defaults, file, env, and profile.\n\n"
            "Examples:\n"
            "  rpgscrape config\n"
            "  rpgscrape config --json\n"
            "  rpgscrape config --profile debug\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    config_parser.add_argument("--json", action="store_true", help="Emit JSON output")
    config_parser.set_defaults(handler=_cmd_config)

    return parser


# ---------------------------------------------------------------------------
# Entrypoints
# ---------------------------------------------------------------------------


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse argv, route to a command handler, and return process exit code."""

    parser = build_parser()
    namespace = parser.parse_args(list(argv) if argv is not None else None)
    handler = getattr(namespace, "handler", None)
    if not callable(handler):
        parser.print_help(sys.stderr)
        return int(ExitCode.CONFIG_ERROR)

    try:
        result = handler(namespace)
    except CLIError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code
    return int(result)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _cmd_scan(args: argparse.Namespace) -> int:
    query = _query_from_args(args)
    config = _load_effective_config(args, _scan_overrides(args))
    project_section = _mapping(config, "project")
    output_section = _mapping(config, "output")

    setup_logging(_mapping(config, "observability"), run_id=_new_run_id())
    try:
        try:
            project = load_project(
                str(project_section["root"]),
                query,
                data_dir=str(project_section["data_dir"]),
            )
        except ProjectLoadError as exc:
            raise CLIError(str(exc), exit_code=int(ExitCode.CONFIG_ERROR)) from exc
        except NameNotFoundError as exc:
            raise CLIError(str(exc), exit_code=int(ExitCode.QUERY_ERROR)) from exc

        aggregator = ScanEngine(project.tables, query).scan(project)
        group_blank_lines = bool(output_section.get("group_blank_lines", True))

        if args.output:
            _write_output_file(args, aggregator, project.tables, query, group_blank_lines)

        if _flag(args, "json"):
            _emit_json(render_json_report(aggregator, project.tables, query))
        else:
            writer = ConsoleReportWriter(
                color=bool(output_section.get("color", True)) and color_allowed(args.no_color),
                group_blank_lines=group_blank_lines,
            )
            writer.write(aggregator, project.tables, query)
    finally:
        shutdown_logging()

    return int(ExitCode.NO_RESULTS if aggregator.is_empty else ExitCode.SUCCESS)


def _cmd_config(args: argparse.Namespace) -> int:
    config = _load_effective_config(args, _common_overrides(args))
    profile = _optional_str(getattr(args, "profile", None))

    if _flag(args, "json"):
        _emit_json({"command": "config", "active_profile": profile, "config": config})
        return int(ExitCode.SUCCESS)

    print(f"Active profile: {profile or '(default)'}")
    print(dump_effective_config(config))
    return int(ExitCode.SUCCESS)


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------


def _emit_json(payload: Mapping[str, object]) -> None:
    """Emit a JSON payload to stdout, keeping container discovery order."""

    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _write_output_file(
    args: argparse.Namespace,
    aggregator: ResultAggregator,
    tables: NameTables,
    query: Query,
    group_blank_lines: bool,
) -> None:
    if _flag(args, "json"):
        content = json.dumps(render_json_report(aggregator, tables, query), indent=2) + "\n"
    else:
        content = render_text_report(
            aggregator, tables, query, group_blank_lines=group_blank_lines
        )

    destination = Path(_require_str(args.output, "output")).expanduser()
    try:
        destination.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise CLIError(
            f"unable to write report to {destination}: {exc}",
            exit_code=int(ExitCode.CONFIG_ERROR),
        ) from exc


# ---------------------------------------------------------------------------
# Helpers: config, query, resolution
# ---------------------------------------------------------------------------


def _query_from_args(args: argparse.Namespace) -> Query:
    if args.variable_id is not None:
        return Query(ScanMode.VARIABLES, args.variable_id)
    return Query(ScanMode.SWITCHES, args.switch_id)


def _common_overrides(args: argparse.Namespace) -> dict[str, object]:
    overrides: dict[str, object] = {}
    log_level = _optional_str(getattr(args, "log_level", None))
    if log_level is not None:
        overrides["observability.log_level"] = log_level
    if _flag(args, "no_color"):
        overrides["output.color"] = False
    return overrides


def _scan_overrides(args: argparse.Namespace) -> dict[str, object]:
    overrides = _common_overrides(args)
    project = _optional_str(getattr(args, "project", None))
    if project is not None:
        # Relative to the working directory, not to the config file.
        overrides["project.root"] = Path(project).expanduser().resolve().as_posix()
    return overrides


def _load_effective_config(
    args: argparse.Namespace,
    overrides: Mapping[str, object],
) -> dict[str, object]:
    config_path = _optional_str(getattr(args, "config_path", None))
    profile = _optional_str(getattr(args, "profile", None))

    try:
        loaded = load_config(config_path, profile=profile, cli_overrides=overrides)
    except (ConfigLoadError, ConfigValidationError) as exc:
        raise CLIError(str(exc), exit_code=int(ExitCode.CONFIG_ERROR)) from exc

    return dict(loaded)


def _mapping(config: Mapping[str, object], section: str) -> Mapping[str, object]:
    value = config.get(section)
    if not isinstance(value, Mapping):
        raise CLIError(f"config section [{section}] is missing", exit_code=2)
    return value


def _new_run_id() -> str:
    return f"scan-{time.strftime('%Y%m%dT%H%M%SZ', time.gmtime())}-{os.getpid()}"


def _require_str(value: object, name: str) -> str:
    if not isinstance(value, str):
        raise CLIError(f"invalid {name}: expected string", exit_code=2)
    cleaned = value.strip()
    if not cleaned:
        raise CLIError(f"invalid {name}: value cannot be empty", exit_code=2)
    return cleaned


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise CLIError("invalid optional string argument", exit_code=2)
    cleaned = value.strip()
    return cleaned or None


def _flag(args: argparse.Namespace, name: str) -> bool:
    value = getattr(args, name, False)
    return bool(value)


__all__ = ["CLIError", "build_parser", "run_cli"]

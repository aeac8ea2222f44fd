"""
rpgmaker-scraper — CLI subprocess contracts

File: tests/integration/test_scan_cli.py
Last updated: 2026-10-19

Purpose
- Run `python -m rpgmaker_scraper` against a generated project and enforce the
  exit-code contract, report output, JSON output, and report files.
"""

from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

from project_fixtures import command, common_event, conditions, event, page, write_project

PROJECT_ROOT = Path(__file__).resolve().parents[2]
SRC_PATH = PROJECT_ROOT / "src"


def _run_cli(cwd: Path, *args: str) -> subprocess.CompletedProcess[str]:
    env = {
        key: value
        for key, value in os.environ.items()
        if not key.startswith("RPGSCRAPE_")
    }
    existing_pythonpath = env.get("PYTHONPATH")
    src_pythonpath = str(SRC_PATH)
    env["PYTHONPATH"] = (
        src_pythonpath
        if not existing_pythonpath
        else f"{src_pythonpath}{os.pathsep}{existing_pythonpath}"
    )
    env["NO_COLOR"] = "1"
    return subprocess.run(
        [sys.executable, "-m", "rpgmaker_scraper", *args],
        cwd=cwd,
        text=True,
        capture_output=True,
        check=False,
        env=env,
    )


def _game(root: Path) -> Path:
    guard = event(
        3,
        "Guard",
        [
            page(
                [command(111, 1, 5, 0, 10, 1), command(412)],
                gate=conditions(switch1=(2, True)),
            ),
        ],
        x=7,
        y=8,
    )
    return write_project(
        root / "game",
        variables={5: "Gold", 6: "Bonus"},
        switches={2: "Night"},
        maps={1: ("Town", [guard])},
        common_events=[common_event(1, "Payday", [command(122, 5, 5, 1, 0, 100)])],
    )


def test_scan_prints_report_and_exits_zero(tmp_path: Path) -> None:
    game = _game(tmp_path)

    completed = _run_cli(tmp_path, "scan", "-v", "5", "--project", str(game))

    assert completed.returncode == 0, completed.stderr
    assert completed.stdout.splitlines() == [
        "=========================================",
        "Found 1 map and 1 common event yielding 2 separate instances "
        "using variable #005 ('Gold')",
        "=========================================",
        "",
        "Map001.json ('Town')",
        "-" * 50,
        "ON [READ]",
        "\t@ [7, 8] on Event #003 ('Guard') on Event Page #01:",
        "\t\tLine 001 | IF {Gold} >= 10:",
        "",
        "CommonEvents.json #001 ('Payday')",
        "-" * 50,
        "ON [WRITE]",
        "\t@ Common Event #001 ('Payday'):",
        "\t\tLine 001 | {Gold} += 100",
        "=========================================",
    ]
    assert "\x1b[" not in completed.stdout


def test_relative_project_path_resolves_against_working_directory(tmp_path: Path) -> None:
    _game(tmp_path)

    completed = _run_cli(tmp_path, "scan", "--switch", "2", "--project", "game")

    assert completed.returncode == 0, completed.stderr
    assert "Found 1 map yielding 1 separate instance using switch #002 ('Night')" in (
        completed.stdout
    )
    assert completed.stdout.splitlines()[5:9] == [
        "-" * 50,
        "ON [READ]",
        "\t@ [7, 8] on Event #003 ('Guard') on Event Page #01:",
        "\t\tIF {Night}:",
    ]


def test_scan_without_usages_exits_one(tmp_path: Path) -> None:
    game = _game(tmp_path)

    completed = _run_cli(tmp_path, "scan", "-v", "6", "--project", str(game))

    assert completed.returncode == 1
    assert completed.stdout == "Couldn't locate any usages of variable #006\n"


def test_unknown_variable_aborts_before_scanning(tmp_path: Path) -> None:
    game = _game(tmp_path)

    completed = _run_cli(tmp_path, "scan", "-v", "99", "--project", str(game))

    assert completed.returncode == 3
    assert completed.stdout == ""
    assert completed.stderr.startswith("error: ")


def test_unknown_switch_still_scans(tmp_path: Path) -> None:
    game = _game(tmp_path)

    completed = _run_cli(tmp_path, "scan", "-s", "40", "--project", str(game))

    assert completed.returncode == 1
    assert "switch #040" in completed.stdout


def test_missing_data_folder_is_a_config_error(tmp_path: Path) -> None:
    completed = _run_cli(tmp_path, "scan", "-v", "5", "--project", str(tmp_path / "nowhere"))

    assert completed.returncode == 2
    assert "doesn't exist" in completed.stderr


def test_json_output_and_report_file(tmp_path: Path) -> None:
    game = _game(tmp_path)
    report_path = tmp_path / "var5.json"

    completed = _run_cli(
        tmp_path,
        "scan",
        "-v",
        "5",
        "--project",
        str(game),
        "--json",
        "--output",
        str(report_path),
    )

    assert completed.returncode == 0, completed.stderr
    payload = json.loads(completed.stdout)
    assert payload == json.loads(report_path.read_text(encoding="utf-8"))
    assert payload["mode"] == "variables"
    assert payload["query_id"] == 5
    assert payload["query_name"] == "Gold"
    assert payload["container_count"] == 2
    assert payload["instance_count"] == 2
    assert list(payload["maps"]) == ["1"]
    assert payload["maps"]["1"]["file"] == "Map001.json"
    assert [item["access"] for item in payload["common_events"]["1"]["findings"]] == ["WRITE"]


def test_text_report_file_matches_console_output(tmp_path: Path) -> None:
    game = _game(tmp_path)
    report_path = tmp_path / "var5.txt"

    completed = _run_cli(
        tmp_path, "scan", "-v", "5", "--project", str(game), "-o", str(report_path)
    )

    assert completed.returncode == 0, completed.stderr
    assert report_path.read_text(encoding="utf-8") == completed.stdout


def test_variable_and_switch_flags_are_mutually_exclusive(tmp_path: Path) -> None:
    completed = _run_cli(tmp_path, "scan", "-v", "5", "-s", "2")

    assert completed.returncode == 2
    assert "not allowed with argument" in completed.stderr


def test_config_command_reports_file_and_profile(tmp_path: Path) -> None:
    (tmp_path / "rpgscrape.toml").write_text(
        '[project]\nroot = "game"\n[output]\ngroup_blank_lines = false\n',
        encoding="utf-8",
    )

    completed = _run_cli(tmp_path, "config", "--json", "--profile", "plain")

    assert completed.returncode == 0, completed.stderr
    payload = json.loads(completed.stdout)
    assert payload["command"] == "config"
    assert payload["active_profile"] == "plain"
    assert payload["config"]["output"] == {"color": False, "group_blank_lines": False}
    assert payload["config"]["project"]["root"].endswith("/game")


def test_invalid_config_file_is_a_config_error(tmp_path: Path) -> None:
    (tmp_path / "rpgscrape.toml").write_text("[output]\ncolour = true\n", encoding="utf-8")

    completed = _run_cli(tmp_path, "config")

    assert completed.returncode == 2
    assert "output.colour: unknown field" in completed.stderr

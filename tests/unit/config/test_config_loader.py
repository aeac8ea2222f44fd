"""
rpgmaker-scraper — unit tests for the runtime config loader

File: tests/unit/config/test_config_loader.py
Last updated: 2026-10-19

Purpose
- Validate precedence (CLI > env > file > defaults), profile overlays, and
  path normalization.

Functional requirements
- Offline and independent of the caller's working directory and environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from rpgmaker_scraper.config import (
    ConfigLoadError,
    ConfigValidationError,
    dump_effective_config,
    load_config,
    load_config_file,
)

if TYPE_CHECKING:
    from pathlib import Path


def _write_config(path: Path, body: str) -> Path:
    path.write_text(body, encoding="utf-8")
    return path


def test_defaults_apply_without_a_config_file(tmp_path: Path) -> None:
    config = load_config(environ={}, cwd=tmp_path)

    assert config["meta"]["schema_version"] == 1
    assert config["project"]["root"] == tmp_path.resolve().as_posix()
    assert config["project"]["data_dir"] == "data"
    assert config["output"] == {"color": True, "group_blank_lines": True}
    assert config["observability"]["log_level"] == "WARNING"
    assert config["observability"]["log_to_file"] is False


def test_explicit_config_path_must_exist(tmp_path: Path) -> None:
    with pytest.raises(ConfigLoadError, match="config file not found"):
        load_config(tmp_path / "missing.toml", environ={})


def test_invalid_toml_is_a_load_error(tmp_path: Path) -> None:
    path = _write_config(tmp_path / "rpgscrape.toml", "[project\nroot = 1")

    with pytest.raises(ConfigLoadError, match="invalid TOML"):
        load_config(path, environ={})


def test_file_values_are_validated(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path / "rpgscrape.toml",
        '[output]\ncolor = "yes"\n[observability]\nlog_level = "LOUD"\nshiny = true\n',
    )

    with pytest.raises(ConfigValidationError) as excinfo:
        load_config(path, environ={})

    paths = {issue.path for issue in excinfo.value.issues}
    assert paths == {"output.color", "observability.log_level", "observability.shiny"}


def test_newer_schema_version_is_rejected_with_guidance(tmp_path: Path) -> None:
    path = _write_config(tmp_path / "rpgscrape.toml", "[meta]\nschema_version = 2\n")

    with pytest.raises(ConfigValidationError, match="upgrade rpgmaker-scraper"):
        load_config(path, environ={})


def test_precedence_cli_over_env_over_file(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path / "rpgscrape.toml",
        '[output]\ncolor = false\ngroup_blank_lines = false\n[observability]\nlog_level = "INFO"\n',
    )

    config = load_config(
        path,
        environ={
            "RPGSCRAPE_OUTPUT_COLOR": "true",
            "RPGSCRAPE_OBSERVABILITY_LOG_LEVEL": "ERROR",
        },
        cli_overrides={"observability.log_level": "DEBUG"},
    )

    assert config["output"]["color"] is True
    assert config["output"]["group_blank_lines"] is False
    assert config["observability"]["log_level"] == "DEBUG"


def test_env_boolean_must_parse(tmp_path: Path) -> None:
    with pytest.raises(ConfigLoadError, match="RPGSCRAPE_OUTPUT_COLOR"):
        load_config(environ={"RPGSCRAPE_OUTPUT_COLOR": "maybe"}, cwd=tmp_path)


def test_paths_resolve_relative_to_config_file(tmp_path: Path) -> None:
    config_dir = tmp_path / "conf"
    config_dir.mkdir()
    path = _write_config(
        config_dir / "rpgscrape.toml",
        '[project]\nroot = "../game"\ndata_dir = "www/data"\n',
    )

    config = load_config(path, environ={})

    assert config["project"]["root"] == (tmp_path / "game").resolve().as_posix()
    assert config["project"]["data_dir"] == "www/data"
    assert config["observability"]["log_dir"] == (
        config_dir.resolve() / ".rpgscrape" / "logs"
    ).as_posix()


def test_builtin_profile_overlays_apply(tmp_path: Path) -> None:
    config = load_config(profile="debug", environ={}, cwd=tmp_path)

    assert config["observability"]["log_level"] == "DEBUG"
    assert config["observability"]["log_to_file"] is True


def test_profile_can_be_selected_from_env(tmp_path: Path) -> None:
    config = load_config(environ={"RPGSCRAPE_PROFILE": "plain"}, cwd=tmp_path)

    assert config["output"]["color"] is False


def test_custom_profile_from_file(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path / "rpgscrape.toml",
        '[profiles.ci.output]\ncolor = false\ngroup_blank_lines = false\n',
    )

    config = load_config(path, profile="ci", environ={})

    assert config["output"] == {"color": False, "group_blank_lines": False}
    assert "quiet" in config["profiles"]


def test_unknown_profile_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ConfigValidationError, match="not defined"):
        load_config(profile="nope", environ={}, cwd=tmp_path)


def test_dump_effective_config_is_deterministic(tmp_path: Path) -> None:
    config = load_config(environ={}, cwd=tmp_path)

    dumped = dump_effective_config(config)

    assert dumped == dump_effective_config(load_config(environ={}, cwd=tmp_path))
    assert json.loads(dumped)["output"]["color"] is True


def test_load_config_file_requires_the_file(tmp_path: Path) -> None:
    path = _write_config(tmp_path / "custom.toml", '[project]\ndata_dir = "www/data"\n')

    assert load_config_file(path)["project"]["data_dir"] == "www/data"
    with pytest.raises(ConfigLoadError):
        load_config_file(tmp_path / "absent.toml")

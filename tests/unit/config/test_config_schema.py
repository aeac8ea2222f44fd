"""Unit tests for config schema validation and merging."""

from __future__ import annotations

import pytest

from rpgmaker_scraper.config.schema import (
    ConfigValidationError,
    apply_profile_overlay,
    default_config,
    merge_config,
    validate_config,
)


def test_default_config_is_valid() -> None:
    result = validate_config(default_config())

    assert result.is_valid
    assert result.issues == ()


def test_default_config_returns_independent_copies() -> None:
    first = default_config()
    first["output"]["color"] = False

    assert default_config()["output"]["color"] is True


def test_missing_sections_are_reported() -> None:
    result = validate_config({"meta": {"schema_version": 1}})

    assert not result.is_valid
    assert {issue.path for issue in result.issues} == {"observability", "output", "project"}


def test_non_object_root_is_reported() -> None:
    result = validate_config(["not", "an", "object"])

    assert [issue.path for issue in result.issues] == ["<root>"]


def test_profile_names_and_sections_are_validated() -> None:
    config = default_config()
    payload = merge_config(
        config,
        {"profiles": {"Bad Name": {}, "fine": {"meta": {"schema_version": 1}}}},
    )

    result = validate_config(payload)

    assert {issue.path for issue in result.issues} == {"profiles.Bad Name", "profiles.fine.meta"}


def test_log_level_is_case_insensitive() -> None:
    payload = merge_config(default_config(), {"observability": {"log_level": "debug"}})

    result = validate_config(payload)

    assert result.config is not None
    assert result.config["observability"]["log_level"] == "DEBUG"


def test_merge_config_is_deep_and_leaves_inputs_untouched() -> None:
    base = {"output": {"color": True, "group_blank_lines": True}}
    overlay = {"output": {"color": False}}

    merged = merge_config(base, overlay)

    assert merged == {"output": {"color": False, "group_blank_lines": True}}
    assert base["output"]["color"] is True


def test_apply_profile_overlay_rejects_unknown_profile() -> None:
    with pytest.raises(ConfigValidationError):
        apply_profile_overlay(default_config(), "missing")


def test_apply_profile_overlay_quiet_raises_log_level() -> None:
    config = apply_profile_overlay(default_config(), "quiet")

    assert config["observability"]["log_level"] == "ERROR"

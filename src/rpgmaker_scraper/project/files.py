"""JSON document access for an RPG Maker project's ``data/`` folder."""

from __future__ import annotations

import json
from pathlib import Path

from rpgmaker_scraper.constants import DEFAULT_DATA_DIR


class ProjectLoadError(ValueError):
    """Raised when a required project file is missing, unreadable, or malformed."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


def resolve_data_dir(project_root: str | Path, data_dir: str = DEFAULT_DATA_DIR) -> Path:
    """Return the project's data folder, failing when it does not exist."""

    root = Path(project_root).expanduser().resolve()
    candidate = Path(data_dir)
    resolved = candidate if candidate.is_absolute() else root / candidate
    if not resolved.is_dir():
        raise ProjectLoadError(
            f"'{resolved}' doesn't exist; point --project at the root folder of an "
            "RPG Maker project (the one containing data/)",
            path=resolved,
        )
    return resolved


def read_json_document(path: Path) -> object:
    """Parse one JSON document, mapping every failure to ``ProjectLoadError``."""

    if not path.is_file():
        raise ProjectLoadError(f"required project file not found: {path}", path=path)
    try:
        # RPG Maker writes UTF-8 and occasionally a BOM.
        with path.open("r", encoding="utf-8-sig") as handle:
            return json.load(handle)
    except json.JSONDecodeError as exc:
        raise ProjectLoadError(f"invalid JSON in {path}: {exc}", path=path) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ProjectLoadError(f"unable to read {path}: {exc}", path=path) from exc


def read_json_array(path: Path) -> list[object]:
    document = read_json_document(path)
    if not isinstance(document, list):
        raise ProjectLoadError(f"expected a JSON array at the root of {path}", path=path)
    return document


def read_json_object(path: Path) -> dict[str, object]:
    document = read_json_document(path)
    if not isinstance(document, dict):
        raise ProjectLoadError(f"expected a JSON object at the root of {path}", path=path)
    return document


__all__ = [
    "ProjectLoadError",
    "read_json_array",
    "read_json_document",
    "read_json_object",
    "resolve_data_dir",
]

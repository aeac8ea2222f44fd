"""Project data access: JSON documents, name tables, and the project loader."""

from rpgmaker_scraper.project.files import (
    ProjectLoadError,
    read_json_array,
    read_json_document,
    read_json_object,
    resolve_data_dir,
)
from rpgmaker_scraper.project.loader import MapData, ProjectData, ProjectLoader, load_project
from rpgmaker_scraper.project.name_tables import NameNotFoundError, NameTables

__all__ = [
    "MapData",
    "NameNotFoundError",
    "NameTables",
    "ProjectData",
    "ProjectLoadError",
    "ProjectLoader",
    "load_project",
    "read_json_array",
    "read_json_document",
    "read_json_object",
    "resolve_data_dir",
]

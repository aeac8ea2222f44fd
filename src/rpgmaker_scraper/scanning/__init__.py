"""Command decoding and access classification for one (mode, id) query."""

from rpgmaker_scraper.scanning.aggregator import FindingGroup, ResultAggregator
from rpgmaker_scraper.scanning.engine import ScanEngine, scan_project
from rpgmaker_scraper.scanning.findings import (
    AccessKind,
    ContainerKey,
    ContainerKind,
    Finding,
    Match,
    OwnerKind,
    OwnerRef,
)
from rpgmaker_scraper.scanning.matchers import AccessClassifier
from rpgmaker_scraper.scanning.script_matcher import ScriptMatcher

__all__ = [
    "AccessClassifier",
    "AccessKind",
    "ContainerKey",
    "ContainerKind",
    "Finding",
    "FindingGroup",
    "Match",
    "OwnerKind",
    "OwnerRef",
    "ResultAggregator",
    "ScanEngine",
    "ScriptMatcher",
    "scan_project",
]

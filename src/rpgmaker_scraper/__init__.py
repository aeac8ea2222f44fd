"""
rpgmaker-scraper — package root.

File: src/rpgmaker_scraper/__init__.py
Last updated: 2026-10-19

Purpose
- Locate every read and write of one RPG Maker variable or switch across a
  project's maps and common events.

Functional requirements
- Must not have side effects at import time (no config loading, no logging init).
"""

__version__ = "0.3.0"

__all__ = ["__version__"]

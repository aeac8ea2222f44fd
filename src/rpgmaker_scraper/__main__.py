"""Module entrypoint for ``python -m rpgmaker_scraper``."""

from __future__ import annotations

from rpgmaker_scraper.main import cli_entrypoint

if __name__ == "__main__":
    raise SystemExit(cli_entrypoint())

"""Entry point for invoking a foier scrape via the CLI."""

from __future__ import annotations

from foier.cli import run

if __name__ == "__main__":
    run()

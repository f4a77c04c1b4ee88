from __future__ import annotations

from foier.cli import run

run()

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Target:
    uri: str
    name: str
    id: int

from __future__ import annotations
from dataclasses import dataclass, field as dc_field
from typing import Literal

Method = Literal[
    "selector", "structured", "proximity", "window",
    "power", "charge_power", "discharge_power", "idle_power",
    "missing",
]

@dataclass
class Extraction:
    field: str
    value: float | None
    method: Method
    evidence: str | None
    reasons: list[str] = dc_field(default_factory=list)

    @property
    def missing(self) -> bool:
        return self.value is None

from __future__ import annotations
import re

from .base import Extraction, Method
from ..validate import parse_signed

# Optional colon/whitespace, optional sign (ASCII or U+2212), mandatory W unit.
_VALUE = r"\s*:?\s*([+\-−]?[0-9]+(?:\.[0-9]+)?)\s*w(?![a-z])"

# Precedence order matters: first label that matches wins.
POWER_LABELS: tuple[tuple[Method, re.Pattern[str]], ...] = (
    ("power", re.compile(r"(?<![a-z])(?<!charge )(?<!idle )power" + _VALUE, re.IGNORECASE)),
    ("charge_power", re.compile(r"(?<![a-z])charge\s?power" + _VALUE, re.IGNORECASE)),
    ("discharge_power", re.compile(r"(?<![a-z])discharge\s?power" + _VALUE, re.IGNORECASE)),
    ("idle_power", re.compile(r"(?<![a-z])idle\s?power" + _VALUE, re.IGNORECASE)),
)

def extract_power(text: str) -> Extraction:
    """
    Signed instantaneous power in W. The sign is taken as found for every
    label: negative means charging, positive discharging. A page without any
    power label yields 0.0, which is not an error.
    """
    for method, pat in POWER_LABELS:
        m = pat.search(text)
        if not m:
            continue
        val = parse_signed(m.group(1))
        if val is None:
            continue
        return Extraction("power", val, method, m.group(0), [f"{method}_label_match"])
    return Extraction("power", 0.0, "missing", None, ["power_label_not_found"])

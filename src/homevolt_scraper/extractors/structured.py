from __future__ import annotations
import re
from types import MappingProxyType

NUMBER = r"[0-9]+(?:\.[0-9]+)?"

# A number only starts where a digit run starts; keeps the scan linear on long runs.
RUN_START = r"(?<![0-9.])"

# "2.11 kWh charged", "8.98 kWh discharged"
STRUCTURED_PATTERNS = MappingProxyType({
    "charged": re.compile(rf"{RUN_START}({NUMBER})\s*kwh\s*charged", re.IGNORECASE),
    "discharged": re.compile(rf"{RUN_START}({NUMBER})\s*kwh\s*discharged", re.IGNORECASE),
})

def extract_structured(text: str, field: str) -> str | None:
    pat = STRUCTURED_PATTERNS.get(field)
    if pat is None:
        return None
    m = pat.search(text)
    if not m:
        return None
    return m.group(1)

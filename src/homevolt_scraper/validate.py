from __future__ import annotations
import re

UNICODE_MINUS = "−"

# Maximal runs of digits and dots; runs with more than one dot are skipped.
NUMBER_RUN_RE = re.compile(r"[0-9.]+")

def normalize_minus(s: str) -> str:
    return s.replace(UNICODE_MINUS, "-")

def parse_number(s: str | None) -> float | None:
    """
    Return the first plausible unsigned decimal in `s`, or None.

    "02.11 kwh charged" -> 2.11, "charged: 5." -> 5.0, "1.2.3" -> None,
    "." -> None. Signs are ignored; energy counters are never negative.
    """
    if not s:
        return None
    for m in NUMBER_RUN_RE.finditer(s):
        run = m.group(0)
        if run.count(".") > 1:
            continue
        try:
            return float(run)
        except ValueError:
            # a lone "."
            continue
    return None

def parse_signed(s: str) -> float | None:
    s = normalize_minus(s.strip())
    try:
        return float(s)
    except ValueError:
        return None

from __future__ import annotations
import json
import os
from typing import Any, Iterable

def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)

def append_jsonl(path: str, rows: Iterable[dict[str, Any]]) -> None:
    ensure_dir(os.path.dirname(path) or ".")
    with open(path, "a", encoding="utf-8") as f:
        for r in rows:
            f.write(json.dumps(r, ensure_ascii=False) + "\n")

def safe_lower(s: str) -> str:
    return s.lower() if isinstance(s, str) else ""

def text_window(text: str, center: int, radius: int) -> str:
    start = max(0, center - radius)
    end = min(len(text), center + radius)
    return text[start:end]

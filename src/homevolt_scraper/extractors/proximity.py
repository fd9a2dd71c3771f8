from __future__ import annotations
import re
from functools import lru_cache
from typing import Sequence

from ..utils import safe_lower, text_window
from .structured import NUMBER, RUN_START

WINDOW_RADIUS = 64

NUMBER_KWH_RE = re.compile(rf"{RUN_START}{NUMBER}\s*kwh")

@lru_cache(maxsize=None)
def compile_templates(keywords: tuple[str, ...]) -> tuple[re.Pattern[str], ...]:
    """
    Keyword/number templates, most specific first:
      1) keyword ... <number> kwh   (same line)
      2) <number> kwh ... keyword   (same line)
      3) keyword ... <number>       (same line, no unit)
    """
    kw = _keyword_group(keywords)
    return (
        re.compile(rf"({kw})[^\n]*?{RUN_START}({NUMBER})\s*kwh"),
        re.compile(rf"{RUN_START}({NUMBER})\s*kwh[^\n]*?({kw})"),
        re.compile(rf"({kw})[^\n]*?({NUMBER})"),
    )

def _keyword_group(keywords: tuple[str, ...]) -> str:
    return "|".join(re.escape(k.lower()) for k in keywords)

@lru_cache(maxsize=None)
def _anchors(keywords: tuple[str, ...]) -> tuple[re.Pattern[str], ...]:
    # where each template can start; paired with compile_templates by position
    kw_re = re.compile(_keyword_group(keywords))
    return (kw_re, NUMBER_KWH_RE, kw_re)

@lru_cache(maxsize=None)
def _keyword_re(keyword: str) -> re.Pattern[str]:
    return re.compile(re.escape(keyword), re.IGNORECASE)

def regex_find_kwh(text: str, keywords: Sequence[str]) -> str | None:
    """
    Return the whole matched span of the first template that matches; the
    numeric scanner finishes the job.

    Templates never cross a newline, so each line is tried on its own. Within a
    line only the first anchor can start the leftmost match: every later anchor
    sees a suffix of the same line.
    """
    key = tuple(keywords)
    lines = safe_lower(text).split("\n")
    for pat, anchor in zip(compile_templates(key), _anchors(key)):
        for line in lines:
            a = anchor.search(line)
            if not a:
                continue
            m = pat.match(line, a.start())
            if m:
                return m.group(0)
    return None

def find_value_near(text: str, keywords: Sequence[str]) -> str:
    for kw in keywords:
        m = _keyword_re(kw).search(text)
        if m:
            return text_window(text, m.start(), WINDOW_RADIUS)
    return ""

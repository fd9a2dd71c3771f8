from __future__ import annotations
from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

def select_text(doc: BeautifulSoup | None, selector: str | None) -> str:
    """
    Join the trimmed text of every element matching `selector`, in document
    order, with single spaces. Empty string when there is nothing to read.
    """
    if doc is None or not selector or not selector.strip():
        return ""
    try:
        nodes = doc.select(selector)
    except SelectorSyntaxError:
        return ""
    parts = []
    for node in nodes:
        txt = node.get_text().strip()
        if txt:
            parts.append(txt)
    return " ".join(parts)

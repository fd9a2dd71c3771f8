from .base import Extraction
from .selector import select_text
from .structured import extract_structured
from .proximity import regex_find_kwh, find_value_near, compile_templates
from .power import extract_power

__all__ = [
    "Extraction",
    "select_text",
    "extract_structured",
    "regex_find_kwh",
    "find_value_near",
    "compile_templates",
    "extract_power",
]

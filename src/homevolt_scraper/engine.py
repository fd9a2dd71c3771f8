from __future__ import annotations

import logging
from dataclasses import dataclass, field as dc_field
from types import MappingProxyType
from typing import Any, Callable, Mapping

from bs4 import BeautifulSoup

from .extractors import (
    Extraction,
    select_text,
    extract_structured,
    regex_find_kwh,
    find_value_near,
    extract_power,
)
from .validate import parse_number

log = logging.getLogger(__name__)

MANDATORY_FIELDS = ("charged", "discharged")

# Tried in order; "charge" also hits "discharge", the more specific key comes first.
FIELD_KEYWORDS = MappingProxyType({
    "charged": ("charged", "charge"),
    "discharged": ("discharged", "discharge"),
})


class MissingFieldError(ValueError):
    """Raised when one or more mandatory energy fields could not be resolved."""

    def __init__(self, fields: list[str] | tuple[str, ...]):
        self.fields = tuple(fields)
        super().__init__("failed to parse: " + ", ".join(self.fields))


@dataclass(frozen=True)
class ExtractionInput:
    content: str
    selectors: Mapping[str, str] = dc_field(default_factory=lambda: MappingProxyType({}))
    source: str = ""
    markup: bool = True

    def __post_init__(self) -> None:
        # private read-only copy; later changes to the caller's dict do not leak in
        object.__setattr__(self, "selectors", MappingProxyType(dict(self.selectors or {})))


@dataclass(frozen=True)
class MeasurementResult:
    charged_kwh: float
    discharged_kwh: float
    power_w: float
    source: str = ""
    # provenance per field; not part of the measured value
    extractions: Mapping[str, Extraction] = dc_field(
        default_factory=lambda: MappingProxyType({}), compare=False, repr=False
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "kWh_charged": self.charged_kwh,
            "kWh_discharged": self.discharged_kwh,
            "power_w": self.power_w,
            "source": self.source,
        }


@dataclass(frozen=True)
class _Page:
    text: str
    doc: BeautifulSoup | None
    selectors: Mapping[str, str]


def _load_page(inp: ExtractionInput) -> _Page:
    if not inp.markup:
        return _Page(text=inp.content or "", doc=None, selectors=inp.selectors)
    doc = BeautifulSoup(inp.content or "", "html.parser")
    return _Page(text=doc.get_text(), doc=doc, selectors=inp.selectors)


# ----------------------------
# Tiers (most specific first)
# ----------------------------
def _selector_tier(page: _Page, field: str) -> str | None:
    return select_text(page.doc, page.selectors.get(field)) or None

def _structured_tier(page: _Page, field: str) -> str | None:
    return extract_structured(page.text, field)

def _proximity_tier(page: _Page, field: str) -> str | None:
    return regex_find_kwh(page.text, FIELD_KEYWORDS[field])

def _window_tier(page: _Page, field: str) -> str | None:
    return find_value_near(page.text, FIELD_KEYWORDS[field]) or None


Tier = Callable[[_Page, str], "str | None"]

ENERGY_TIERS: tuple[tuple[str, Tier], ...] = (
    ("selector", _selector_tier),
    ("structured", _structured_tier),
    ("proximity", _proximity_tier),
    ("window", _window_tier),
)


def resolve_field(page: _Page, field: str) -> Extraction:
    """
    Fold the energy tiers for one field: the first tier whose raw text holds a
    parseable number wins. An unresolved field comes back with method "missing".
    """
    reasons: list[str] = []
    for name, tier in ENERGY_TIERS:
        raw = tier(page, field)
        if not raw:
            reasons.append(f"{field}_{name}_empty")
            continue
        value = parse_number(raw)
        if value is None:
            reasons.append(f"{field}_{name}_unparseable")
            continue
        reasons.append(f"{field}_{name}_match")
        log.debug("%s resolved by %s tier: %s", field, name, value)
        return Extraction(field, value, name, raw, reasons)  # type: ignore[arg-type]
    reasons.append(f"{field}_not_found")
    log.debug("%s not resolved by any tier", field)
    return Extraction(field, None, "missing", None, reasons)


def extract(inp: ExtractionInput) -> MeasurementResult:
    page = _load_page(inp)

    extr: dict[str, Extraction] = {}
    for field in MANDATORY_FIELDS:
        extr[field] = resolve_field(page, field)

    extr["power"] = extract_power(page.text)
    log.debug("power resolved by %s: %s", extr["power"].method, extr["power"].value)

    missing = [f for f in MANDATORY_FIELDS if extr[f].missing]
    if missing:
        raise MissingFieldError(missing)

    return MeasurementResult(
        charged_kwh=extr["charged"].value,  # type: ignore[arg-type]
        discharged_kwh=extr["discharged"].value,  # type: ignore[arg-type]
        power_w=extr["power"].value or 0.0,
        source=inp.source,
        extractions=MappingProxyType(extr),
    )


def parse_html(html: str, source: str = "", charged_selector: str = "", discharged_selector: str = "") -> MeasurementResult:
    selectors = {}
    if charged_selector:
        selectors["charged"] = charged_selector
    if discharged_selector:
        selectors["discharged"] = discharged_selector
    return extract(ExtractionInput(content=html, selectors=selectors, source=source))

from __future__ import annotations
from dataclasses import dataclass
import os

OUTPUT_FORMATS = ("text", "json")

DEFAULT_URL = "http://192.168.107.83/battery/"

@dataclass(frozen=True)
class Settings:
    url: str = DEFAULT_URL
    charged_selector: str = ""
    discharged_selector: str = ""
    user: str = ""
    password: str = ""

    # HTTP
    timeout_s: float = 5.0
    max_retries: int = 1

    # Headless browser (the dashboard fills its values in with JavaScript)
    render: bool = True
    wait_selector: str = ""
    wait_s: float = 2.0

    # Output
    output_format: str = "text"
    output_path: str = ""
    log_level: str = "INFO"

    # Some dashboard revisions label the counters the other way round.
    swap_labels: bool = False

def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc

def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc

def load_settings() -> Settings:
    output_format = os.getenv("HOMEVOLT_FORMAT", "text").strip().lower()
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"HOMEVOLT_FORMAT must be one of {', '.join(OUTPUT_FORMATS)}, got {output_format!r}")

    timeout_s = _env_float("HOMEVOLT_TIMEOUT", 5.0)
    if timeout_s <= 0:
        raise ValueError("HOMEVOLT_TIMEOUT must be > 0")
    max_retries = _env_int("HOMEVOLT_MAX_RETRIES", 1)
    if max_retries < 1:
        raise ValueError("HOMEVOLT_MAX_RETRIES must be >= 1")
    wait_s = _env_float("HOMEVOLT_WAIT", 2.0)
    if wait_s < 0:
        raise ValueError("HOMEVOLT_WAIT must be >= 0")

    return Settings(
        url=os.getenv("HOMEVOLT_URL", DEFAULT_URL).strip() or DEFAULT_URL,
        charged_selector=os.getenv("HOMEVOLT_CHARGED_SELECTOR", "").strip(),
        discharged_selector=os.getenv("HOMEVOLT_DISCHARGED_SELECTOR", "").strip(),
        user=os.getenv("HOMEVOLT_USER", "").strip(),
        password=os.getenv("HOMEVOLT_PASS", "").strip(),
        timeout_s=timeout_s,
        max_retries=max_retries,
        render=os.getenv("HOMEVOLT_RENDER", "1").strip() == "1",
        wait_selector=os.getenv("HOMEVOLT_WAIT_SELECTOR", "").strip(),
        wait_s=wait_s,
        output_format=output_format,
        output_path=os.getenv("HOMEVOLT_OUTPUT", "").strip(),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        swap_labels=os.getenv("HOMEVOLT_SWAP_LABELS", "0").strip() == "1",
    )

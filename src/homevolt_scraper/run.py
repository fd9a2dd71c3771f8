from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys

from .config import OUTPUT_FORMATS, Settings, load_settings
from .engine import MeasurementResult, MissingFieldError, parse_html
from .fetch import FetchError, PageFetcher
from .utils import append_jsonl

log = logging.getLogger(__name__)


def swap_labels(res: MeasurementResult) -> MeasurementResult:
    """Caller policy for dashboards that label the two counters the other way round."""
    return dataclasses.replace(res, charged_kwh=res.discharged_kwh, discharged_kwh=res.charged_kwh)


def format_text(res: MeasurementResult) -> str:
    return "\n".join([
        f"kWh charged: {res.charged_kwh:.3f}",
        f"kWh discharged: {res.discharged_kwh:.3f}",
        f"power W: {res.power_w:.1f}",
    ])


def format_json(res: MeasurementResult) -> str:
    return json.dumps(res.to_dict(), indent=2)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="homevolt-scraper",
        description="Read kWh charged/discharged and power from a battery dashboard page.",
    )
    p.add_argument("--url", default=settings.url, help="Dashboard URL (http(s):// or file://)")
    p.add_argument("--charged-selector", default=settings.charged_selector, help="CSS selector for the kWh charged text")
    p.add_argument("--discharged-selector", default=settings.discharged_selector, help="CSS selector for the kWh discharged text")
    p.add_argument("--format", choices=OUTPUT_FORMATS, default=settings.output_format, help="Output format")
    p.add_argument("--timeout", type=float, default=settings.timeout_s, help="HTTP timeout in seconds")
    p.add_argument("--retries", type=int, default=settings.max_retries, help="HTTP attempts before giving up")
    p.add_argument("--user", default=settings.user, help="HTTP basic auth username (optional)")
    p.add_argument("--pass", dest="password", default=settings.password, help="HTTP basic auth password (optional)")
    p.add_argument("--render", action=argparse.BooleanOptionalAction, default=settings.render,
                   help="Render the page in headless Chromium before scraping")
    p.add_argument("--wait-selector", default=settings.wait_selector,
                   help="render: CSS selector to wait for before scraping")
    p.add_argument("--wait", type=float, default=settings.wait_s,
                   help="render: seconds to wait before scraping if no selector is given")
    p.add_argument("--output", default=settings.output_path, help="Append one JSON line per run to this file")
    p.add_argument("--swap-labels", action="store_true", default=settings.swap_labels,
                   help="Swap charged/discharged after extraction")
    p.add_argument("--log-level", default=settings.log_level, help="Logging level (DEBUG, INFO, ...)")
    return p


def main(argv: list[str] | None = None) -> int:
    try:
        settings = load_settings()
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    args = build_parser(settings).parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    fetcher = PageFetcher(
        timeout_s=args.timeout,
        max_retries=args.retries,
        user=args.user,
        password=args.password,
        render=args.render,
        wait_selector=args.wait_selector,
        wait_s=args.wait,
    )
    try:
        html = fetcher.fetch(args.url)
        res = parse_html(
            html,
            source=args.url,
            charged_selector=args.charged_selector,
            discharged_selector=args.discharged_selector,
        )
    except (FetchError, MissingFieldError, OSError) as exc:
        log.error("error: %s", exc)
        return 1

    if args.swap_labels:
        res = swap_labels(res)

    for field, e in res.extractions.items():
        log.debug("%s: value=%s method=%s reasons=%s", field, e.value, e.method, e.reasons)

    if args.format == "json":
        print(format_json(res))
    else:
        print(format_text(res))

    if args.output:
        append_jsonl(args.output, [res.to_dict()])
    return 0


if __name__ == "__main__":
    sys.exit(main())

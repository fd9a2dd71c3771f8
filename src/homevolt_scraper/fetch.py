from __future__ import annotations

import logging
import time
from pathlib import Path
from urllib.parse import unquote, urlparse

import requests
from playwright.sync_api import Error as PlaywrightError, sync_playwright

log = logging.getLogger(__name__)

FILE_SCHEME = "file://"

# Upper bound for navigation plus waiting in the headless browser.
RENDER_TIMEOUT_S = 10.0


class FetchError(RuntimeError):
    def __init__(self, url: str, cause: Exception):
        self.url = url
        self.cause = cause
        super().__init__(f"fetching {url} failed: {cause}")


class PageFetcher:
    """
    Fetch the dashboard page as text:
    - file:// URLs are read from disk (handy for saved pages)
    - with render=True the page is loaded in headless Chromium so values the
      dashboard fills in with JavaScript are present; it waits for
      `wait_selector` to become visible, or `wait_s` seconds without one
    - otherwise a plain requests GET
    - basic auth in both modes, retries with exponential backoff
    """
    def __init__(
        self,
        timeout_s: float = 5.0,
        max_retries: int = 1,
        user: str = "",
        password: str = "",
        render: bool = False,
        wait_selector: str = "",
        wait_s: float = 2.0,
    ):
        self.timeout_s = timeout_s
        self.max_retries = max(1, max_retries)
        self.user = user
        self.password = password
        self.auth = (user, password) if (user or password) else None
        self.render = render
        self.wait_selector = wait_selector.strip()
        self.wait_s = wait_s if wait_s > 0 else 2.0

    def fetch(self, url: str) -> str:
        if url.startswith(FILE_SCHEME):
            return read_local_page(url)

        get = self._render if self.render else self._get
        attempt = 1
        while True:
            try:
                log.debug("%s %s (attempt %d/%d)", "RENDER" if self.render else "GET", url, attempt, self.max_retries)
                return get(url)
            except (requests.RequestException, PlaywrightError) as e:
                if attempt >= self.max_retries:
                    raise FetchError(url, e) from e
                log.warning("fetch attempt %d for %s failed: %s", attempt, url, e)
                # backoff: 2,4,8 seconds (cap)
                time.sleep(min(2 ** attempt, 8))
                attempt += 1

    def _get(self, url: str) -> str:
        r = requests.get(url, auth=self.auth, timeout=self.timeout_s)
        r.raise_for_status()
        return r.text

    def _render(self, url: str) -> str:
        timeout_ms = RENDER_TIMEOUT_S * 1000
        with sync_playwright() as p:
            browser = p.chromium.launch(headless=True)
            try:
                creds = {"username": self.user, "password": self.password} if self.auth else None
                context = browser.new_context(http_credentials=creds)
                page = context.new_page()
                resp = page.goto(url, timeout=timeout_ms)
                if resp is not None and not resp.ok:
                    raise PlaywrightError(f"HTTP status {resp.status}")
                if self.wait_selector:
                    page.wait_for_selector(self.wait_selector, state="visible", timeout=timeout_ms)
                else:
                    page.wait_for_timeout(self.wait_s * 1000)
                return page.content()
            finally:
                browser.close()


def read_local_page(url: str) -> str:
    parsed = urlparse(url)
    path = Path(unquote(parsed.netloc + parsed.path))
    # saved pages are not always UTF-8
    return path.read_text(encoding="utf-8", errors="replace")

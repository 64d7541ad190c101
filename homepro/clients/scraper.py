# homepro/clients/scraper.py
from __future__ import annotations

import json
import logging
import math
import re
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional
from urllib.parse import quote, urljoin
from urllib.robotparser import RobotFileParser

import httpx
from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage, Storage
from limits.strategies import MovingWindowRateLimiter

from ..config import settings
from .rentcast import SQFT_PER_ACRE, PropertyRecord

log = logging.getLogger(__name__)

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
}

_BLOCK_MARKERS = ("captcha", "Access Denied", "blocked")

_JSON_LD = re.compile(r'<script type="application/ld\+json">([\s\S]*?)</script>')
_YEAR_BUILT = re.compile(r"Built in (\d{4})|Year built[:\s]+(\d{4})", re.I)
_SQFT = re.compile(r"(\d{1,3}(?:,\d{3})*)\s*(?:sq\.?\s*ft|square\s*feet)", re.I)
_LOT = re.compile(r"(\d+\.?\d*)\s*(?:acres?|sq\.?\s*ft)", re.I)
_BEDS = re.compile(r"(\d+)\s*(?:bed|bedroom)", re.I)
_BATHS = re.compile(r"(\d+\.?\d*)\s*(?:bath|bathroom)", re.I)


class SlidingWindowLimiter:
    """
    At most `max_requests` acquisitions per `window_seconds`, on a `limits`
    moving window. acquire() blocks until the oldest request leaves the window.
    """

    key = "scraper"

    def __init__(
        self,
        *,
        max_requests: int,
        window_seconds: float,
        storage: Optional[Storage] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.max_requests = int(max_requests)
        self.window_seconds = max(1, int(math.ceil(window_seconds)))
        self.item = RateLimitItemPerSecond(self.max_requests, self.window_seconds, namespace="scrape")
        self.storage = storage if storage is not None else MemoryStorage()
        self.strategy = MovingWindowRateLimiter(self.storage)
        self.sleep = sleep

    def wait_time(self) -> float:
        if self.strategy.test(self.item, self.key):
            return 0.0
        reset_at, _remaining = self.strategy.get_window_stats(self.item, self.key)
        return max(0.0, float(reset_at) - time.time())

    def acquire(self) -> None:
        # hit() checks and records in one step under the storage lock
        while not self.strategy.hit(self.item, self.key):
            self.sleep(max(self.wait_time(), 0.05))


def parse_listing_html(html: str) -> Optional[dict[str, Any]]:
    """
    Structured data first (JSON-LD), then loose regexes over the page text.
    None when nothing useful was found.
    """
    m = _JSON_LD.search(html)
    if m:
        try:
            ld = json.loads(m.group(1))
        except ValueError:
            ld = None
        if isinstance(ld, dict) and (ld.get("@type") == "RealEstateAgent" or ld.get("address")):
            out: dict[str, Any] = {}
            if ld.get("yearBuilt"):
                out["yearBuilt"] = int(str(ld["yearBuilt"])[:4])
            floor = ld.get("floorSize")
            if isinstance(floor, dict) and floor.get("value"):
                out["squareFootage"] = int(float(str(floor["value"]).replace(",", "")))
            if ld.get("propertyType"):
                out["propertyType"] = ld["propertyType"]
            return out

    data: dict[str, Any] = {}
    year = _YEAR_BUILT.search(html)
    if year:
        data["yearBuilt"] = int(year.group(1) or year.group(2))
    sqft = _SQFT.search(html)
    if sqft:
        data["squareFootage"] = int(sqft.group(1).replace(",", ""))
    lot = _LOT.search(html)
    if lot:
        value = float(lot.group(1))
        # large values are square feet
        data["lotSize"] = value / SQFT_PER_ACRE if value > 1000 else value
    beds = _BEDS.search(html)
    if beds:
        data["bedrooms"] = int(beds.group(1))
    baths = _BATHS.search(html)
    if baths:
        data["bathrooms"] = float(baths.group(1))

    return data or None


@dataclass
class PropertyScraper:
    """
    Opt-in listing page scraper. Fragile and possibly against the target's
    terms; only used when enable_web_scraping is set and robots.txt allows.
    """

    limiter: SlidingWindowLimiter
    timeout: float = 10.0
    headers: dict[str, str] = field(default_factory=lambda: dict(BROWSER_HEADERS))

    source = "zillow"

    @classmethod
    def from_settings(cls) -> "PropertyScraper":
        return cls(
            limiter=SlidingWindowLimiter(
                max_requests=settings.scraper_max_requests,
                window_seconds=settings.scraper_window_seconds,
            ),
            timeout=settings.scraper_timeout_seconds,
        )

    def enabled(self) -> bool:
        return bool(settings.enable_web_scraping)

    def robots_allowed(self, url: str) -> bool:
        robots_url = urljoin(url, "/robots.txt")
        try:
            with httpx.Client(timeout=self.timeout) as client:
                r = client.get(robots_url, headers=self.headers)
        except httpx.HTTPError as e:
            log.warning("robots.txt fetch failed for %s: %s", robots_url, e)
            return True
        if r.status_code != 200:
            return True

        parser = RobotFileParser()
        parser.parse(r.text.splitlines())
        return parser.can_fetch(self.headers.get("User-Agent", "*"), url)

    def fetch_html(self, url: str) -> Optional[str]:
        self.limiter.acquire()
        try:
            with httpx.Client(timeout=self.timeout, follow_redirects=True) as client:
                r = client.get(url, headers=self.headers)
        except httpx.HTTPError as e:
            log.warning("scrape fetch failed for %s: %s", url, e)
            return None
        if r.status_code != 200:
            log.warning("scrape fetch got HTTP %s for %s", r.status_code, url)
            return None
        return r.text

    def scrape(self, *, address: str, city: str, state: str, zip_code: str) -> PropertyRecord:
        url = "https://www.zillow.com/homes/" + quote(f"{address}, {city}, {state} {zip_code}", safe="")
        if not self.robots_allowed(url):
            return PropertyRecord({}, {"error": "disallowed by robots.txt", "url": url})

        html = self.fetch_html(url)
        if not html:
            return PropertyRecord({}, {"error": "no content", "url": url})
        if any(marker in html for marker in _BLOCK_MARKERS):
            log.warning("scrape target may have blocked the request: %s", url)
            return PropertyRecord({}, {"error": "blocked", "url": url})

        data = parse_listing_html(html)
        return PropertyRecord(data or {}, {"url": url})

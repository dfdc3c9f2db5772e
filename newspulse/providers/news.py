"""Polygon.io news provider.

Walks ``/v2/reference/news`` oldest-first, following ``next_url`` until the
feed runs dry or ``max_articles`` have been collected. Polygon strips the
API key from ``next_url``, so it is re-attached on every page.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from newspulse.core.config import get_api_key
from newspulse.core.errors import InvalidCredentials, UpstreamUnavailable
from newspulse.core.http import get_json
from newspulse.core.logger import logger
from newspulse.core.retry import with_retries
from newspulse.models.datatypes import Article
from newspulse.providers.base import NewsProvider

POLYGON_NEWS_URL = "https://api.polygon.io/v2/reference/news"
MAX_ARTICLES = 400
PAGE_SIZE = 50
_SOURCE = "Polygon"


class PolygonNewsProvider(NewsProvider):
    """Polygon.io ``/v2/reference/news`` provider.

    Args:
        api_key: Polygon API key; read from ``POLYGON_API_KEY`` when omitted.
        max_articles: Hard cap on articles returned per call.
        page_size: ``limit`` sent with each page request.
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        max_articles: int = MAX_ARTICLES,
        page_size: int = PAGE_SIZE,
        timeout: float = 15,
    ) -> None:
        self.api_key = api_key or get_api_key("POLYGON_API_KEY")
        self.max_articles = max_articles
        self.page_size = page_size
        self.timeout = timeout

    def fetch_news(self, ticker: str, from_date: str, to_date: str) -> List[Article]:
        """Return up to ``max_articles`` articles for ``ticker``, oldest first.

        Args:
            ticker: Symbol, e.g. ``"AAPL"`` (case-insensitive).
            from_date: ``YYYY-MM-DD``; articles from 00:00:00Z that day.
            to_date: ``YYYY-MM-DD``; articles up to 23:59:59Z that day.

        Raises:
            InvalidCredentials: No API key configured, or the key was rejected.
            UpstreamUnavailable: Transport failure or a Polygon error body.
            RateLimited: Polygon returned HTTP 429 after all retries.
        """
        if not self.api_key:
            raise InvalidCredentials("POLYGON_API_KEY is not configured.", source_name=_SOURCE)

        ticker = ticker.strip().upper()
        params = {
            "ticker": ticker,
            "limit": str(self.page_size),
            "order": "asc",
            "published_utc.gte": f"{from_date}T00:00:00Z",
            "published_utc.lte": f"{to_date}T23:59:59Z",
        }
        next_url: Optional[str] = f"{POLYGON_NEWS_URL}?{urlencode(params)}"
        raw_items: List[Dict[str, Any]] = []

        logger.info(f"PolygonNewsProvider: fetching news for {ticker} ({from_date} → {to_date})")
        while next_url and len(raw_items) < self.max_articles:
            data = self._get_page(_with_api_key(next_url, self.api_key))

            if data.get("error"):
                raise UpstreamUnavailable(
                    f"Polygon API error: {data['error']}", source_name=_SOURCE,
                    details={"status": data.get("status")},
                )

            results = data.get("results") or []
            if not results:
                break
            raw_items.extend(results)
            next_url = data.get("next_url")

        articles = [_to_article(item) for item in raw_items[: self.max_articles]]
        logger.info(f"PolygonNewsProvider: {len(articles)} articles for {ticker}")
        return articles

    @with_retries(max_retries=3, initial_delay=2)
    def _get_page(self, url: str) -> Dict[str, Any]:
        return get_json(url, _SOURCE, timeout=self.timeout)


# ── helpers ───────────────────────────────────────────────────────────────────

def _with_api_key(url: str, api_key: str) -> str:
    """Return ``url`` with its ``apiKey`` query parameter set to ``api_key``."""
    parts = urlsplit(url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != "apiKey"]
    query.append(("apiKey", api_key))
    return urlunsplit(parts._replace(query=urlencode(query)))


def _to_article(item: Dict[str, Any]) -> Article:
    """Normalize one Polygon result into an :class:`Article`."""
    published = item.get("published_utc", "")
    url = item.get("article_url") or ""
    return Article(
        id=item.get("id") or f"{published}-{url}",
        title=item.get("title", ""),
        description=item.get("description"),
        published_utc=published,
        url=url,
        tickers=tuple(item.get("tickers") or ()),
        keywords=tuple(item.get("keywords") or ()),
        image_url=item.get("image_url"),
    )

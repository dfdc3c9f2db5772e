"""Pipeline engine — composes retrieval, scoring and series construction.

Flow per ticker:
  1. Prices    — fetch bars over the lookback window, sort by date
  2. News      — fetch articles between the first and last price dates
  3. Sentiment — score_articles through the SentimentProvider (lexicon by default)
  4. Series    — build_sentiment_series + aggregate_price_data
  5. Tables    — write sentiment, price and article CSVs to output_dir

Retrieval errors propagate to the caller; the engine does not fall back to
partial output.
"""

import os
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pandas as pd

from newspulse.core.calendar import parse_date, parse_timestamp
from newspulse.core.logger import logger
from newspulse.models.datatypes import DAILY, PricePoint, ScoredArticle, SentimentPoint, TimeFrame
from newspulse.pipeline.enricher import score_articles
from newspulse.pipeline.prices import aggregate_price_data
from newspulse.pipeline.series import build_sentiment_series, check_time_frame
from newspulse.providers.base import NewsProvider, PriceProvider, SentimentProvider
from newspulse.providers.market import build_price_provider
from newspulse.providers.news import PolygonNewsProvider
from newspulse.providers.sentiment import LexiconSentimentProvider

_ARTICLE_COLUMNS = [
    "id", "published_utc", "title", "sentiment_score", "sentiment_label",
    "description", "url", "tickers", "keywords",
]


@dataclass
class PipelineResult:
    """Everything one run produced, ready for presentation."""
    ticker: str
    time_frame: TimeFrame
    date_range: Tuple[str, str]
    articles: List[ScoredArticle] = field(default_factory=list)
    sentiment: List[SentimentPoint] = field(default_factory=list)
    prices: List[PricePoint] = field(default_factory=list)

    @property
    def range_label(self) -> str:
        return range_label(self.sentiment, self.date_range)


class PipelineEngine:
    """Runs the news-sentiment / price pipeline for one ticker at a time.

    Args:
        config: Parsed config.yaml dict (passed in; not re-loaded internally).
        output_dir: Directory where CSV tables are written; ``None`` skips writing.
        news: News provider; defaults to :class:`PolygonNewsProvider`.
        prices: Price provider; defaults to the one named in ``config``.
        sentiment: Article classifier; defaults to :class:`LexiconSentimentProvider`.
    """

    def __init__(
        self,
        config: Dict[str, Any],
        output_dir: Optional[str] = "output",
        news: Optional[NewsProvider] = None,
        prices: Optional[PriceProvider] = None,
        sentiment: Optional[SentimentProvider] = None,
    ) -> None:
        self.config = config
        self.output_dir = output_dir

        news_cfg = config.get("news", {})
        self.news = news or PolygonNewsProvider(
            max_articles=news_cfg.get("max_articles", 400),
            page_size=news_cfg.get("page_size", 50),
            timeout=news_cfg.get("timeout_seconds", 15),
        )
        self.prices = prices or build_price_provider(config)
        self.sentiment = sentiment or LexiconSentimentProvider()

    # ── public ────────────────────────────────────────────────────────────────

    def run(
        self,
        ticker: Optional[str] = None,
        time_frame: Optional[TimeFrame] = None,
        today: Optional[date] = None,
    ) -> PipelineResult:
        """Fetch, score and resample data for ``ticker``.

        Args:
            ticker: Symbol; defaults to ``config["ticker"]``.
            time_frame: ``"daily"`` or ``"weekly"``; defaults to ``config["time_frame"]``.
            today: End of the lookback window; defaults to the current date.

        Returns:
            :class:`PipelineResult` with scored articles and both series.
        """
        ticker = (ticker or self.config.get("ticker", "")).strip().upper()
        if not ticker:
            raise ValueError("A ticker symbol is required.")
        time_frame = time_frame or self.config.get("time_frame", DAILY)
        check_time_frame(time_frame)

        from_date, to_date = default_date_range(today or date.today(), self.config.get("lookback_years", 2))
        logger.info(f"PipelineEngine: {ticker} [{time_frame}] window {from_date} → {to_date}")

        bars = self.prices.fetch_prices(ticker, from_date, to_date)
        bars = sorted(bars, key=lambda bar: parse_date(bar.date, record=bar))
        if bars:
            from_date, to_date = bars[0].date, bars[-1].date

        articles = self.news.fetch_news(ticker, from_date, to_date)
        scored = score_articles(articles, self.sentiment)

        result = PipelineResult(
            ticker=ticker,
            time_frame=time_frame,
            date_range=(from_date, to_date),
            articles=scored,
            sentiment=build_sentiment_series(scored, time_frame) if scored else [],
            prices=aggregate_price_data(bars, time_frame),
        )
        logger.info(
            f"PipelineEngine: {len(bars)} bars, {len(scored)} articles → "
            f"{len(result.sentiment)} sentiment / {len(result.prices)} price points"
        )

        if self.output_dir:
            self._write_tables(result)
        return result

    # ── internal ──────────────────────────────────────────────────────────────

    def _write_tables(self, result: PipelineResult) -> None:
        """Write the three CSV tables for ``result`` (overwrites each run)."""
        os.makedirs(self.output_dir, exist_ok=True)
        stem = f"{result.ticker}_{result.time_frame}"

        sentiment_path = os.path.join(self.output_dir, f"sentiment_{stem}.csv")
        pd.DataFrame(
            [asdict(p) for p in result.sentiment], columns=["date", "cumulative_score"],
        ).to_csv(sentiment_path, index=False)

        price_path = os.path.join(self.output_dir, f"prices_{stem}.csv")
        pd.DataFrame(
            [asdict(p) for p in result.prices], columns=["date", "close"],
        ).to_csv(price_path, index=False)

        articles_path = os.path.join(self.output_dir, f"articles_{result.ticker}.csv")
        articles_table(result.articles).to_csv(articles_path, index=False)

        logger.info(f"PipelineEngine: saved tables → {sentiment_path}, {price_path}, {articles_path}")


# ── helpers ───────────────────────────────────────────────────────────────────

def default_date_range(today: date, years: int = 2) -> Tuple[str, str]:
    """Return ``(today - years, today)`` as ``YYYY-MM-DD`` strings.

    Feb 29 falls back to Feb 28 when the earlier year is not a leap year.
    """
    try:
        start = today.replace(year=today.year - years)
    except ValueError:
        start = today.replace(year=today.year - years, day=28)
    return start.isoformat(), today.isoformat()


def range_label(series: Sequence[SentimentPoint], date_range: Tuple[str, str]) -> str:
    """Return ``"first → last"`` for the series, falling back to ``date_range`` ends."""
    first = series[0].date if series else date_range[0]
    last = series[-1].date if series else date_range[1]
    return f"{first} → {last}"


def articles_table(articles: Sequence[ScoredArticle]) -> pd.DataFrame:
    """Tabulate scored articles latest to oldest."""
    ordered = sorted(articles, key=lambda a: parse_timestamp(a.published_utc, record=a), reverse=True)
    rows = [
        {
            "id": a.id,
            "published_utc": a.published_utc,
            "title": a.title,
            "sentiment_score": a.sentiment_score,
            "sentiment_label": a.sentiment_label,
            "description": a.description or "",
            "url": a.url or "",
            "tickers": ", ".join(a.tickers),
            "keywords": ", ".join(a.keywords),
        }
        for a in ordered
    ]
    return pd.DataFrame(rows, columns=_ARTICLE_COLUMNS)

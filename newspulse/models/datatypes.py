"""Data structures for the news sentiment and price series."""

from dataclasses import dataclass, fields
from typing import Any, Dict, Literal, Optional, Tuple

TimeFrame = Literal["daily", "weekly"]

DAILY: TimeFrame = "daily"
WEEKLY: TimeFrame = "weekly"
TIME_FRAMES: Tuple[TimeFrame, ...] = (DAILY, WEEKLY)


@dataclass(frozen=True)
class Article:
    """
    Represents a normalized news article fetched from a news provider.
    """
    id: str
    title: str
    published_utc: str  # ISO 8601 timestamp
    description: Optional[str] = None
    url: Optional[str] = None
    tickers: Tuple[str, ...] = ()
    keywords: Tuple[str, ...] = ()
    image_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary (JSON-ready)."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["tickers"] = list(self.tickers)
        data["keywords"] = list(self.keywords)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Article":
        """Create an Article from a plain dictionary, ignoring unknown keys."""
        return cls(
            id=data["id"],
            title=data["title"],
            published_utc=data["published_utc"],
            description=data.get("description"),
            url=data.get("url"),
            tickers=tuple(data.get("tickers") or ()),
            keywords=tuple(data.get("keywords") or ()),
            image_url=data.get("image_url"),
        )


@dataclass(frozen=True)
class ScoredArticle(Article):
    """An Article with its lexical sentiment score attached (-1, 0 or +1)."""
    sentiment_score: int = 0

    @classmethod
    def from_article(cls, article: Article, sentiment_score: int) -> "ScoredArticle":
        values = {f.name: getattr(article, f.name) for f in fields(Article)}
        return cls(**values, sentiment_score=sentiment_score)

    @property
    def sentiment_label(self) -> str:
        if self.sentiment_score > 0:
            return "positive"
        if self.sentiment_score < 0:
            return "negative"
        return "neutral"


@dataclass(frozen=True)
class PriceBar:
    """
    One end-of-day observation. Only ``close`` feeds the series; the other
    prices are informational.
    """
    date: str  # YYYY-MM-DD
    symbol: str
    close: float
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    volume: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PriceBar":
        return cls(
            date=data["date"],
            symbol=data["symbol"],
            close=float(data["close"]),
            open=_optional_float(data.get("open")),
            high=_optional_float(data.get("high")),
            low=_optional_float(data.get("low")),
            volume=int(data.get("volume") or 0),
        )


@dataclass(frozen=True)
class SentimentPoint:
    """Cumulative sentiment read at a day, or at the first day seen in a week."""
    date: str
    cumulative_score: int


@dataclass(frozen=True)
class PricePoint:
    """Closing price at a day, or at the latest trading day of a week."""
    date: str
    close: float


def _optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)

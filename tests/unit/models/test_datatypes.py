"""Tests for newspulse.models.datatypes module."""

import dataclasses
from typing import get_args

import pytest

from newspulse.models.datatypes import DAILY, TIME_FRAMES, WEEKLY, Article, PriceBar, ScoredArticle, TimeFrame


class TestArticle:
    def test_from_dict_defaults(self) -> None:
        article = Article.from_dict({"id": "a", "title": "T", "published_utc": "2024-01-01T00:00:00Z"})
        assert article.description is None
        assert article.url is None
        assert article.tickers == ()
        assert article.keywords == ()

    def test_round_trip_through_dict(self) -> None:
        article = Article(
            id="a", title="T", published_utc="2024-01-01T00:00:00Z",
            description="D", url="https://x", tickers=("AAPL", "MSFT"), keywords=("tech",),
        )
        data = article.to_dict()
        assert data["tickers"] == ["AAPL", "MSFT"]
        assert Article.from_dict(data) == article

    def test_is_immutable(self) -> None:
        article = Article(id="a", title="T", published_utc="2024-01-01T00:00:00Z")
        with pytest.raises(dataclasses.FrozenInstanceError):
            article.title = "changed"  # type: ignore[misc]


class TestScoredArticle:
    def test_from_article_copies_fields(self) -> None:
        article = Article(id="a", title="T", published_utc="2024-01-01T00:00:00Z", keywords=("k",))
        scored = ScoredArticle.from_article(article, -1)
        assert isinstance(scored, Article)
        assert scored.sentiment_score == -1
        for f in dataclasses.fields(Article):
            assert getattr(scored, f.name) == getattr(article, f.name)

    @pytest.mark.parametrize("score, label", [(1, "positive"), (-1, "negative"), (0, "neutral")])
    def test_label(self, score, label) -> None:
        article = Article(id="a", title="T", published_utc="2024-01-01T00:00:00Z")
        assert ScoredArticle.from_article(article, score).sentiment_label == label


class TestPriceBar:
    def test_from_dict_coerces(self) -> None:
        bar = PriceBar.from_dict({"date": "2024-01-02", "symbol": "AAPL", "close": "101.5", "volume": None})
        assert bar.close == 101.5
        assert bar.volume == 0
        assert bar.open is None

    def test_to_dict(self) -> None:
        bar = PriceBar(date="2024-01-02", symbol="AAPL", close=1.0, volume=5)
        assert bar.to_dict() == {
            "date": "2024-01-02", "symbol": "AAPL", "close": 1.0,
            "open": None, "high": None, "low": None, "volume": 5,
        }


class TestTimeFrame:
    def test_constants_cover_alias(self) -> None:
        assert get_args(TimeFrame) == TIME_FRAMES == (DAILY, WEEKLY)

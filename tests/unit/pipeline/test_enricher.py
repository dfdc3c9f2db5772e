"""Tests for newspulse.pipeline.enricher module."""

import dataclasses
from unittest.mock import MagicMock

from newspulse.models.datatypes import Article, ScoredArticle
from newspulse.pipeline.enricher import score_articles
from newspulse.providers.base import SentimentProvider
from newspulse.providers.sentiment import SentimentResult


def _articles() -> list:
    return [
        Article(
            id="1", title="Apple posts record profit", published_utc="2024-01-02T10:00:00Z",
            description="Revenue growth accelerates", url="https://x/1", tickers=("AAPL",), keywords=("earnings",),
        ),
        Article(id="2", title="Regulators open investigation", published_utc="2024-01-01T09:00:00Z"),
        Article(id="3", title="Quarterly update", published_utc="2024-01-03T09:00:00Z", keywords=("growth",)),
    ]


class TestScoreArticles:
    def test_preserves_order_and_fields(self) -> None:
        articles = _articles()
        scored = score_articles(articles)

        assert [s.id for s in scored] == ["1", "2", "3"]
        for original, enriched in zip(articles, scored):
            assert isinstance(enriched, ScoredArticle)
            for f in dataclasses.fields(Article):
                assert getattr(enriched, f.name) == getattr(original, f.name)

    def test_attaches_scores(self) -> None:
        assert [s.sentiment_score for s in score_articles(_articles())] == [1, -1, 1]

    def test_every_score_is_plus_or_minus_one(self) -> None:
        assert {s.sentiment_score for s in score_articles(_articles())} <= {-1, 1}

    def test_input_not_mutated(self) -> None:
        articles = _articles()
        snapshot = list(articles)
        score_articles(articles)
        assert articles == snapshot

    def test_empty(self) -> None:
        assert score_articles([]) == []

    def test_accepts_iterables(self) -> None:
        assert len(score_articles(a for a in _articles())) == 3

    def test_uses_given_provider(self) -> None:
        provider = MagicMock(spec=SentimentProvider)
        provider.analyze.return_value = SentimentResult(
            label="positive", score=1, positive_matches=(), negative_matches=(),
        )

        scored = score_articles(_articles()[:2], provider)

        assert [s.sentiment_score for s in scored] == [1, 1]
        texts = [c.args[0] for c in provider.analyze.call_args_list]
        assert texts == [
            "Apple posts record profit. Revenue growth accelerates. earnings",
            "Regulators open investigation",
        ]

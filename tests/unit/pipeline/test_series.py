"""Tests for newspulse.pipeline.series module."""

import itertools

import pytest

from newspulse.core.calendar import parse_date, week_key
from newspulse.core.errors import InvalidInputError
from newspulse.models.datatypes import ScoredArticle, SentimentPoint
from newspulse.pipeline.series import build_sentiment_series


def _scored(article_id: str, published: str, score: int) -> ScoredArticle:
    return ScoredArticle(id=article_id, title=article_id, published_utc=published, sentiment_score=score)


def _sample() -> list:
    return [
        _scored("a1", "2024-01-02T10:00:00Z", 1),
        _scored("a2", "2024-01-02T15:00:00Z", -1),
        _scored("a3", "2024-01-05T09:00:00Z", 1),
        _scored("a4", "2024-01-09T09:00:00Z", 1),
    ]


class TestDailySeries:
    def test_running_total_read_at_last_article_of_day(self) -> None:
        assert build_sentiment_series(_sample(), "daily") == [
            SentimentPoint("2024-01-02", 0),
            SentimentPoint("2024-01-05", 1),
            SentimentPoint("2024-01-09", 2),
        ]

    def test_daily_is_default(self) -> None:
        assert build_sentiment_series(_sample()) == build_sentiment_series(_sample(), "daily")

    def test_order_independent(self) -> None:
        expected = build_sentiment_series(_sample(), "daily")
        for permutation in itertools.permutations(_sample()):
            assert build_sentiment_series(list(permutation), "daily") == expected

    def test_value_can_decrease(self) -> None:
        articles = [
            _scored("a", "2024-01-01T00:00:00Z", 1),
            _scored("b", "2024-01-02T00:00:00Z", -1),
            _scored("c", "2024-01-03T00:00:00Z", -1),
        ]
        assert [p.cumulative_score for p in build_sentiment_series(articles)] == [1, 0, -1]

    def test_dates_strictly_ascending(self) -> None:
        series = build_sentiment_series(list(reversed(_sample())))
        dates = [p.date for p in series]
        assert dates == sorted(set(dates))

    def test_input_not_mutated(self) -> None:
        articles = list(reversed(_sample()))
        snapshot = list(articles)
        build_sentiment_series(articles, "weekly")
        assert articles == snapshot

    def test_idempotent(self) -> None:
        articles = _sample()
        assert build_sentiment_series(articles, "daily") == build_sentiment_series(articles, "daily")
        assert build_sentiment_series(articles, "weekly") == build_sentiment_series(articles, "weekly")

    def test_empty(self) -> None:
        assert build_sentiment_series([], "daily") == []
        assert build_sentiment_series([], "weekly") == []


class TestWeeklySeries:
    def test_sums_cumulative_readings_within_week(self) -> None:
        # W00 holds Jan 2 (0) and Jan 5 (1); W01 holds Jan 9 (2)
        assert build_sentiment_series(_sample(), "weekly") == [
            SentimentPoint("2024-01-02", 1),
            SentimentPoint("2024-01-09", 2),
        ]

    def test_bucket_count_matches_distinct_weeks(self) -> None:
        articles = [
            _scored(f"a{n}", f"2024-{month:02d}-{day:02d}T12:00:00Z", 1 if n % 3 else -1)
            for n, (month, day) in enumerate([(1, 1), (1, 3), (1, 9), (2, 14), (2, 15), (3, 30), (3, 31)])
        ]
        daily = build_sentiment_series(articles, "daily")
        weekly = build_sentiment_series(articles, "weekly")
        weeks = {week_key(parse_date(p.date)) for p in daily}
        assert len(weekly) == len(weeks)
        assert len(weekly) <= len(daily)

    def test_year_boundary_splits_buckets(self) -> None:
        articles = [
            _scored("b", "2024-01-01T12:00:00Z", 1),
            _scored("a", "2023-12-31T12:00:00Z", 1),
        ]
        assert build_sentiment_series(articles, "weekly") == [
            SentimentPoint("2023-12-31", 1),
            SentimentPoint("2024-01-01", 2),
        ]

    def test_weeks_emitted_chronologically_for_unsorted_input(self) -> None:
        articles = [
            _scored("c", "2024-02-20T12:00:00Z", 1),
            _scored("a", "2023-06-01T12:00:00Z", 1),
            _scored("b", "2024-01-10T12:00:00Z", -1),
        ]
        dates = [p.date for p in build_sentiment_series(articles, "weekly")]
        assert dates == ["2023-06-01", "2024-01-10", "2024-02-20"]


class TestErrors:
    def test_unknown_time_frame(self) -> None:
        with pytest.raises(InvalidInputError):
            build_sentiment_series(_sample(), "monthly")

    def test_malformed_timestamp_names_record(self) -> None:
        bad = _scored("bad", "not a date", 1)
        with pytest.raises(InvalidInputError) as excinfo:
            build_sentiment_series(_sample() + [bad])
        assert excinfo.value.record is bad

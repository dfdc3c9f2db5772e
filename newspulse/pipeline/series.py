"""Cumulative sentiment series.

Daily mode:
    Articles are replayed in publish order while a running total of their
    scores is kept. Each publish day is read at the total after its last
    article, so the value for day ``d`` covers every article up to and
    including ``d``.

Weekly mode:
    Daily readings are grouped by :func:`week_key` and the readings inside a
    week are SUMMED. The result is a sum of already-cumulative values, not a
    cumulative total re-based per week. Consumers chart this number as-is.
    Each week is labelled with its earliest day.

Points are always emitted in chronological order.
"""

from typing import Dict, List, Sequence

from newspulse.core.calendar import parse_date, parse_timestamp, week_key
from newspulse.core.errors import InvalidInputError
from newspulse.core.logger import logger
from newspulse.models.datatypes import DAILY, TIME_FRAMES, WEEKLY, ScoredArticle, SentimentPoint, TimeFrame


def build_sentiment_series(
    scored_articles: Sequence[ScoredArticle],
    time_frame: TimeFrame = DAILY,
) -> List[SentimentPoint]:
    """Build the cumulative sentiment curve at daily or weekly granularity.

    Args:
        scored_articles: Articles with ``sentiment_score`` attached, in any order.
        time_frame: ``"daily"`` or ``"weekly"``.

    Returns:
        Chronologically ordered :class:`SentimentPoint` list; empty for no input.

    Raises:
        InvalidInputError: Unknown ``time_frame`` or an unparseable ``published_utc``.
    """
    check_time_frame(time_frame)

    daily = _daily_series(scored_articles)
    if time_frame == WEEKLY:
        weekly = _aggregate_by_week(daily)
        logger.debug(f"build_sentiment_series: {len(daily)} days → {len(weekly)} weeks")
        return weekly
    return daily


def check_time_frame(time_frame: str) -> None:
    """Raise :class:`InvalidInputError` unless ``time_frame`` is supported."""
    if time_frame not in TIME_FRAMES:
        raise InvalidInputError(
            f"Unknown time frame {time_frame!r}; expected one of {', '.join(TIME_FRAMES)}",
            record=time_frame,
        )


# ── internal ──────────────────────────────────────────────────────────────────

def _daily_series(scored_articles: Sequence[ScoredArticle]) -> List[SentimentPoint]:
    # sorted() is stable, so same-instant articles keep their input order
    keyed = [(parse_timestamp(a.published_utc, record=a), a) for a in scored_articles]
    ordered = sorted(keyed, key=lambda pair: pair[0])

    running_total = 0
    totals_by_day: Dict[str, int] = {}
    for published, article in ordered:
        running_total += article.sentiment_score
        # Day as written in the timestamp, not shifted to UTC
        totals_by_day[published.date().isoformat()] = running_total

    return [SentimentPoint(date=day, cumulative_score=total) for day, total in sorted(totals_by_day.items())]


def _aggregate_by_week(daily: List[SentimentPoint]) -> List[SentimentPoint]:
    buckets: Dict[str, SentimentPoint] = {}
    for point in daily:
        bucket = week_key(parse_date(point.date, record=point))
        existing = buckets.get(bucket)
        if existing is None:
            buckets[bucket] = point
        else:
            buckets[bucket] = SentimentPoint(
                date=existing.date,
                cumulative_score=existing.cumulative_score + point.cumulative_score,
            )
    return [buckets[bucket] for bucket in sorted(buckets)]

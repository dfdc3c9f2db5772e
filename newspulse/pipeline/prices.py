"""Price series resampling.

Daily mode projects each bar to ``(date, close)`` in input order. Weekly mode
keeps, per :func:`week_key` bucket, the close of the latest-dated bar; a bar
replaces the bucket's reading only when its date is strictly later, so the
first of two same-day bars wins.
"""

from datetime import date
from typing import Dict, List, Sequence, Tuple

from newspulse.core.calendar import parse_date, week_key
from newspulse.models.datatypes import DAILY, PriceBar, PricePoint, TimeFrame
from newspulse.pipeline.series import check_time_frame


def aggregate_price_data(prices: Sequence[PriceBar], time_frame: TimeFrame = DAILY) -> List[PricePoint]:
    """Resample daily bars to the requested granularity.

    Args:
        prices: Daily bars, sorted or unsorted.
        time_frame: ``"daily"`` or ``"weekly"``.

    Returns:
        Daily: one point per bar in input order. Weekly: one point per week,
        ordered by week.

    Raises:
        InvalidInputError: Unknown ``time_frame`` or an unparseable bar date.
    """
    check_time_frame(time_frame)

    if time_frame == DAILY:
        return [PricePoint(date=bar.date, close=bar.close) for bar in prices]

    latest: Dict[str, Tuple[date, PricePoint]] = {}
    for bar in prices:
        day = parse_date(bar.date, record=bar)
        bucket = week_key(day)
        current = latest.get(bucket)
        if current is None or day > current[0]:
            latest[bucket] = (day, PricePoint(date=bar.date, close=bar.close))

    return [latest[bucket][1] for bucket in sorted(latest)]

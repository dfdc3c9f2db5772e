"""Keyword lexicon for lexical sentiment scoring of financial headlines.

Terms are lower-case and matched as plain substrings, so ``"gain"`` also hits
``"regained"`` and ``"fine"`` hits ``"refinery"``.
"""

from typing import Dict, Tuple

POSITIVE_KEYWORDS: Tuple[str, ...] = (
    "beat",
    "growth",
    "expansion",
    "profit",
    "surge",
    "record",
    "upgrade",
    "optimistic",
    "strong",
    "bullish",
    "outperform",
    "increase",
    "improve",
    "success",
    "gain",
    "rally",
    "soar",
    "boom",
    "breakthrough",
    "innovative",
    "win",
    "recovery",
    "accelerate",
    "exceed",
    "robust",
    "positive",
    "momentum",
    "high",
    "advance",
    "jump",
    "climb",
    "rise",
    "strength",
    "opportunity",
    "excellent",
    "stellar",
    "impressive",
    "milestone",
    "achievement",
    "revenue",
    "earnings",
)

NEGATIVE_KEYWORDS: Tuple[str, ...] = (
    "loss",
    "lawsuit",
    "decline",
    "drop",
    "downgrade",
    "weak",
    "bearish",
    "decrease",
    "fraud",
    "scandal",
    "risk",
    "miss",
    "slowdown",
    "concern",
    "fall",
    "plunge",
    "crash",
    "collapse",
    "failure",
    "cut",
    "layoff",
    "fire",
    "downturn",
    "slump",
    "struggle",
    "threat",
    "warning",
    "investigation",
    "penalty",
    "fine",
    "violation",
    "negative",
    "volatility",
    "uncertainty",
    "disappointing",
    "worse",
    "deficit",
    "debt",
    "bankrupt",
    "restructure",
    "delay",
)


def keyword_legend() -> Dict[str, Tuple[str, ...]]:
    """Return both keyword lists keyed by polarity, for legends and help text."""
    return {"positive": POSITIVE_KEYWORDS, "negative": NEGATIVE_KEYWORDS}

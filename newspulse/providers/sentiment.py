"""Lexical financial sentiment scoring.

Pipeline:
    title + description + keywords → score_article_content() → SentimentResult

Scoring:
    P = number of POSITIVE_KEYWORDS found in the lower-cased text
    N = number of NEGATIVE_KEYWORDS found in the lower-cased text

    P > N  → "positive" / +1
    N > P  → "negative" / -1
    P == N → "negative" / -1   (also when nothing matched)

Every article scores exactly ±1; there is no neutral outcome.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

from newspulse.core.errors import InvalidInputError
from newspulse.core.logger import logger
from newspulse.providers.base import SentimentProvider
from newspulse.providers.lexicon import NEGATIVE_KEYWORDS, POSITIVE_KEYWORDS

_JOINER = ". "


@dataclass(frozen=True)
class SentimentResult:
    """Output of a single lexical scoring call.

    Attributes:
        label: ``"positive"`` or ``"negative"``.
        score: ``+1`` or ``-1``.
        positive_matches: Positive keywords found, in lexicon order.
        negative_matches: Negative keywords found, in lexicon order.
    """
    label: str
    score: int
    positive_matches: Tuple[str, ...]
    negative_matches: Tuple[str, ...]


def score_text(text: str) -> SentimentResult:
    """Score free text against the keyword lexicon.

    Args:
        text: Any string; an empty string scores as a tie.

    Returns:
        :class:`SentimentResult` with label, score and matched keywords.

    Raises:
        InvalidInputError: If ``text`` is not a string.
    """
    if not isinstance(text, str):
        raise InvalidInputError(f"score_text expects a string, got {type(text).__name__}", record=text)

    negative_matches = _collect_matches(NEGATIVE_KEYWORDS, text)
    positive_matches = _collect_matches(POSITIVE_KEYWORDS, text)

    if len(positive_matches) > len(negative_matches):
        label, score = "positive", 1
    else:
        label, score = "negative", -1

    logger.debug(
        f"score_text: [{label} / {score:+d}] "
        f"(+{len(positive_matches)} / -{len(negative_matches)}) — {text[:60]!r}"
    )
    return SentimentResult(
        label=label,
        score=score,
        positive_matches=positive_matches,
        negative_matches=negative_matches,
    )


def score_article_content(
    title: str,
    description: Optional[str] = None,
    keywords: Optional[Sequence[str]] = None,
) -> SentimentResult:
    """Score an article from its title, optional description and keywords.

    Present, non-empty parts are joined with ``". "``; absent parts are skipped.
    """
    return score_text(article_text(title, description, keywords))


def article_text(
    title: str,
    description: Optional[str] = None,
    keywords: Optional[Sequence[str]] = None,
) -> str:
    """Join the present, non-empty parts of an article with ``". "``."""
    parts = [title, description, *(keywords or ())]
    return _JOINER.join(part for part in parts if part)


class LexiconSentimentProvider(SentimentProvider):
    """:class:`SentimentProvider` backed by the static keyword lexicon."""

    def analyze(self, text: str) -> SentimentResult:
        return score_text(text)


# ── helpers ───────────────────────────────────────────────────────────────────

def _collect_matches(keywords: Iterable[str], text: str) -> Tuple[str, ...]:
    normalized = text.lower()
    return tuple(keyword for keyword in keywords if keyword in normalized)

"""Attach sentiment scores to articles."""

from typing import Iterable, List, Optional

from newspulse.models.datatypes import Article, ScoredArticle
from newspulse.providers.base import SentimentProvider
from newspulse.providers.sentiment import LexiconSentimentProvider, article_text


def score_articles(
    articles: Iterable[Article],
    provider: Optional[SentimentProvider] = None,
) -> List[ScoredArticle]:
    """Score each article from its title, description and keywords.

    Input order is preserved and the source articles are left untouched.

    Args:
        articles: Articles to score.
        provider: Classifier whose ``analyze`` result carries a ``score``;
            defaults to :class:`LexiconSentimentProvider`.
    """
    provider = provider or LexiconSentimentProvider()
    return [
        ScoredArticle.from_article(
            article,
            provider.analyze(article_text(article.title, article.description, article.keywords)).score,
        )
        for article in articles
    ]

"""Abstract base classes for data providers."""

from abc import ABC, abstractmethod
from typing import Any, List

from newspulse.models.datatypes import Article, PriceBar


class PriceProvider(ABC):
    """Abstract interface for fetching end-of-day price bars."""

    @abstractmethod
    def fetch_prices(self, ticker: str, from_date: str, to_date: str) -> List[PriceBar]:
        """
        Fetch daily price bars for a ticker and date range.

        Args:
            ticker (str): The ticker symbol.
            from_date (str): Start date in YYYY-MM-DD format (inclusive).
            to_date (str): End date in YYYY-MM-DD format (inclusive).

        Returns:
            List[PriceBar]: Bars in the order the provider returned them.
        """
        pass


class NewsProvider(ABC):
    """Abstract interface for fetching company-specific news articles."""

    @abstractmethod
    def fetch_news(self, ticker: str, from_date: str, to_date: str) -> List[Article]:
        """
        Fetch news articles for a ticker published within a date range.

        Args:
            ticker (str): The ticker symbol.
            from_date (str): Start date in YYYY-MM-DD format (inclusive).
            to_date (str): End date in YYYY-MM-DD format (inclusive).

        Returns:
            List[Article]: A list of normalized Article objects.
        """
        pass


class SentimentProvider(ABC):
    """Abstract interface for classifying financial text sentiment."""

    @abstractmethod
    def analyze(self, text: str) -> Any:
        """
        Analyze the sentiment of a given text.

        Args:
            text (str): The text to analyze.

        Returns:
            A result object exposing at least ``label`` and ``score``.
        """
        pass

"""End-of-day price providers: Marketstack (default) and Yahoo Finance."""

from typing import Any, Dict, List, Optional

import pandas as pd
import yfinance as yf

from newspulse.core.config import get_api_key
from newspulse.core.errors import InvalidCredentials, UpstreamUnavailable
from newspulse.core.http import get_json
from newspulse.core.logger import logger
from newspulse.core.retry import with_retries
from newspulse.models.datatypes import PriceBar
from newspulse.providers.base import PriceProvider

MARKETSTACK_EOD_URL = "http://api.marketstack.com/v1/eod"
_PRICE_COLUMNS = ["date", "symbol", "open", "high", "low", "close", "volume"]


class MarketstackPriceProvider(PriceProvider):
    """Marketstack ``/v1/eod`` implementation.

    Args:
        api_key: Marketstack access key; read from ``MARKETSTACK_API_KEY`` when omitted.
        limit: Maximum bars requested in one call.
        timeout: Request timeout in seconds.
    """

    def __init__(self, api_key: Optional[str] = None, limit: int = 1000, timeout: float = 15) -> None:
        self.api_key = api_key or get_api_key("MARKETSTACK_API_KEY")
        self.limit = limit
        self.timeout = timeout

    @with_retries(max_retries=3, initial_delay=2)
    def fetch_prices(self, ticker: str, from_date: str, to_date: str) -> List[PriceBar]:
        """
        Fetch daily bars for ``ticker`` between ``from_date`` and ``to_date``.

        Raises:
            InvalidCredentials: No access key configured, or the key was rejected.
            UpstreamUnavailable: Transport failure or a Marketstack error body.
        """
        if not self.api_key:
            raise InvalidCredentials("MARKETSTACK_API_KEY is not configured.", source_name="Marketstack")

        ticker = ticker.strip().upper()
        logger.info(f"Fetching EOD prices for {ticker} from {from_date} to {to_date}")
        params = {
            "access_key": self.api_key,
            "symbols": ticker,
            "date_from": from_date,
            "date_to": to_date,
            "limit": str(self.limit),
        }
        data = get_json(MARKETSTACK_EOD_URL, "Marketstack", params=params, timeout=self.timeout)

        error = data.get("error")
        if error:
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise UpstreamUnavailable(
                f"Marketstack API error: {message}", source_name="Marketstack",
                details={"error": error},
            )

        rows = data.get("data") or []
        if not rows:
            logger.warning(f"No EOD data returned for {ticker}")
            return []

        return _frame_to_bars(pd.DataFrame(rows), ticker)


class YFinancePriceProvider(PriceProvider):
    """Yahoo Finance implementation. ``suffix`` selects the exchange (e.g. ``".NS"``)."""

    def __init__(self, suffix: str = "") -> None:
        self.suffix = suffix

    @with_retries(max_retries=3, initial_delay=2)
    def fetch_prices(self, ticker: str, from_date: str, to_date: str) -> List[PriceBar]:
        """
        Fetch daily bars from Yahoo Finance.

        yfinance treats ``end`` as exclusive, so one day is added to ``to_date``.
        """
        symbol = f"{ticker.strip().upper()}{self.suffix}"
        logger.info(f"Fetching OHLCV for {symbol} from {from_date} to {to_date}")

        end_exclusive = (pd.to_datetime(to_date) + pd.Timedelta(days=1)).strftime("%Y-%m-%d")
        try:
            hist = yf.Ticker(symbol).history(start=from_date, end=end_exclusive)
        except Exception as exc:
            raise UpstreamUnavailable(
                f"Yahoo Finance history failed for {symbol}: {exc}", source_name="yfinance",
            ) from exc

        if hist is None or hist.empty:
            logger.warning(f"No OHLCV data returned for {symbol}")
            return []

        hist = hist.reset_index()
        # Date is usually timezone-aware; drop the tz before formatting
        hist["Date"] = pd.to_datetime(hist["Date"]).dt.tz_localize(None).dt.strftime("%Y-%m-%d")
        hist = hist.rename(columns=str.lower)
        hist["symbol"] = symbol
        return _frame_to_bars(hist, symbol)


def build_price_provider(config: Dict[str, Any]) -> PriceProvider:
    """Instantiate the price provider named by ``config["prices"]["provider"]``."""
    prices = config.get("prices", {})
    name = prices.get("provider", "marketstack")
    if name == "marketstack":
        return MarketstackPriceProvider(
            limit=prices.get("limit", 1000),
            timeout=prices.get("timeout_seconds", 15),
        )
    if name == "yfinance":
        return YFinancePriceProvider(suffix=prices.get("suffix", ""))
    raise ValueError(f"Unknown price provider {name!r} (expected 'marketstack' or 'yfinance')")


# ── helpers ───────────────────────────────────────────────────────────────────

def _frame_to_bars(df: pd.DataFrame, symbol: str) -> List[PriceBar]:
    """Coerce a raw price frame into :class:`PriceBar` records.

    Rows without a usable close are dropped; a missing volume becomes 0.
    """
    df = df.copy()
    for column in _PRICE_COLUMNS:
        if column not in df.columns:
            df[column] = None

    df["date"] = df["date"].astype(str).str.split("T").str[0]
    df["symbol"] = df["symbol"].fillna(symbol)
    for column in ("open", "high", "low", "close"):
        df[column] = pd.to_numeric(df[column], errors="coerce")
    df["volume"] = pd.to_numeric(df["volume"], errors="coerce").fillna(0).astype(int)

    missing_close = df["close"].isna()
    if missing_close.any():
        logger.warning(f"Dropping {int(missing_close.sum())} bar(s) without a close for {symbol}")
        df = df.loc[~missing_close]

    df = df[_PRICE_COLUMNS].astype(object).where(df[_PRICE_COLUMNS].notna(), None)
    return [PriceBar.from_dict(row) for row in df.to_dict("records")]

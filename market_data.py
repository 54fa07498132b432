"""
Market data enrichment from DexScreener.
"""

import logging
from typing import Any, Dict, Optional

import requests

from models import MarketSnapshot

logger = logging.getLogger("market_data")


class DexScreenerClient:
    """
    Reads the current market metrics of a token from the DexScreener tokens endpoint.
    Only the first pair returned is considered.
    """

    def __init__(self, config: Dict[str, Any], session: Optional[requests.Session] = None):
        self.base_url = config.get("DEXSCREENER_API_URL", "https://api.dexscreener.com/latest/dex/tokens/")
        self.timeout = config.get("REQUEST_TIMEOUT_SECONDS", 15)
        self.session = session or requests.Session()

    def fetch_snapshot(self, symbol: str) -> Optional[MarketSnapshot]:
        """
        Fetches the market snapshot of a token

        Args:
            symbol: Token symbol

        Returns:
            MarketSnapshot, or None when no pair exists or the fetch failed
        """
        url = f"{self.base_url}{symbol}"
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json() or {}

            pairs = data.get("pairs") or []
            if not pairs:
                logger.info(f"No DexScreener pair found for {symbol}")
                return None

            return self._to_snapshot(pairs[0])

        except Exception as e:
            logger.error(f"Error fetching DexScreener data for {symbol}: {e}")
            return None

    @staticmethod
    def _to_snapshot(pair: Dict[str, Any]) -> MarketSnapshot:
        base_token = pair.get("baseToken") or {}
        quote_token = pair.get("quoteToken") or {}

        return MarketSnapshot(
            price_usd=float(pair.get("priceUsd") or 0),
            price_change_1h=float((pair.get("priceChange") or {}).get("h1") or 0),
            liquidity_usd=float((pair.get("liquidity") or {}).get("usd") or 0),
            volume_24h=float((pair.get("volume") or {}).get("h24") or 0),
            fdv=float(pair.get("fdv") or 0),
            pair_label=f"{base_token.get('symbol', '?')}/{quote_token.get('symbol', '?')}",
            source_link=f"https://dexscreener.com/{pair.get('chainId', '')}/{pair.get('pairAddress', '')}",
        )

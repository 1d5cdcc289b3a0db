from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from crypto_screener.errors import TickerFeedError


class CoinloreRestClient:
    """Minimal Coinlore ticker list client. One request per call, no retry."""

    DEFAULT_BASE_URL = "https://api.coinlore.net/api"

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[Any] = None,
        timeout_sec: float = 5,
    ) -> None:
        self.base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self.session = session or requests
        self.timeout_sec = timeout_sec

    def get_tickers(self) -> List[Dict[str, Any]]:
        response = self.session.get(
            f"{self.base_url}/tickers/",
            headers={"accept": "application/json"},
            timeout=self.timeout_sec,
        )
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, dict):
            raise TickerFeedError(f"unexpected payload type: {type(payload).__name__}")

        data = payload.get("data")
        if not isinstance(data, list):
            return []
        return [row for row in data if isinstance(row, dict)]

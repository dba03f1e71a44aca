# src/tolarate/adapters/providers/goldapi.py
"""
GoldAPI.io Provider for Gold and Silver Spot Prices

This module implements the GoldAPI.io client. One call fetches one metal
(XAU or XAG) in one currency with one API key:

    GET https://www.goldapi.io/api/XAU/USD
    x-access-token: <key>

GoldAPI reports problems such as an exhausted monthly quota as a JSON body
with an "error" field. Such answers are returned as a RawQuote carrying the
error; only failures of the call itself raise TransportError.

Files that USE this module:
- tolarate.application.fetch_service (QuoteFetcher drives GoldApiClient)
- tolarate.app (builds the client from settings)
- tests.test_goldapi (unit tests)

Files that this module USES:
- tolarate.adapters.providers.base (QuoteProvider interface)
- tolarate.domain (RawQuote, Metal, TransportError)
"""
import logging
from typing import Optional

import requests

from tolarate.adapters.providers.base import QuoteProvider
from tolarate.domain.errors import TransportError
from tolarate.domain.models import Metal, RawQuote

log = logging.getLogger(__name__)

GOLDAPI_BASE_URL = "https://www.goldapi.io/api"
GOLDAPI_SOURCE = "GoldAPI.io"


class GoldApiClient(QuoteProvider):
    name = GOLDAPI_SOURCE

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[int] = None):
        """
        Initialize GoldAPI.io client.

        Args:
            base_url: Optional custom API base URL (defaults to https://www.goldapi.io/api)
            timeout: Optional HTTP timeout in seconds (defaults to 10)
        """
        self.base_url = (base_url or GOLDAPI_BASE_URL).rstrip("/")
        self.timeout = timeout or 10

    def quote_url(self, metal: Metal, currency: str) -> str:
        return f"{self.base_url}/{metal.symbol}/{currency.upper()}"

    def fetch_quote(self, metal: Metal, currency: str, credential: str) -> RawQuote:
        """
        Fetch one metal quote from GoldAPI.io.

        Args:
            metal: Metal.GOLD or Metal.SILVER
            currency: Quote currency (e.g. "USD")
            credential: API key sent as the x-access-token header

        Returns:
            RawQuote built from the JSON body; RawQuote.error is set when the
            API reported an error (e.g. quota exceeded)

        Raises:
            TransportError: On timeout, network error, a non-JSON body, or an
                HTTP error status without an error payload
        """
        url = self.quote_url(metal, currency)
        headers = {
            "x-access-token": credential,
            "Content-Type": "application/json",
        }

        try:
            log.debug("Requesting %s", url)
            resp = requests.get(url, headers=headers, timeout=self.timeout)
        except requests.exceptions.Timeout:
            raise TransportError(f"GoldAPI timeout after {self.timeout}s ({metal.symbol})")
        except requests.exceptions.RequestException as e:
            raise TransportError(f"GoldAPI request failed ({metal.symbol}): {e}") from e

        try:
            data = resp.json()
        except ValueError:
            data = None

        # Quota and auth problems come back as {"error": "..."} with a 4xx status
        if isinstance(data, dict) and data.get("error"):
            log.debug("GoldAPI %s returned error payload (HTTP %s): %s",
                      metal.symbol, resp.status_code, data.get("error"))
            return RawQuote.from_json(data)

        if resp.status_code >= 400:
            raise TransportError(f"GoldAPI HTTP {resp.status_code} ({metal.symbol})")

        if data is None:
            raise TransportError(f"GoldAPI returned invalid JSON ({metal.symbol})")
        if not isinstance(data, dict):
            raise TransportError(f"GoldAPI returned non-dict JSON ({metal.symbol})")

        return RawQuote.from_json(data)

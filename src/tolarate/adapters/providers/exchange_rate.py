# src/tolarate/adapters/providers/exchange_rate.py
"""
ExchangeRate-API Provider for USD Conversion Rates

This module implements the open access ExchangeRate-API endpoint
(https://open.er-api.com/v6/latest/USD, no API key required).

The lookup is best-effort: any failure (network, HTTP status, invalid JSON,
missing or non-positive rate) returns the configured fallback rate and logs
a warning instead of raising.

Files that USE this module:
- tolarate.application.normalizer (CurrencyNormalizer uses OpenErApiProvider)
- tolarate.app (builds the provider from settings)
- tests.test_exchange_rate (unit tests)

Files that this module USES:
- tolarate.adapters.providers.base (RateProvider interface)
- tolarate.domain.models (ExchangeRate)
"""
import logging
import math
from typing import Optional

import requests

from tolarate.adapters.providers.base import RateProvider
from tolarate.domain.models import ExchangeRate

log = logging.getLogger(__name__)

OPEN_ER_API_URL = "https://open.er-api.com/v6/latest/USD"
FALLBACK_USD_PKR = 282.81


class OpenErApiProvider(RateProvider):
    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[int] = None,
        fallback_rate: float = FALLBACK_USD_PKR,
    ):
        """
        Initialize ExchangeRate-API provider.

        Args:
            url: Optional custom endpoint (defaults to the USD "latest" endpoint)
            timeout: Optional HTTP timeout in seconds (defaults to 5)
            fallback_rate: Rate returned when the endpoint cannot be used

        Raises:
            ValueError: If the fallback rate is not a positive number
        """
        if not (fallback_rate > 0 and math.isfinite(fallback_rate)):
            raise ValueError(f"Fallback exchange rate must be positive, got {fallback_rate}")
        self.url = url or OPEN_ER_API_URL
        self.timeout = timeout or 5
        self.fallback_rate = float(fallback_rate)

    def _fallback(self, currency: str, reason: str) -> ExchangeRate:
        log.warning(
            "Could not fetch USD/%s rate (%s), using fallback: %s",
            currency, reason, self.fallback_rate,
        )
        return ExchangeRate(value=self.fallback_rate, currency=currency, is_fallback=True)

    def usd_rate(self, currency: str = "PKR") -> ExchangeRate:
        """
        Get units of `currency` per 1 USD.

        Args:
            currency: Target currency code (default "PKR")

        Returns:
            ExchangeRate; is_fallback is True when the fallback rate was used
        """
        currency = currency.upper()
        try:
            resp = requests.get(self.url, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.exceptions.Timeout:
            return self._fallback(currency, f"timeout after {self.timeout}s")
        except requests.exceptions.RequestException as e:
            return self._fallback(currency, f"request failed: {e}")
        except ValueError as e:
            return self._fallback(currency, f"invalid JSON: {e}")

        try:
            # Expect: {"result": "success", "base_code": "USD", "rates": {"PKR": 281.9, ...}}
            rate = float(data["rates"][currency])
        except (KeyError, TypeError, ValueError):
            return self._fallback(currency, f"response missing 'rates.{currency}'")

        if not (math.isfinite(rate) and rate > 0):
            return self._fallback(currency, f"non-positive rate {rate}")

        log.info("Fetched USD/%s rate: %s", currency, rate)
        return ExchangeRate(value=rate, currency=currency, is_fallback=False)

# src/tolarate/application/normalizer.py
"""
Currency Normalizer - USD Quotes to Target Currency

This module rescales USD-denominated quotes into the target currency on a
per-gram or per-kilogram basis.

normalize() prefers the API's direct per-gram 24k price. When the API omits
it, the per-troy-ounce spot price is divided by 31.1035 g/oz instead.

Files that USE this module:
- tolarate.application.snapshot_service (SnapshotAssembler normalizes both quotes)
- tests.test_normalizer (unit tests)

Files that this module USES:
- tolarate.adapters.providers.base (RateProvider interface)
- tolarate.domain.models (RawQuote, MassBasis, ExchangeRate, constants)
"""
from __future__ import annotations

import math

from tolarate.adapters.providers.base import RateProvider
from tolarate.domain.models import GRAMS_PER_TROY_OUNCE, ExchangeRate, MassBasis, RawQuote


def normalize(quote: RawQuote, rate: float, basis: MassBasis) -> float:
    """
    Convert a USD quote into target currency per gram or per kilogram.

    Args:
        quote: Raw API quote
        rate: Target currency units per 1 USD
        basis: MassBasis.GRAM or MassBasis.KILOGRAM

    Returns:
        Price in target currency for one unit of `basis`; NaN when the quote
        has neither a per-gram nor a per-ounce price
    """
    if quote.price_gram_24k:
        per_gram = quote.price_gram_24k
    elif quote.price is not None:
        per_gram = quote.price / GRAMS_PER_TROY_OUNCE
    else:
        return math.nan
    return per_gram * basis.grams * rate


class CurrencyNormalizer:
    def __init__(self, rate_provider: RateProvider, currency: str = "PKR"):
        self.rate_provider = rate_provider
        self.currency = currency

    def lookup_rate(self) -> ExchangeRate:
        """Best-effort USD rate lookup; falls back instead of raising."""
        return self.rate_provider.usd_rate(self.currency)

    def exchange_rate(self) -> float:
        return self.lookup_rate().value

# src/tolarate/adapters/providers/base.py
"""
Base Provider Interfaces for Price and Exchange Rate Providers

This module defines the abstract base classes for the external price sources.
It establishes the contract that all provider implementations must follow.

Files that USE this module:
- tolarate.adapters.providers.goldapi (GoldApiClient implements QuoteProvider)
- tolarate.adapters.providers.exchange_rate (OpenErApiProvider implements RateProvider)
- tolarate.application.fetch_service (depends on QuoteProvider)
- tolarate.application.normalizer (depends on RateProvider)

Files that this module USES:
- tolarate.domain.models (RawQuote, ExchangeRate, Metal)
"""
from abc import ABC, abstractmethod

from tolarate.domain.models import ExchangeRate, Metal, RawQuote


class QuoteProvider(ABC):
    # Name shown as the snapshot source
    name: str = ""

    @abstractmethod
    def fetch_quote(self, metal: Metal, currency: str, credential: str) -> RawQuote:
        """
        Return one metal quote fetched with the given API key.

        Raises TransportError when the call itself fails. A quote whose
        payload reports an error is returned, not raised.
        """
        raise NotImplementedError


class RateProvider(ABC):
    @abstractmethod
    def usd_rate(self, currency: str) -> ExchangeRate:
        """Return units of `currency` per 1 USD. Must not raise."""
        raise NotImplementedError

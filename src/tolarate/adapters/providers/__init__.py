# src/tolarate/adapters/providers/__init__.py
"""
Provider Adapters - External API Clients

This package contains adapters for the external price and exchange rate APIs.
"""

from tolarate.adapters.providers.base import QuoteProvider, RateProvider
from tolarate.adapters.providers.exchange_rate import OpenErApiProvider
from tolarate.adapters.providers.goldapi import GoldApiClient

__all__ = [
    "QuoteProvider",
    "RateProvider",
    "GoldApiClient",
    "OpenErApiProvider",
]

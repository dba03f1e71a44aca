# src/tolarate/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains domain models, unit conversion and business errors.
No dependencies on infrastructure or external systems.
"""

from tolarate.domain.models import (
    GRAMS_PER_TOLA,
    GRAMS_PER_TROY_OUNCE,
    ConvertedPrices,
    ExchangeRate,
    GoldPrices,
    MassBasis,
    Metal,
    PriceSnapshot,
    RawQuote,
    RawQuotePair,
    SilverPrices,
)
from tolarate.domain.conversion import convert
from tolarate.domain.errors import (
    AllCredentialsExhaustedError,
    DomainError,
    HistoryStoreError,
    InvalidSnapshotError,
    LogicalApiError,
    NoCredentialsError,
    TransportError,
)

__all__ = [
    "GRAMS_PER_TOLA",
    "GRAMS_PER_TROY_OUNCE",
    "ConvertedPrices",
    "ExchangeRate",
    "GoldPrices",
    "MassBasis",
    "Metal",
    "PriceSnapshot",
    "RawQuote",
    "RawQuotePair",
    "SilverPrices",
    "convert",
    "AllCredentialsExhaustedError",
    "DomainError",
    "HistoryStoreError",
    "InvalidSnapshotError",
    "LogicalApiError",
    "NoCredentialsError",
    "TransportError",
]

# src/tolarate/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains domain models representing core business concepts:
- Metals and mass bases
- Raw quotes returned by the price API
- Price snapshots in the target currency
- Converted per-tola prices

Files that USE this module:
- tolarate.application.* (all services use domain models)
- tolarate.adapters.* (adapters create and use domain models)
- tests.* (tests use domain models for test data)

Files that this module USES:
- None (pure domain layer, no external dependencies)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import math
from dataclasses import dataclass, field  # Decorator for creating data classes
from datetime import datetime  # Date/time utilities for timestamps
from enum import Enum
from typing import Any, Dict, Optional  # Type hints for optional values


GRAMS_PER_TOLA = 11.6638038
GRAMS_PER_TROY_OUNCE = 31.1035
GRAMS_PER_KILOGRAM = 1000


class Metal(Enum):
    """Metals supported by the price API, valued by their ISO 4217 symbol."""
    GOLD = "XAU"
    SILVER = "XAG"

    @property
    def symbol(self) -> str:
        return self.value


class MassBasis(Enum):
    """Unit of mass a normalized price is quoted per."""
    GRAM = 1
    KILOGRAM = GRAMS_PER_KILOGRAM

    @property
    def grams(self) -> int:
        return self.value


def _optional_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _is_valid_price(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value) and value >= 0


@dataclass(frozen=True)
class RawQuote:
    """
    One metal price as returned by the price API.

    Attributes:
        price: Spot price per troy ounce (optional)
        price_gram_24k: Price per gram of 24k metal (optional, preferred when present)
        error: Error message reported by the API despite a successful response
        payload: Raw JSON body for provenance
    """
    price: Optional[float] = None
    price_gram_24k: Optional[float] = None
    error: Optional[str] = None
    payload: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def has_error(self) -> bool:
        return self.error is not None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "RawQuote":
        """
        Build a RawQuote from a price API JSON body.

        Args:
            data: Decoded JSON object (e.g. {"price": 3100.5, "price_gram_24k": 99.68})

        Returns:
            RawQuote with numeric fields coerced to float and a non-empty
            'error' value captured as text
        """
        error = data.get("error")
        if error is not None and not isinstance(error, str):
            error = str(error)
        return cls(
            price=_optional_float(data.get("price")),
            price_gram_24k=_optional_float(data.get("price_gram_24k")),
            error=error or None,
            payload=dict(data),
        )


@dataclass(frozen=True)
class RawQuotePair:
    """Gold and silver quotes fetched with the same API key."""
    gold: RawQuote
    silver: RawQuote
    credential: str  # masked form of the key that produced both quotes


@dataclass(frozen=True)
class ExchangeRate:
    """
    USD to target-currency multiplier.

    Attributes:
        value: Units of target currency per 1 USD
        currency: Target currency code (e.g. "PKR")
        is_fallback: True when the configured fallback was used instead of a live rate
    """
    value: float
    currency: str = "PKR"
    is_fallback: bool = False


@dataclass(frozen=True)
class PriceSnapshot:
    """
    One internally consistent pair of gold/silver readings in the target currency.

    Attributes:
        gold_per_gram: Gold price per gram
        silver_per_kg: Silver price per kilogram
        gold_raw: Gold quote as returned by the API
        silver_raw: Silver quote as returned by the API
        source: Name of the price API
        exchange_rate: USD rate applied to both quotes
        rate_is_fallback: Whether the fallback exchange rate was applied
        ts: When this snapshot was assembled (UTC)
    """
    gold_per_gram: float
    silver_per_kg: float
    gold_raw: RawQuote
    silver_raw: RawQuote
    source: str
    exchange_rate: float = 0.0
    rate_is_fallback: bool = False
    ts: Optional[datetime] = None

    def is_valid(self) -> bool:
        """True when both prices are finite and non-negative."""
        return _is_valid_price(self.gold_per_gram) and _is_valid_price(self.silver_per_kg)


@dataclass(frozen=True)
class GoldPrices:
    per_gram: float
    per_tola: float


@dataclass(frozen=True)
class SilverPrices:
    per_kg: float
    per_tola: float


@dataclass(frozen=True)
class ConvertedPrices:
    """
    Prices expressed per tola, plus the gold/silver price ratio.

    Attributes:
        gold: Gold per gram and per tola
        silver: Silver per kilogram and per tola
        ratio: How many tolas of silver one tola of gold buys
    """
    gold: GoldPrices
    silver: SilverPrices
    ratio: float

    def is_valid(self) -> bool:
        """True when every price and the ratio are finite and non-negative."""
        return all(
            _is_valid_price(v)
            for v in (
                self.gold.per_gram,
                self.gold.per_tola,
                self.silver.per_kg,
                self.silver.per_tola,
                self.ratio,
            )
        )

    def to_json(self) -> dict:
        """Serialize with the camelCase keys used in the price history file."""
        return {
            "gold": {"perGram": self.gold.per_gram, "perTola": self.gold.per_tola},
            "silver": {"perKg": self.silver.per_kg, "perTola": self.silver.per_tola},
            "ratio": self.ratio,
        }

    @staticmethod
    def from_json(data: dict) -> "ConvertedPrices":
        return ConvertedPrices(
            gold=GoldPrices(
                per_gram=float(data["gold"]["perGram"]),
                per_tola=float(data["gold"]["perTola"]),
            ),
            silver=SilverPrices(
                per_kg=float(data["silver"]["perKg"]),
                per_tola=float(data["silver"]["perTola"]),
            ),
            ratio=float(data["ratio"]),
        )

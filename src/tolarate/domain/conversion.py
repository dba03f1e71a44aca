# src/tolarate/domain/conversion.py
"""
Unit Conversion - Per-Tola Prices

Converts gold-per-gram and silver-per-kilogram prices into per-tola prices
and the gold/silver ratio. 1 tola = 11.6638038 grams.

Files that USE this module:
- tolarate.app (converts the assembled snapshot before storing/notifying)
- tests.test_conversion (unit tests)

Files that this module USES:
- tolarate.domain.models (ConvertedPrices and the tola constant)
"""
from __future__ import annotations

import math

from tolarate.domain.models import (
    GRAMS_PER_KILOGRAM,
    GRAMS_PER_TOLA,
    ConvertedPrices,
    GoldPrices,
    SilverPrices,
)


def _ratio(numerator: float, denominator: float) -> float:
    # Python raises on float division by zero; follow IEEE 754 instead.
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def convert(gold_per_gram: float, silver_per_kg: float) -> ConvertedPrices:
    """
    Convert per-gram gold and per-kilogram silver prices to per-tola prices.

    Non-finite inputs propagate as NaN/Inf instead of raising; callers are
    expected to check ConvertedPrices.is_valid() before using the result.

    Args:
        gold_per_gram: Gold price per gram
        silver_per_kg: Silver price per kilogram

    Returns:
        ConvertedPrices with per-tola values and gold/silver ratio
    """
    gold_per_tola = gold_per_gram * GRAMS_PER_TOLA

    silver_per_gram = silver_per_kg / GRAMS_PER_KILOGRAM
    silver_per_tola = silver_per_gram * GRAMS_PER_TOLA

    return ConvertedPrices(
        gold=GoldPrices(per_gram=gold_per_gram, per_tola=gold_per_tola),
        silver=SilverPrices(per_kg=silver_per_kg, per_tola=silver_per_tola),
        ratio=_ratio(gold_per_tola, silver_per_tola),
    )

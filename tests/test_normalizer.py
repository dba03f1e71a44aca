# tests/test_normalizer.py
"""
Normalizer Tests - Unit Tests for USD to Target Currency Normalization

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- tolarate.application.normalizer (normalize, CurrencyNormalizer)
- unittest.mock (Mock for the rate provider)
"""
import math

import pytest  # Testing framework for writing and running tests

from unittest.mock import Mock  # Mock objects for testing without real API calls

from tolarate.application.normalizer import CurrencyNormalizer, normalize
from tolarate.domain.models import ExchangeRate, MassBasis, RawQuote


class TestNormalize:
    def test_gram_price_gram_basis(self):
        quote = RawQuote(price_gram_24k=100)
        assert normalize(quote, 280, MassBasis.GRAM) == pytest.approx(28000)

    def test_gram_price_kilogram_basis(self):
        quote = RawQuote(price_gram_24k=100)
        assert normalize(quote, 280, MassBasis.KILOGRAM) == pytest.approx(28000000)

    def test_gram_price_preferred_over_ounce_price(self):
        quote = RawQuote(price=3100, price_gram_24k=100)
        assert normalize(quote, 280, MassBasis.GRAM) == pytest.approx(28000)

    def test_ounce_price_gram_basis(self):
        quote = RawQuote(price=3100)
        assert normalize(quote, 280, MassBasis.GRAM) == pytest.approx(27911.97, abs=0.01)
        assert normalize(quote, 280, MassBasis.GRAM) == pytest.approx((3100 / 31.1035) * 280)

    def test_ounce_price_kilogram_basis(self):
        quote = RawQuote(price=38.5)
        assert normalize(quote, 282.81, MassBasis.KILOGRAM) == pytest.approx(
            ((38.5 * 1000) / 31.1035) * 282.81
        )

    def test_zero_gram_price_falls_back_to_ounce_price(self):
        quote = RawQuote(price=3100, price_gram_24k=0)
        assert normalize(quote, 280, MassBasis.GRAM) == pytest.approx((3100 / 31.1035) * 280)

    def test_no_price_gives_nan(self):
        assert math.isnan(normalize(RawQuote(), 280, MassBasis.GRAM))


class TestCurrencyNormalizer:
    def test_exchange_rate_delegates_to_provider(self):
        provider = Mock()
        provider.usd_rate.return_value = ExchangeRate(value=281.5, currency="PKR")

        normalizer = CurrencyNormalizer(provider, currency="PKR")

        assert normalizer.exchange_rate() == 281.5
        provider.usd_rate.assert_called_once_with("PKR")

    def test_lookup_rate_keeps_fallback_flag(self):
        provider = Mock()
        provider.usd_rate.return_value = ExchangeRate(value=282.81, is_fallback=True)

        assert CurrencyNormalizer(provider).lookup_rate().is_fallback

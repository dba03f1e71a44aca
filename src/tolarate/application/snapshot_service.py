# src/tolarate/application/snapshot_service.py
"""
Snapshot Service - Price Snapshot Assembly

This module combines the fetcher and the normalizer into one PriceSnapshot:
gold per gram and silver per kilogram in the target currency, with the raw
quotes and the exchange rate kept for provenance.

No retries happen here; all failover is done by QuoteFetcher and its errors
propagate unchanged.

Files that USE this module:
- tolarate.app (run_cycle builds one snapshot per run)
- tests.test_snapshot_service (unit and end-to-end tests)

Files that this module USES:
- tolarate.application.fetch_service (QuoteFetcher)
- tolarate.application.normalizer (CurrencyNormalizer, normalize)
- tolarate.domain.models (PriceSnapshot, MassBasis)
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from tolarate.application.fetch_service import QuoteFetcher
from tolarate.application.normalizer import CurrencyNormalizer, normalize
from tolarate.domain.models import MassBasis, PriceSnapshot

log = logging.getLogger(__name__)


class SnapshotAssembler:
    def __init__(self, fetcher: QuoteFetcher, normalizer: CurrencyNormalizer):
        self.fetcher = fetcher
        self.normalizer = normalizer

    def build_snapshot(self) -> PriceSnapshot:
        """
        Fetch both quotes and convert them to the target currency.

        Returns:
            PriceSnapshot with gold per gram and silver per kilogram

        Raises:
            NoCredentialsError: If no API key is configured
            AllCredentialsExhaustedError: If every API key failed
        """
        pair = self.fetcher.fetch_snapshot_raw()
        rate = self.normalizer.lookup_rate()

        snapshot = PriceSnapshot(
            gold_per_gram=normalize(pair.gold, rate.value, MassBasis.GRAM),
            silver_per_kg=normalize(pair.silver, rate.value, MassBasis.KILOGRAM),
            gold_raw=pair.gold,
            silver_raw=pair.silver,
            source=self.fetcher.provider.name,
            exchange_rate=rate.value,
            rate_is_fallback=rate.is_fallback,
            ts=datetime.now(timezone.utc),
        )
        log.info(
            "Snapshot assembled: gold/g=%.2f silver/kg=%.2f %s (rate=%s%s, key=%s)",
            snapshot.gold_per_gram,
            snapshot.silver_per_kg,
            rate.currency,
            rate.value,
            ", fallback" if rate.is_fallback else "",
            pair.credential,
        )
        return snapshot

# src/tolarate/application/fetch_service.py
"""
Fetch Service - Multi-Key Price Fetching with Failover

This module drives the price API across the credential pool. Keys are tried
one at a time in a freshly shuffled order. For each key, gold and then silver
are fetched with that same key; the first key that yields two clean quotes
wins. Quota exhaustion and transport failures are handled identically: log
and move on to the next key. No key is tried twice in one cycle.

Files that USE this module:
- tolarate.application.snapshot_service (SnapshotAssembler uses QuoteFetcher)
- tests.test_fetch_service (unit tests)

Files that this module USES:
- tolarate.adapters.providers.base (QuoteProvider interface)
- tolarate.application.credential_pool (CredentialPool, mask_credential)
- tolarate.domain (RawQuote, RawQuotePair, Metal, errors)
"""
from __future__ import annotations

import logging
from typing import List

from tolarate.adapters.providers.base import QuoteProvider
from tolarate.application.credential_pool import CredentialPool, mask_credential
from tolarate.domain.errors import (
    AllCredentialsExhaustedError,
    LogicalApiError,
    NoCredentialsError,
    TransportError,
)
from tolarate.domain.models import Metal, RawQuote, RawQuotePair

log = logging.getLogger(__name__)

QUOTA_EXCEEDED_MARKER = "quota exceeded"


def is_quota_error(quote: RawQuote) -> bool:
    """
    Check whether a quote carries a quota-exhaustion error.

    GoldAPI does not document a structured error code, so this matches the
    message text. Only log messages depend on it.
    """
    return isinstance(quote.error, str) and QUOTA_EXCEEDED_MARKER in quote.error.lower()


class QuoteFetcher:
    def __init__(self, provider: QuoteProvider, pool: CredentialPool, currency: str = "USD"):
        """
        Initialize the fetcher.

        Args:
            provider: Price API client
            pool: API keys to try
            currency: Currency the quotes are requested in (default "USD")
        """
        self.provider = provider
        self.pool = pool
        self.currency = currency

    def _check(self, quote: RawQuote) -> RawQuote:
        if quote.has_error:
            raise LogicalApiError(quote.error, is_quota=is_quota_error(quote))
        return quote

    def fetch_snapshot_raw(self) -> RawQuotePair:
        """
        Fetch gold and silver quotes with the first key that succeeds.

        Returns:
            RawQuotePair with both quotes and the masked key that produced them

        Raises:
            NoCredentialsError: If the pool is empty (no HTTP call is made)
            AllCredentialsExhaustedError: If every key failed
        """
        keys = self.pool.shuffled_order(self.pool.list_credentials())
        if not keys:
            log.error("No API keys configured")
            raise NoCredentialsError("No API keys configured")

        log.info("Fetching prices from %s (%s) with %d key(s)",
                 self.provider.name, self.currency, len(keys))

        failures: List[str] = []
        for key in keys:
            masked = mask_credential(key)
            log.info("Attempting to fetch with key: %s", masked)
            try:
                # Same key for both calls so quota state comes from one account.
                # Both calls are always issued; only a transport failure ends the trial early.
                gold = self.provider.fetch_quote(Metal.GOLD, self.currency, key)
                silver = self.provider.fetch_quote(Metal.SILVER, self.currency, key)
                self._check(gold)
                self._check(silver)
            except LogicalApiError as e:
                failures.append(f"{masked}: {e}")
                if e.is_quota:
                    log.warning("Quota exceeded for key %s. Switching to next key...", masked)
                else:
                    log.warning("API error with key %s: %s. Switching to next key...", masked, e)
                continue
            except TransportError as e:
                failures.append(f"{masked}: {e}")
                log.warning("Request failed with key %s: %s. Switching to next key...", masked, e)
                continue

            log.info("Successfully fetched prices using key: %s", masked)
            return RawQuotePair(gold=gold, silver=silver, credential=masked)

        log.error("Failed to fetch prices with all %d available key(s)", len(keys))
        raise AllCredentialsExhaustedError(failures)

# src/tolarate/application/credential_pool.py
"""
Credential Pool - Interchangeable API Keys

This module holds the API keys available for failover and produces a fresh
random trial order for every fetch cycle. Randomizing the order spreads
load across accounts without remembering which keys failed before.

Files that USE this module:
- tolarate.application.fetch_service (QuoteFetcher iterates the shuffled pool)
- tolarate.app (builds the pool from discovered keys)
- tests.test_credential_pool (unit tests)

Files that this module USES:
- tolarate.shared.validators (validate_api_key to drop blank keys)
"""
from __future__ import annotations

import random
from typing import Iterable, List, Optional, Sequence

from tolarate.shared.validators import validate_api_key


def mask_credential(credential: str) -> str:
    """
    Mask an API key for logging: first 4 and last 4 characters.

    Keys of 8 characters or fewer are fully masked, since showing both
    ends would reveal the whole key.
    """
    if len(credential) <= 8:
        return "****"
    return f"{credential[:4]}...{credential[-4:]}"


class CredentialPool:
    """
    Fixed set of API keys for one run.

    The pool is built from an explicit list (usually the result of
    tolarate.config.discover_credentials) so tests can pass literal keys.
    """

    def __init__(self, credentials: Iterable[str], rng: Optional[random.Random] = None):
        """
        Initialize the credential pool.

        Args:
            credentials: Raw key values; blank and whitespace-only values are dropped
            rng: Optional random generator (tests inject a seeded one). When None,
                 every shuffle uses a newly seeded generator.
        """
        self._credentials: List[str] = [
            c.strip() for c in credentials if validate_api_key(c)
        ]
        self._rng = rng

    def __len__(self) -> int:
        return len(self._credentials)

    def list_credentials(self) -> List[str]:
        """Return the usable keys in configuration order (a copy)."""
        return list(self._credentials)

    def shuffled_order(self, credentials: Optional[Sequence[str]] = None) -> List[str]:
        """
        Return every key exactly once, in a uniformly random order.

        Fisher-Yates: walking i from the last index down to 1, swap item i
        with a uniformly chosen item at index j <= i.

        Args:
            credentials: Keys to shuffle (defaults to this pool's keys)

        Returns:
            New shuffled list; the input is left untouched. Empty input gives
            an empty list.
        """
        items = list(self._credentials if credentials is None else credentials)
        rng = self._rng if self._rng is not None else random.Random()
        for i in range(len(items) - 1, 0, -1):
            j = rng.randint(0, i)
            items[i], items[j] = items[j], items[i]
        return items

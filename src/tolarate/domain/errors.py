# src/tolarate/domain/errors.py
"""
Domain Errors - Business Logic Exceptions

This module defines the exceptions raised while fetching and validating
price snapshots.

Recoverable (the fetcher moves on to the next API key):
- TransportError: network failure, timeout or HTTP error for a single call
- LogicalApiError: the API answered but the payload carries an error

Fatal for the current cycle:
- NoCredentialsError: no API key is configured
- AllCredentialsExhaustedError: every API key was tried and failed
- InvalidSnapshotError: a price came out missing, negative or non-finite
- HistoryStoreError: the price history could not be written
"""

from __future__ import annotations

from typing import Sequence


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class TransportError(DomainError):
    """Raised when a single HTTP call fails (network, timeout, HTTP status, bad JSON)."""
    pass


class LogicalApiError(DomainError):
    """Raised when the API responds successfully but reports an error in its payload."""

    def __init__(self, message: str, is_quota: bool = False):
        super().__init__(message)
        self.is_quota = is_quota


class NoCredentialsError(DomainError):
    """Raised when no usable API key is configured."""
    pass


class AllCredentialsExhaustedError(DomainError):
    """Raised when every API key in the pool failed during one fetch cycle."""

    def __init__(self, failures: Sequence[str]):
        self.failures = list(failures)
        super().__init__(
            f"Failed to fetch prices with all {len(self.failures)} available key(s): "
            + "; ".join(self.failures)
        )


class InvalidSnapshotError(DomainError):
    """Raised when a price snapshot has a missing, negative or non-finite field."""
    pass


class HistoryStoreError(DomainError):
    """Raised when the price history cannot be written."""
    pass

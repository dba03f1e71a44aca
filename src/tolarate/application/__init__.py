# src/tolarate/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains application services that orchestrate domain logic:
credential rotation, quote fetching, currency normalization and snapshot
assembly. Adapters are used through the interfaces in
tolarate.adapters.providers.base.
"""

from tolarate.application.credential_pool import CredentialPool, mask_credential
from tolarate.application.fetch_service import QuoteFetcher, is_quota_error
from tolarate.application.normalizer import CurrencyNormalizer, normalize
from tolarate.application.snapshot_service import SnapshotAssembler

__all__ = [
    "CredentialPool",
    "mask_credential",
    "QuoteFetcher",
    "is_quota_error",
    "CurrencyNormalizer",
    "normalize",
    "SnapshotAssembler",
]

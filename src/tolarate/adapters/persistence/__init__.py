# src/tolarate/adapters/persistence/__init__.py
"""
Persistence Adapters - Data Storage

This package contains adapters for persisting data:
- File-based price history (JSON)
"""

from tolarate.adapters.persistence.history_store import HistoryEntry, HistoryStore

__all__ = [
    "HistoryEntry",
    "HistoryStore",
]

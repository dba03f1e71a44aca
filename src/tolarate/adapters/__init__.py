# src/tolarate/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Providers (price and exchange rate APIs)
- Notifications (Google Chat)
- Persistence (price history)
- Formatting (output)
"""

__all__ = []

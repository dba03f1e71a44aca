# src/tolarate/adapters/formatting/__init__.py
"""
Formatting Adapters - Message Formatting

This package contains message formatting for Google Chat output.
"""

from tolarate.adapters.formatting.formatter import format_price_message, format_timestamp

__all__ = [
    "format_price_message",
    "format_timestamp",
]

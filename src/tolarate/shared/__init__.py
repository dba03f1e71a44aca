# src/tolarate/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Logging configuration
"""

from tolarate.shared.validators import (
    validate_api_key,
    validate_timezone,
    validate_webhook_url,
)
from tolarate.shared.logging_conf import setup_logging

__all__ = [
    "validate_api_key",
    "validate_timezone",
    "validate_webhook_url",
    "setup_logging",
]

# src/tolarate/shared/validators.py
"""
Input Validation Utilities - Configuration Validation

This module provides validation functions for configuration values:
API keys, webhook URLs and timezone names.

Files that USE this module:
- tolarate.config.settings (uses validation functions in Settings field validators)
- tolarate.application.credential_pool (uses validate_api_key to drop blank keys)

Files that this module USES:
- None (pure utility functions)
"""
import re
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def validate_api_key(api_key: Optional[str], min_length: int = 1) -> bool:
    """
    Validate API key format.

    Args:
        api_key: API key to validate
        min_length: Minimum length requirement (after stripping whitespace)

    Returns:
        True if valid, False otherwise
    """
    if not api_key:
        return False

    return len(api_key.strip()) >= min_length


def validate_webhook_url(url: str) -> bool:
    """
    Validate an incoming-webhook URL.

    Args:
        url: Webhook URL to validate

    Returns:
        True if the URL is an absolute http(s) URL with a host, False otherwise
    """
    if not url:
        return False

    return bool(re.match(r'^https?://[^\s/?#]+[^\s]*$', url))


def validate_timezone(name: str) -> bool:
    """
    Validate an IANA timezone name (e.g. "Asia/Karachi").

    Args:
        name: Timezone name to validate

    Returns:
        True if zoneinfo knows the timezone, False otherwise
    """
    if not name:
        return False

    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True

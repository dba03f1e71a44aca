# src/tolarate/adapters/formatting/formatter.py
"""
Message Formatter - Text Formatting and Presentation

This module formats converted prices into the Google Chat message:
gold per gram and per tola, silver per kilogram and per tola, the
gold/silver ratio and the data source. Google Chat renders *bold* and
_italic_ in plain text messages.

Files that USE this module:
- tolarate.app (formats the message sent to Google Chat)
- tests.test_formatter (unit tests)

Files that this module USES:
- tolarate.domain.models (ConvertedPrices)
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from tolarate.domain.models import ConvertedPrices

DEFAULT_TIMEZONE = "Asia/Karachi"


def format_timestamp(ts: datetime, tz: str = DEFAULT_TIMEZONE) -> str:
    """
    Format a timestamp as a long local date and short time.

    Args:
        ts: Timestamp (naive values are treated as UTC)
        tz: IANA timezone to display in

    Returns:
        String like 'Saturday, October 18, 2026 at 1:38 PM'
    """
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    local = ts.astimezone(ZoneInfo(tz))
    hour = local.hour % 12 or 12
    return (
        f"{local:%A}, {local:%B} {local.day}, {local.year} "
        f"at {hour}:{local:%M} {local:%p}"
    )


def _fmt_pct(curr: float, prev: Optional[float]) -> str:
    """
    Format percentage change between current and previous values.

    Formula: (new - old) / old * 100

    Args:
        curr: Current value (new)
        prev: Previous value (old)

    Returns:
        Suffix like '  (2.1% 📈)', '  (3.1% 📉)', '  (0.0% ⏸)', or '' if prev
        is missing or not positive
    """
    if prev is None or prev <= 0:
        return ""
    delta = (curr - prev) / prev * 100.0
    arrow = "📈" if delta > 0 else ("📉" if delta < 0 else "⏸")
    return f"  ({abs(delta):.1f}% {arrow})"


def format_price_message(
    prices: ConvertedPrices,
    source: str = "GoldAPI.io",
    ts: Optional[datetime] = None,
    previous: Optional[ConvertedPrices] = None,
    currency: str = "PKR",
    tz: str = DEFAULT_TIMEZONE,
    fallback_rate: Optional[float] = None,
) -> str:
    """
    Format converted prices as a Google Chat message.

    Args:
        prices: Current converted prices
        source: Data source shown in the footer
        ts: Time of the reading (defaults to now)
        previous: Optional previous history entry; adds % change to per-tola lines
        currency: Currency code shown after each price
        tz: Timezone for the header timestamp
        fallback_rate: Set when the fallback exchange rate was used; adds a note

    Returns:
        Multi-line message text
    """
    timestamp = format_timestamp(ts or datetime.now(timezone.utc), tz)
    prev_gold = previous.gold.per_tola if previous else None
    prev_silver = previous.silver.per_tola if previous else None

    lines = [
        f"🏅 *Gold & Silver Prices - {timestamp}*",
        "",
        "📊 *Gold Prices:*",
        f"• Per gram: *{prices.gold.per_gram:.2f} {currency}*",
        f"• Per tola: *{prices.gold.per_tola:.2f} {currency}*"
        + _fmt_pct(prices.gold.per_tola, prev_gold),
        "",
        "🥈 *Silver Prices:*",
        f"• Per kg: *{prices.silver.per_kg:.2f} {currency}*",
        f"• Per tola: *{prices.silver.per_tola:.2f} {currency}*"
        + _fmt_pct(prices.silver.per_tola, prev_silver),
        "",
        f"📈 *Gold/Silver Ratio:* *{prices.ratio:.4f}*",
        f"(1 tola gold = {prices.ratio:.2f} tola silver)",
        "",
    ]
    if fallback_rate is not None:
        lines.append(f"⚠️ Live USD/{currency} rate unavailable, used {fallback_rate:.2f}")
    lines.append(f"_Source: {source}_")
    return "\n".join(lines)

# src/tolarate/app.py
"""
Application Entry Point - Cron Job

This module serves as the composition root for tolarate. One invocation is
one fetch cycle:

1. Load settings and discover the GOLDAPI_KEY* key pool
2. Build a price snapshot (key failover happens inside)
3. Convert to per-tola prices and validate them
4. Append the prices to the history file
5. Post the formatted message to Google Chat

Scheduling is left to cron, e.g. every day at 10:00:

    0 10 * * * cd /opt/tolarate && /opt/tolarate/.venv/bin/tolarate >> cron.log 2>&1

Exit status: 0 on success, 1 on any fatal error (nothing stored or sent),
2 when prices were stored but the notification failed.

Files that USE this module:
- tolarate.__main__ (python -m tolarate)
- the `tolarate` console script
- tests.test_app (unit tests)

Files that this module USES:
- tolarate.shared.logging_conf (setup_logging for logging configuration)
- tolarate.config (settings and API key discovery)
- tolarate.application (credential pool, fetcher, normalizer, assembler)
- tolarate.adapters.* (GoldAPI, ExchangeRate-API, history, formatter, Google Chat)
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from pydantic import ValidationError

from tolarate import __version__
from tolarate.adapters.formatting.formatter import format_price_message
from tolarate.adapters.notifications.google_chat import GoogleChatNotifier
from tolarate.adapters.persistence.history_store import HistoryStore
from tolarate.adapters.providers.exchange_rate import OpenErApiProvider
from tolarate.adapters.providers.goldapi import GoldApiClient
from tolarate.application.credential_pool import CredentialPool
from tolarate.application.fetch_service import QuoteFetcher
from tolarate.application.normalizer import CurrencyNormalizer
from tolarate.application.snapshot_service import SnapshotAssembler
from tolarate.config.settings import DEFAULT_ENV_FILE, Settings, discover_credentials, load_settings
from tolarate.domain.conversion import convert
from tolarate.domain.errors import DomainError, HistoryStoreError, InvalidSnapshotError
from tolarate.domain.models import ConvertedPrices, PriceSnapshot
from tolarate.shared.logging_conf import setup_logging

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_NOTIFY_FAILED = 2


def build_assembler(settings: Settings, credentials: Sequence[str]) -> SnapshotAssembler:
    """Wire the price client, key pool and exchange rate provider together."""
    client = GoldApiClient(
        base_url=settings.goldapi_base_url,
        timeout=settings.price_timeout_seconds,
    )
    fetcher = QuoteFetcher(client, CredentialPool(credentials), currency=settings.quote_currency)
    normalizer = CurrencyNormalizer(
        OpenErApiProvider(
            url=settings.exchange_rate_url,
            timeout=settings.exchange_rate_timeout_seconds,
            fallback_rate=settings.fallback_exchange_rate,
        ),
        currency=settings.target_currency,
    )
    return SnapshotAssembler(fetcher, normalizer)


def _validated_prices(snapshot: PriceSnapshot) -> ConvertedPrices:
    if not snapshot.is_valid():
        raise InvalidSnapshotError(
            f"Invalid snapshot: gold/g={snapshot.gold_per_gram} silver/kg={snapshot.silver_per_kg}"
        )
    prices = convert(snapshot.gold_per_gram, snapshot.silver_per_kg)
    if not prices.is_valid():
        raise InvalidSnapshotError(f"Invalid converted prices: {prices}")
    return prices


def run_cycle(
    settings: Settings,
    assembler: SnapshotAssembler,
    history: HistoryStore,
    notifier: GoogleChatNotifier,
    dry_run: bool = False,
    store_history: bool = True,
    notify: bool = True,
) -> int:
    """
    Run one fetch/store/notify cycle.

    Returns:
        Process exit status (EXIT_OK, EXIT_FAILURE or EXIT_NOTIFY_FAILED)
    """
    try:
        snapshot = assembler.build_snapshot()
        prices = _validated_prices(snapshot)
    except DomainError as e:
        log.error("Failed to fetch prices: %s", e)
        return EXIT_FAILURE

    try:
        previous_entry = history.latest()
    except HistoryStoreError as e:
        log.warning("Could not read previous history entry: %s", e)
        previous_entry = None

    message = format_price_message(
        prices,
        source=snapshot.source,
        ts=snapshot.ts,
        previous=previous_entry.prices if previous_entry else None,
        currency=settings.target_currency,
        tz=settings.display_timezone,
        fallback_rate=snapshot.exchange_rate if snapshot.rate_is_fallback else None,
    )
    log.info("Message to be sent:\n%s", message)

    if dry_run:
        print(message)
        return EXIT_OK

    if store_history:
        try:
            history.append(prices, ts=snapshot.ts)
        except DomainError as e:
            log.error("Failed to update history: %s", e)
            return EXIT_FAILURE

    if notify:
        if not notifier.send(message):
            log.error("Failed to send message to Google Chat")
            return EXIT_NOTIFY_FAILED
        log.info("Successfully sent price update to Google Chat")

    return EXIT_OK


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tolarate",
        description="Fetch gold and silver prices, store them and post them to Google Chat.",
    )
    parser.add_argument("--dry-run", action="store_true",
                        help="fetch and print the message without storing or sending it")
    parser.add_argument("--no-history", action="store_true", help="do not append to the history file")
    parser.add_argument("--no-notify", action="store_true", help="do not post to Google Chat")
    parser.add_argument("--env-file", default=DEFAULT_ENV_FILE, help="path to the .env file (default: .env)")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="logging level")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run one cycle from the command line.

    Returns:
        Process exit status
    """
    args = _parse_args(argv)
    level = getattr(logging, args.log_level)

    try:
        settings = load_settings(args.env_file)
    except ValidationError as e:
        setup_logging(level=level)
        log.error("Invalid configuration: %s", e)
        return EXIT_FAILURE

    setup_logging(
        level=level,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        log_stdout=settings.log_stdout,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )

    credentials = discover_credentials(settings.goldapi_key_prefix, env_file=args.env_file)
    log.info("Discovered %d API key(s) with prefix %s", len(credentials), settings.goldapi_key_prefix)

    return run_cycle(
        settings,
        build_assembler(settings, credentials),
        HistoryStore(settings.history_file),
        GoogleChatNotifier(settings.google_chat_webhook_url, timeout=settings.webhook_timeout_seconds),
        dry_run=args.dry_run,
        store_history=not args.no_history,
        notify=not args.no_notify,
    )


if __name__ == "__main__":
    sys.exit(main())

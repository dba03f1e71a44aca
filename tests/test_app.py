# tests/test_app.py
"""
Application Tests - Unit Tests for the Cron Entry Point

This module tests one fetch/store/notify cycle and the exit status of
every outcome. Collaborators are replaced with mocks; the history store
uses a temporary file.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- tolarate.app (run_cycle, main, exit codes)
- tolarate.adapters.persistence.history_store (HistoryStore)
- unittest.mock (Mock and patch for collaborators)
"""
import json
import math
from datetime import datetime, timezone

from unittest.mock import Mock, patch  # Mock objects and patching for testing without real dependencies

from tolarate.adapters.persistence.history_store import HistoryStore
from tolarate.app import EXIT_FAILURE, EXIT_NOTIFY_FAILED, EXIT_OK, main, run_cycle
from tolarate.config.settings import Settings
from tolarate.domain.conversion import convert
from tolarate.domain.errors import AllCredentialsExhaustedError, HistoryStoreError, NoCredentialsError
from tolarate.domain.models import PriceSnapshot, RawQuote

TS = datetime(2026, 10, 18, 8, 38, tzinfo=timezone.utc)


def _snapshot(gold=28190.0, silver=350000.0, fallback=False):
    return PriceSnapshot(
        gold_per_gram=gold,
        silver_per_kg=silver,
        gold_raw=RawQuote(price_gram_24k=100.0),
        silver_raw=RawQuote(price_gram_24k=1.25),
        source="GoldAPI.io",
        exchange_rate=281.9,
        rate_is_fallback=fallback,
        ts=TS,
    )


def _assembler(snapshot=None, error=None):
    assembler = Mock()
    if error is not None:
        assembler.build_snapshot.side_effect = error
    else:
        assembler.build_snapshot.return_value = snapshot or _snapshot()
    return assembler


def _notifier(ok=True):
    notifier = Mock()
    notifier.send.return_value = ok
    return notifier


class TestRunCycle:
    def setup_method(self):
        self.settings = Settings(_env_file=None)

    def test_success_stores_and_notifies(self, tmp_path):
        history = HistoryStore(tmp_path / "prices.json")
        notifier = _notifier()

        status = run_cycle(self.settings, _assembler(), history, notifier)

        assert status == EXIT_OK
        entries = history.load()
        assert len(entries) == 1
        assert entries[0].date == TS
        assert entries[0].prices == convert(28190.0, 350000.0)
        message = notifier.send.call_args[0][0]
        assert "Sunday, October 18, 2026 at 1:38 PM" in message
        assert "_Source: GoldAPI.io_" in message

    def test_previous_entry_adds_change(self, tmp_path):
        history = HistoryStore(tmp_path / "prices.json")
        history.append(convert(28000.0, 350000.0))
        notifier = _notifier()

        run_cycle(self.settings, _assembler(), history, notifier)

        assert "📈" in notifier.send.call_args[0][0]
        assert len(history.load()) == 2

    def test_fallback_rate_is_mentioned(self, tmp_path):
        notifier = _notifier()

        run_cycle(self.settings, _assembler(_snapshot(fallback=True)),
                  HistoryStore(tmp_path / "prices.json"), notifier)

        assert "used 281.90" in notifier.send.call_args[0][0]

    def test_no_credentials_leaves_history_and_chat_untouched(self, tmp_path):
        path = tmp_path / "prices.json"
        notifier = _notifier()

        status = run_cycle(self.settings, _assembler(error=NoCredentialsError("none")),
                           HistoryStore(path), notifier)

        assert status == EXIT_FAILURE
        assert not path.exists()
        notifier.send.assert_not_called()

    def test_exhausted_keys_fail(self, tmp_path):
        notifier = _notifier()

        status = run_cycle(self.settings, _assembler(error=AllCredentialsExhaustedError(["a", "b"])),
                           HistoryStore(tmp_path / "prices.json"), notifier)

        assert status == EXIT_FAILURE
        notifier.send.assert_not_called()

    def test_invalid_snapshot_is_not_stored_or_sent(self, tmp_path):
        path = tmp_path / "prices.json"
        notifier = _notifier()

        status = run_cycle(self.settings, _assembler(_snapshot(gold=math.nan)),
                           HistoryStore(path), notifier)

        assert status == EXIT_FAILURE
        assert not path.exists()
        notifier.send.assert_not_called()

    def test_zero_silver_is_rejected(self, tmp_path):
        status = run_cycle(self.settings, _assembler(_snapshot(silver=0.0)),
                           HistoryStore(tmp_path / "prices.json"), _notifier())

        assert status == EXIT_FAILURE

    def test_history_failure_skips_notification(self):
        history = Mock()
        history.latest.return_value = None
        history.append.side_effect = HistoryStoreError("disk full")
        notifier = _notifier()

        status = run_cycle(self.settings, _assembler(), history, notifier)

        assert status == EXIT_FAILURE
        notifier.send.assert_not_called()

    def test_notification_failure_keeps_history(self, tmp_path):
        history = HistoryStore(tmp_path / "prices.json")

        status = run_cycle(self.settings, _assembler(), history, _notifier(ok=False))

        assert status == EXIT_NOTIFY_FAILED
        assert len(history.load()) == 1

    def test_dry_run_prints_only(self, tmp_path, capsys):
        path = tmp_path / "prices.json"
        notifier = _notifier()

        status = run_cycle(self.settings, _assembler(), HistoryStore(path), notifier, dry_run=True)

        assert status == EXIT_OK
        assert "Gold & Silver Prices" in capsys.readouterr().out
        assert not path.exists()
        notifier.send.assert_not_called()

    def test_no_history_and_no_notify(self, tmp_path):
        path = tmp_path / "prices.json"
        notifier = _notifier()

        status = run_cycle(self.settings, _assembler(), HistoryStore(path), notifier,
                           store_history=False, notify=False)

        assert status == EXIT_OK
        assert not path.exists()
        notifier.send.assert_not_called()


class TestMain:
    @patch('tolarate.app.setup_logging')
    @patch('tolarate.app.discover_credentials', return_value=[])
    def test_no_keys_exits_non_zero(self, mock_discover, mock_logging, tmp_path, monkeypatch):
        monkeypatch.setenv("HISTORY_FILE", str(tmp_path / "prices.json"))
        env_file = tmp_path / ".env"
        env_file.write_text("", encoding="utf-8")

        status = main(["--env-file", str(env_file)])

        assert status == EXIT_FAILURE
        mock_discover.assert_called_once_with("GOLDAPI_KEY", env_file=str(env_file))
        assert not (tmp_path / "prices.json").exists()

    @patch('tolarate.app.setup_logging')
    def test_invalid_configuration_exits_non_zero(self, mock_logging, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("FALLBACK_EXCHANGE_RATE=-1\n", encoding="utf-8")

        assert main(["--env-file", str(env_file)]) == EXIT_FAILURE

    @patch('tolarate.app.setup_logging')
    @patch('tolarate.app.GoogleChatNotifier')
    @patch('tolarate.app.build_assembler')
    @patch('tolarate.app.discover_credentials', return_value=["key-one-1111"])
    def test_full_cycle(self, mock_discover, mock_build, mock_notifier_cls, mock_logging,
                        tmp_path, monkeypatch):
        history_file = tmp_path / "prices.json"
        monkeypatch.setenv("HISTORY_FILE", str(history_file))
        monkeypatch.setenv("GOOGLE_CHAT_WEBHOOK_URL", "https://chat.googleapis.com/v1/spaces/A/messages")
        env_file = tmp_path / ".env"
        env_file.write_text("", encoding="utf-8")
        mock_build.return_value = _assembler()
        mock_notifier_cls.return_value = _notifier()

        status = main(["--env-file", str(env_file)])

        assert status == EXIT_OK
        assert mock_build.call_args[0][1] == ["key-one-1111"]
        assert len(json.loads(history_file.read_text(encoding="utf-8"))) == 1
        mock_notifier_cls.return_value.send.assert_called_once()

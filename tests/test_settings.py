# tests/test_settings.py
"""
Settings Tests - Unit Tests for Configuration and API Key Discovery

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- tolarate.config.settings (Settings, discover_credentials, load_settings)
"""
from pathlib import Path

import pytest  # Testing framework for writing and running tests
from pydantic import ValidationError

from tolarate.config.settings import Settings, discover_credentials, load_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("FALLBACK_EXCHANGE_RATE", "HISTORY_FILE", "TARGET_CURRENCY", "GOLDAPI_BASE_URL"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.goldapi_base_url == "https://www.goldapi.io/api"
        assert settings.goldapi_key_prefix == "GOLDAPI_KEY"
        assert settings.quote_currency == "USD"
        assert settings.target_currency == "PKR"
        assert settings.price_timeout_seconds == 10
        assert settings.exchange_rate_timeout_seconds == 5
        assert settings.fallback_exchange_rate == 282.81
        assert settings.history_file == Path("./prices.json")
        assert settings.display_timezone == "Asia/Karachi"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("FALLBACK_EXCHANGE_RATE", "290.5")
        monkeypatch.setenv("TARGET_CURRENCY", "inr")
        monkeypatch.setenv("GOLDAPI_BASE_URL", "http://localhost:8080/api/")

        settings = Settings(_env_file=None)

        assert settings.fallback_exchange_rate == 290.5
        assert settings.target_currency == "INR"
        assert settings.goldapi_base_url == "http://localhost:8080/api"

    def test_reads_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("HISTORY_FILE", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("HISTORY_FILE=/var/lib/tolarate/prices.json\n", encoding="utf-8")

        settings = load_settings(env_file)

        assert settings.history_file == Path("/var/lib/tolarate/prices.json")

    def test_rejects_non_positive_fallback(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, fallback_exchange_rate=0)

    def test_rejects_bad_webhook(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, google_chat_webhook_url="not a url")

    def test_accepts_google_chat_webhook(self):
        url = "https://chat.googleapis.com/v1/spaces/AAAA/messages?key=k&token=t"
        assert Settings(_env_file=None, google_chat_webhook_url=url).google_chat_webhook_url == url

    def test_rejects_unknown_timezone(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, display_timezone="Mars/Olympus")

    def test_rejects_bad_currency(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, target_currency="rupees")


class TestDiscoverCredentials:
    def test_prefix_match_sorted_by_name(self):
        environ = {
            "GOLDAPI_KEY_2": "key-two",
            "GOLDAPI_KEY": "key-one",
            "GOLDAPI_KEY_BACKUP": "key-backup",
            "OTHER_KEY": "ignored",
            "PATH": "/usr/bin",
        }

        assert discover_credentials(environ=environ, env_file=None) == [
            "key-one", "key-two", "key-backup",
        ]

    def test_drops_blank_values(self):
        environ = {"GOLDAPI_KEY": "", "GOLDAPI_KEY_2": "   ", "GOLDAPI_KEY_3": " key-three "}

        assert discover_credentials(environ=environ, env_file=None) == ["key-three"]

    def test_prefix_setting_is_not_a_key(self):
        environ = {"GOLDAPI_KEY_PREFIX": "GOLDAPI_KEY", "GOLDAPI_KEY": "key-one"}

        assert discover_credentials(environ=environ, env_file=None) == ["key-one"]

    def test_custom_prefix(self):
        environ = {"METALS_TOKEN_A": "a", "GOLDAPI_KEY": "b"}

        assert discover_credentials("METALS_TOKEN", environ=environ, env_file=None) == ["a"]

    def test_no_keys(self):
        assert discover_credentials(environ={}, env_file=None) == []

    def test_env_file_overlaid_by_environment(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "GOLDAPI_KEY=from-file\nGOLDAPI_KEY_2=file-only\nGOLDAPI_KEY_3=\n",
            encoding="utf-8",
        )

        keys = discover_credentials(environ={"GOLDAPI_KEY": "from-env"}, env_file=env_file)

        assert keys == ["from-env", "file-only"]

    def test_missing_env_file_is_ignored(self, tmp_path):
        keys = discover_credentials(environ={"GOLDAPI_KEY": "k"}, env_file=tmp_path / "missing.env")
        assert keys == ["k"]

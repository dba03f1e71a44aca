# src/tolarate/adapters/notifications/google_chat.py
"""
Google Chat Notifier - Incoming Webhook Delivery

This module posts a pre-formatted text message to a Google Chat space
through an incoming webhook ({"text": "..."} payload).

To set up a webhook: open the space in Google Chat, choose
"Apps & integrations" > "Manage webhooks", add one and put its URL in
GOOGLE_CHAT_WEBHOOK_URL.

Delivery never raises: send() reports success as a boolean so the caller
decides what a failed notification means for the run.

Files that USE this module:
- tolarate.app (sends the price update)
- tests.test_google_chat (unit tests)

Files that this module USES:
- None (requests only)
"""
import logging
from typing import Optional

import requests

log = logging.getLogger(__name__)


class GoogleChatNotifier:
    def __init__(self, webhook_url: Optional[str], timeout: int = 10):
        """
        Initialize the notifier.

        Args:
            webhook_url: Incoming webhook URL (empty disables delivery)
            timeout: HTTP timeout in seconds (default 10)
        """
        self.webhook_url = webhook_url or ""
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.webhook_url)

    def send(self, text: str) -> bool:
        """
        Send a text message to Google Chat.

        Args:
            text: Message text

        Returns:
            True if the webhook accepted the message, False otherwise
        """
        if not self.configured:
            log.error("Google Chat webhook URL not configured! Set GOOGLE_CHAT_WEBHOOK_URL")
            return False

        try:
            resp = requests.post(
                self.webhook_url,
                json={"text": text},
                headers={"Content-Type": "application/json; charset=UTF-8"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.exceptions.Timeout:
            log.error("Google Chat webhook timeout after %d seconds", self.timeout)
            return False
        except requests.exceptions.HTTPError as e:
            body = e.response.text if e.response is not None else ""
            log.error("Google Chat webhook HTTP error: %s %s", e, body[:200])
            return False
        except requests.exceptions.RequestException as e:
            log.error("Error sending to Google Chat: %s", e)
            return False

        log.info("Message sent to Google Chat successfully")
        return True

# src/tolarate/adapters/notifications/__init__.py
"""
Notification Adapters - Chat Delivery

This package contains adapters that deliver formatted messages to chat services.
"""

from tolarate.adapters.notifications.google_chat import GoogleChatNotifier

__all__ = ["GoogleChatNotifier"]

# src/tolarate/__init__.py
"""
Tolarate - Gold & Silver Tola Price Reporter

A cron-friendly job that fetches gold and silver spot prices from GoldAPI.io
using a pool of interchangeable API keys, converts them to PKR per gram,
kilogram and tola, keeps a JSON price history and posts an update to a
Google Chat space.
"""

__version__ = "1.0.0"

"""Adapters connecting the core to Telegram, the shortening API, and SQLite."""

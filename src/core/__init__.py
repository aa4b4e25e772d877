"""Core domain package for relink.

Core contains URL extraction, retry, and message rewriting logic without any
Telegram, HTTP, or storage-specific code, keeping the business logic portable.
"""

"""Static configuration for relink.

Service, retry, storage, and logging settings live in a single JSON file for
quick edits without touching Python. Secrets stay in the environment (.env).
"""

import json
import os

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

CONFIG_PATH = os.path.join(PROJECT_ROOT, "config.json")


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Shortening service endpoint and request policy.
# - API_BASE_URL: service root; /api and /api/user/balance are appended
# - REQUEST_TIMEOUT: per-request timeout in seconds
# - MAX_RETRIES: extra attempts after the first failed call
# - RETRY_DELAY: fixed wait between attempts, in seconds
# - SKIP_DOMAIN: links containing this marker are treated as already shortened
_shortener = _CONFIG.get("shortener", {})
API_BASE_URL = _shortener.get("api_base_url", "https://linkara.xyz")
REQUEST_TIMEOUT = float(_shortener.get("request_timeout", 10))
MAX_RETRIES = int(_shortener.get("max_retries", 3))
RETRY_DELAY = float(_shortener.get("retry_delay", 1))
SKIP_DOMAIN = _shortener.get("skip_domain")
USER_AGENT = _shortener.get("user_agent", "Telegram-URL-Shortener-Bot/1.0")

# Where to store the SQLite database.
_storage = _CONFIG.get("storage", {})
DB_PATH = _storage.get("db_path", "relink.db")
if not os.path.isabs(DB_PATH):
    DB_PATH = os.path.join(PROJECT_ROOT, DB_PATH)

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})

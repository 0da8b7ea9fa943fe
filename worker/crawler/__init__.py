"""Markup retrieval through cross-origin relays."""

# Use explicit imports when needed:
# from worker.crawler.fetcher import Fetcher, RelayAttempt, fetch_markup
# from worker.crawler.url import normalize_address, extract_hostname, is_https

__all__ = [
    # Fetcher
    "Fetcher",
    "RelayAttempt",
    "fetch_markup",
    # URL helpers
    "normalize_address",
    "extract_hostname",
    "is_https",
    "build_relay_url",
]

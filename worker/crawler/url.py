"""Address normalization and URL helpers for the fetcher and extractor."""

import re
from urllib.parse import quote, urlparse

from api.exceptions import ValidationError

# Addresses already carrying one of these schemes are used as given
_SCHEME_PATTERN = re.compile(r"^https?://", re.IGNORECASE)


def normalize_address(address: str) -> str:
    """
    Turn a user-supplied address into an absolute URL.

    Surrounding whitespace is stripped and ``https://`` is prepended when the
    address has no http(s) scheme.

    Args:
        address: Address as typed by the caller, e.g. ``example.com``

    Returns:
        Absolute URL string

    Raises:
        ValidationError: If the address is empty
    """
    if not address or not address.strip():
        raise ValidationError("Please enter a valid URL", field="url")

    address = address.strip()
    if not _SCHEME_PATTERN.match(address):
        address = "https://" + address
    return address


def extract_hostname(url: str) -> str | None:
    """Extract the lowercase hostname from a URL, or None if it has none."""
    try:
        return urlparse(url).hostname
    except ValueError:
        return None


def is_https(url: str) -> bool:
    """Check if the URL uses the https scheme."""
    try:
        return urlparse(url).scheme.lower() == "https"
    except ValueError:
        return False


def build_relay_url(template: str, target: str) -> str:
    """Fill a relay URL template with the percent-encoded target address."""
    return template.format(url=quote(target, safe=""))

"""Permissive markup parsing.

The parser never raises: malformed, truncated or empty markup still yields a
document, and elements the parser could not recognise are simply absent from
later queries.
"""

from bs4 import BeautifulSoup


def parse(raw_markup: str | bytes | None) -> BeautifulSoup:
    """
    Parse raw markup into a navigable document tree.

    Args:
        raw_markup: Page markup as text (bytes are decoded as UTF-8)

    Returns:
        BeautifulSoup document, possibly empty
    """
    if raw_markup is None:
        raw_markup = ""
    elif isinstance(raw_markup, bytes):
        raw_markup = raw_markup.decode("utf-8", errors="replace")

    return BeautifulSoup(raw_markup, "html.parser")

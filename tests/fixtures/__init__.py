"""Shared fixtures: page builders and simulated relays."""

from tests.fixtures.pages import build_page, image_tags, scenario_a_page
from tests.fixtures.relay import RELAY_TEMPLATE, relay_returning, relay_transport

__all__ = [
    # Pages
    "build_page",
    "image_tags",
    "scenario_a_page",
    # Relay
    "RELAY_TEMPLATE",
    "relay_returning",
    "relay_transport",
]

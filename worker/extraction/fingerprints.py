"""Technology and social network fingerprint tables.

Technology detection is a plain substring search of the raw markup. Each
marker declares its own case sensitivity; there is no uniform policy.
Social detection tests link hostnames against known network domains.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from worker.crawler.url import extract_hostname


@dataclass(frozen=True)
class TechnologyMarker:
    """A markup substring that reveals a technology."""

    marker: str
    technology: str
    case_sensitive: bool

    def matches(self, raw_markup: str, lowered: str | None = None) -> bool:
        """Search ``raw_markup``; ``lowered`` is its lower-cased form, if already computed."""
        if self.case_sensitive:
            return self.marker in raw_markup
        if lowered is None:
            lowered = raw_markup.lower()
        return self.marker.lower() in lowered


# Order is the reporting order; several markers may map to one technology
TECHNOLOGY_MARKERS: tuple[TechnologyMarker, ...] = (
    # CMS / site builders
    TechnologyMarker("wp-content", "WordPress", case_sensitive=True),
    TechnologyMarker("wp-includes", "WordPress", case_sensitive=True),
    TechnologyMarker("cdn.shopify.com", "Shopify", case_sensitive=False),
    TechnologyMarker("wixstatic.com", "Wix", case_sensitive=False),
    TechnologyMarker("squarespace", "Squarespace", case_sensitive=False),
    # Frameworks
    TechnologyMarker("__NEXT_DATA__", "Next.js", case_sensitive=True),
    TechnologyMarker("__NUXT__", "Nuxt.js", case_sensitive=True),
    TechnologyMarker("data-reactroot", "React", case_sensitive=True),
    TechnologyMarker("react", "React", case_sensitive=False),
    TechnologyMarker("ng-version", "Angular", case_sensitive=True),
    TechnologyMarker("data-v-", "Vue.js", case_sensitive=True),
    TechnologyMarker("vue.js", "Vue.js", case_sensitive=False),
    # Libraries
    TechnologyMarker("jquery", "jQuery", case_sensitive=False),
    TechnologyMarker("bootstrap", "Bootstrap", case_sensitive=False),
    TechnologyMarker("tailwind", "Tailwind CSS", case_sensitive=False),
    # Analytics / infrastructure
    TechnologyMarker("googletagmanager.com", "Google Tag Manager", case_sensitive=False),
    TechnologyMarker("google-analytics.com", "Google Analytics", case_sensitive=False),
    TechnologyMarker("gtag(", "Google Analytics", case_sensitive=True),
    TechnologyMarker("cloudflare", "Cloudflare", case_sensitive=False),
)

# Network name -> hostname substrings identifying a link to that network
SOCIAL_NETWORKS: dict[str, tuple[str, ...]] = {
    "facebook": ("facebook.com", "fb.com"),
    "twitter": ("twitter.com", "x.com"),
    "instagram": ("instagram.com",),
    "linkedin": ("linkedin.com",),
    "youtube": ("youtube.com", "youtu.be"),
    "tiktok": ("tiktok.com",),
}

FOUND = "Found"
NOT_FOUND = "Not found"


def detect_technologies(raw_markup: str) -> list[str]:
    """
    Detect technologies mentioned in the raw markup.

    Args:
        raw_markup: Unparsed page markup

    Returns:
        Technology names in table order, one entry per technology
    """
    lowered = raw_markup.lower()
    found: list[str] = []
    for marker in TECHNOLOGY_MARKERS:
        if marker.technology in found:
            continue
        if marker.matches(raw_markup, lowered):
            found.append(marker.technology)
    return found


def detect_social_presence(hrefs: list[str]) -> Mapping[str, bool]:
    """
    Check which social networks the page links to.

    Every network is evaluated independently, so one link may count for
    more than one network.

    Args:
        hrefs: Raw ``href`` values of all anchors on the page

    Returns:
        Read-only mapping of network name to whether at least one link matched
    """
    hostnames = [h for h in (extract_hostname(href) for href in hrefs) if h]

    return MappingProxyType(
        {
            network: any(domain in host for host in hostnames for domain in domains)
            for network, domains in SOCIAL_NETWORKS.items()
        }
    )


def presence_label(present: bool) -> str:
    """Label used for a network in reports."""
    return FOUND if present else NOT_FOUND

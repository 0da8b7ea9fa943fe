"""Signal extraction from a parsed page.

Turns one parsed document into a SignalSet: the raw facts every score and
recommendation is derived from. Absent elements resolve to None or zero here
so nothing downstream has to re-check the document.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from worker.crawler.url import extract_hostname, is_https
from worker.extraction.fingerprints import detect_social_presence, detect_technologies

# Elements whose text is never rendered
INVISIBLE_TAGS = frozenset(["script", "style", "noscript", "template"])

# Elements that start a new line of rendered text
BLOCK_TAGS = frozenset(
    [
        "address", "article", "aside", "blockquote", "body", "dd", "div", "dl", "dt",
        "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4",
        "h5", "h6", "header", "hr", "li", "main", "nav", "ol", "p", "pre", "section",
        "table", "td", "th", "tr", "ul",
    ]
)

FAVICON_RELS = (("icon",), ("shortcut", "icon"))


@dataclass(frozen=True)
class ImageSignal:
    """One <img> element."""

    src: str | None
    alt_present: bool

    def to_dict(self) -> dict:
        return {"src": self.src, "alt_present": self.alt_present}


@dataclass(frozen=True)
class SignalSet:
    """Raw facts extracted from one document. Never mutated."""

    title: str | None
    meta_description: str | None
    meta_keywords: str | None
    h1_count: int
    h2_count: int
    h3_count: int
    images: tuple[ImageSignal, ...]
    link_count: int
    external_link_count: int
    form_count: int
    structured_data_count: int
    canonical_url: str | None
    meta_robots: str | None
    has_favicon: bool
    has_viewport: bool
    is_https: bool
    content_size: int  # bytes of UTF-8 markup
    word_count: int
    technologies: tuple[str, ...] = ()
    social_links: Mapping[str, bool] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # Read-only copy so a finished SignalSet cannot change underneath a report
        object.__setattr__(self, "social_links", MappingProxyType(dict(self.social_links)))

    @property
    def has_title(self) -> bool:
        return self.title is not None

    @property
    def has_meta_description(self) -> bool:
        return self.meta_description is not None

    @property
    def has_canonical(self) -> bool:
        return self.canonical_url is not None

    @property
    def has_meta_robots(self) -> bool:
        return self.meta_robots is not None

    @property
    def has_structured_data(self) -> bool:
        return self.structured_data_count > 0

    @property
    def has_h1(self) -> bool:
        return self.h1_count > 0

    @property
    def has_any_heading(self) -> bool:
        return self.h1_count > 0 or self.h2_count > 0 or self.h3_count > 0

    @property
    def image_count(self) -> int:
        return len(self.images)

    @property
    def images_with_alt(self) -> int:
        return sum(1 for image in self.images if image.alt_present)

    @property
    def alt_coverage_percent(self) -> float:
        """Share of images carrying alt text; 100 when there are no images."""
        if not self.images:
            return 100.0
        return self.images_with_alt / len(self.images) * 100

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "title": self.title,
            "meta_description": self.meta_description,
            "meta_keywords": self.meta_keywords,
            "headings": {"h1": self.h1_count, "h2": self.h2_count, "h3": self.h3_count},
            "images": [image.to_dict() for image in self.images],
            "counts": {
                "images": self.image_count,
                "images_with_alt": self.images_with_alt,
                "links": self.link_count,
                "external_links": self.external_link_count,
                "forms": self.form_count,
                "structured_data": self.structured_data_count,
                "words": self.word_count,
            },
            "alt_coverage_percent": round(self.alt_coverage_percent, 2),
            "canonical_url": self.canonical_url,
            "meta_robots": self.meta_robots,
            "has_favicon": self.has_favicon,
            "has_viewport": self.has_viewport,
            "is_https": self.is_https,
            "content_size": self.content_size,
            "technologies": list(self.technologies),
            "social_links": dict(self.social_links),
        }


def _get_meta_content(soup: BeautifulSoup, name: str) -> str | None:
    """Get the content of <meta name=...>, or None if missing or empty."""
    tag = soup.find("meta", attrs={"name": name})
    if not isinstance(tag, Tag):
        return None
    content = tag.get("content")
    if isinstance(content, list):
        content = " ".join(content)
    return content or None


def _rel_tokens(tag: Tag) -> tuple[str, ...]:
    rel = tag.get("rel") or []
    if isinstance(rel, str):
        rel = rel.split()
    return tuple(token.lower() for token in rel)


def _extract_title(soup: BeautifulSoup) -> str | None:
    title_tag = soup.find("title")
    if not isinstance(title_tag, Tag):
        return None
    return title_tag.get_text(strip=True) or None


def _extract_canonical(soup: BeautifulSoup) -> str | None:
    for link in soup.find_all("link"):
        if "canonical" in _rel_tokens(link):
            href = link.get("href")
            return href if isinstance(href, str) and href else None
    return None


def _has_favicon(soup: BeautifulSoup) -> bool:
    return any(_rel_tokens(link) in FAVICON_RELS for link in soup.find_all("link"))


def _is_external(href: str, target_host: str | None) -> bool:
    """An absolute http(s) link pointing at a different host."""
    if not href.startswith("http"):
        return False
    host = extract_hostname(href)
    return host is not None and host != target_host


def _count_visible_words(soup: BeautifulSoup) -> int:
    """Count whitespace-separated tokens in the rendered body text."""
    root = soup.body or soup
    parts: list[str] = []
    current_block: Tag | BeautifulSoup | None = None
    for text in root.find_all(string=True):
        # Comments, doctypes and CDATA are not rendered text
        if isinstance(text, PreformattedString):
            continue
        if any(parent.name in INVISIBLE_TAGS for parent in text.parents):
            continue
        block = _block_container(text, root)
        if block is not current_block:
            parts.append(" ")
            current_block = block
        parts.append(str(text))
    # Inline tags may split one word across strings, e.g. Hel<b>lo</b>
    return len("".join(parts).split())


def _block_container(text: NavigableString, root: Tag | BeautifulSoup) -> Tag | BeautifulSoup:
    """Nearest block-level ancestor of ``text``, or ``root``."""
    for parent in text.parents:
        if parent is root or parent.name in BLOCK_TAGS:
            return parent
    return root


def extract_signals(soup: BeautifulSoup, raw_markup: str, address: str) -> SignalSet:
    """
    Extract every signal the scorer and report need from one document.

    Args:
        soup: Parsed document tree
        raw_markup: The markup the tree was parsed from
        address: Normalized target address

    Returns:
        SignalSet for the document
    """
    target_host = extract_hostname(address)

    images = tuple(
        ImageSignal(
            src=img.get("src") if isinstance(img.get("src"), str) else None,
            alt_present=bool(img.get("alt")),
        )
        for img in soup.find_all("img")
    )

    anchors = soup.find_all("a")
    hrefs = [href for href in (a.get("href") for a in anchors) if isinstance(href, str)]
    external = sum(1 for href in hrefs if _is_external(href, target_host))

    return SignalSet(
        title=_extract_title(soup),
        meta_description=_get_meta_content(soup, "description"),
        meta_keywords=_get_meta_content(soup, "keywords"),
        h1_count=len(soup.find_all("h1")),
        h2_count=len(soup.find_all("h2")),
        h3_count=len(soup.find_all("h3")),
        images=images,
        link_count=len(anchors),
        external_link_count=external,
        form_count=len(soup.find_all("form")),
        structured_data_count=len(
            soup.find_all("script", attrs={"type": "application/ld+json"})
        ),
        canonical_url=_extract_canonical(soup),
        meta_robots=_get_meta_content(soup, "robots"),
        has_favicon=_has_favicon(soup),
        has_viewport=soup.find("meta", attrs={"name": "viewport"}) is not None,
        is_https=is_https(address),
        content_size=len(raw_markup.encode("utf-8")),
        word_count=_count_visible_words(soup),
        technologies=tuple(detect_technologies(raw_markup)),
        social_links=detect_social_presence(hrefs),
    )

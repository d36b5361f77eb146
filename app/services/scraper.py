"""
Seed product page fetching and cleanup.

Fetches a product page and reduces it to readable text for the extraction
model: navigation, scripts, and ad blocks are dropped, structure is kept as
lightweight markdown, and candidate product image URLs are appended at the end.
"""
import html as html_lib
import logging
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

import httpx

logger = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0 (compatible; SeedWizard/1.0; +https://seedwizard.app)"
MAX_CONTENT_LENGTH = 15_000  # keeps the prompt within token limits
_TIMEOUT = 20.0


class PageFetchError(Exception):
    """Raised when a product page can't be fetched or isn't HTML."""


@dataclass(frozen=True)
class BlockedSite:
    domain: str
    name: str
    reason: str
    supports_html_paste: bool  # content is in the HTML source, just can't be fetched


_BLOCKED_SITES: list[BlockedSite] = [
    BlockedSite("seedsavers.org", "Seed Savers Exchange",
                "Uses a JavaScript-based storefront that prevents automated data extraction", False),
    BlockedSite("shop.seedsavers.org", "Seed Savers Exchange",
                "Uses a JavaScript-based storefront that prevents automated data extraction", False),
    BlockedSite("rareseeds.com", "Baker Creek Heirloom Seeds",
                "Has bot protection that blocks automated requests", True),
    BlockedSite("southernexposure.com", "Southern Exposure Seed Exchange",
                "Uses a JavaScript single-page app that prevents automated data extraction", False),
]


# ── Blocked sites ─────────────────────────────────────────────────────────────


def check_blocked_site(url: str) -> Optional[BlockedSite]:
    hostname = (urlparse(url).hostname or "").lower()
    if not hostname:
        return None
    for site in _BLOCKED_SITES:
        if hostname == site.domain or hostname.endswith("." + site.domain):
            return site
    return None


def blocked_site_message(site: BlockedSite) -> str:
    return (
        f"{site.name} isn't compatible with automatic import. {site.reason}. "
        "Please enter the seed details manually."
    )


# ── Fetch ─────────────────────────────────────────────────────────────────────


async def fetch_page_content(url: str) -> str:
    """Fetch a product page and return its cleaned text content."""
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise PageFetchError("URL must use HTTP or HTTPS protocol")

    headers = {
        "User-Agent": USER_AGENT,
        "Accept": "text/html,application/xhtml+xml",
        "Accept-Language": "en-US,en;q=0.9",
    }
    try:
        async with httpx.AsyncClient(timeout=_TIMEOUT, follow_redirects=True) as client:
            resp = await client.get(url, headers=headers)
    except httpx.HTTPError as exc:
        raise PageFetchError(f"Failed to fetch page: {exc}") from exc

    if resp.status_code >= 400:
        raise PageFetchError(f"Failed to fetch page: HTTP {resp.status_code}")

    content_type = resp.headers.get("content-type", "")
    if "text/html" not in content_type and "text/plain" not in content_type:
        raise PageFetchError("URL must point to an HTML page")

    logger.debug("fetch_page_content: %s — %d bytes", url, len(resp.text))
    return clean_html_content(resp.text)


# ── Cleanup ───────────────────────────────────────────────────────────────────

_OG_IMAGE_RES = [
    re.compile(r"""<meta[^>]*property=["']og:image["'][^>]*content=["']([^"']+)["'][^>]*>""", re.I),
    re.compile(r"""<meta[^>]*content=["']([^"']+)["'][^>]*property=["']og:image["'][^>]*>""", re.I),
]
_TWITTER_IMAGE_RES = [
    re.compile(r"""<meta[^>]*(?:name|property)=["']twitter:image["'][^>]*content=["']([^"']+)["'][^>]*>""", re.I),
    re.compile(r"""<meta[^>]*content=["']([^"']+)["'][^>]*(?:name|property)=["']twitter:image["'][^>]*>""", re.I),
]
_PRODUCT_URL_RE = re.compile(
    r"""["'](https?://[^"']*/(?:images/)?products?/[^"']*\.(?:jpg|jpeg|png|webp)[^"']*)["']""", re.I
)
_IMG_RE = re.compile(r"""<img[^>]*(?:src|data-src)=["']([^"']+)["'][^>]*>""", re.I)

_IMG_SKIP = ("logo", "icon", "placeholder", "loading", "spinner", "badge", "1x1", "nav-")
_IMG_HINTS = ("product", "seed", "cdn", "upload")

_DROP_BLOCK_TAGS = ("script", "style", "noscript", "header", "footer", "nav", "aside")
_AD_BLOCK_RE = re.compile(
    r"""<div[^>]*(?:id|class)=["'][^"']*(?:cookie|banner|popup|modal|newsletter|subscribe|ad-|ads-|advertising)"""
    r"""[^"']*["'][^>]*>[\s\S]*?</div>""",
    re.I,
)

# Tag → text replacements, applied in order
_STRUCTURE_SUBS: list[tuple[re.Pattern, str]] = [
    (re.compile(r"<h[1-6][^>]*>", re.I), "\n\n### "),
    (re.compile(r"</h[1-6]>", re.I), "\n"),
    (re.compile(r"<li[^>]*>", re.I), "\n- "),
    (re.compile(r"</li>", re.I), ""),
    (re.compile(r"<br\s*/?>", re.I), "\n"),
    (re.compile(r"<p[^>]*>", re.I), "\n"),
    (re.compile(r"</p>", re.I), "\n"),
    (re.compile(r"<tr[^>]*>", re.I), "\n"),
    (re.compile(r"<t[dh][^>]*>", re.I), " | "),
]


def _first_match(patterns: list[re.Pattern], text: str) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return None


def extract_image_urls(html: str) -> list[str]:
    """Candidate product image URLs, most reliable first (og:image)."""
    images: list[str] = []

    og_image = _first_match(_OG_IMAGE_RES, html)
    if og_image:
        images.append(og_image)

    twitter_image = _first_match(_TWITTER_IMAGE_RES, html)
    if twitter_image and twitter_image not in images:
        images.append(twitter_image)

    for match in _PRODUCT_URL_RE.finditer(html):
        url = match.group(1).replace("&amp;", "&")
        # Prefer the larger rendition on resizing CDNs
        if "sw=" in url and "sw=800" not in url:
            url = re.sub(r"sw=\d+", "sw=800", url)
            url = re.sub(r"sh=\d+", "sh=800", url)
        if url not in images:
            images.append(url)
            if len(images) >= 3:
                break

    for match in _IMG_RE.finditer(html):
        src = match.group(1)
        if (
            src
            and not any(skip in src for skip in _IMG_SKIP)
            and not src.endswith(".svg")
            and any(hint in src for hint in _IMG_HINTS)
            and src not in images
        ):
            images.append(src)
        if len(images) >= 5:
            break

    return images


def clean_html_content(html: str) -> str:
    image_urls = extract_image_urls(html)

    content = html
    for tag in _DROP_BLOCK_TAGS:
        content = re.sub(rf"<{tag}[^>]*>[\s\S]*?</{tag}>", "", content, flags=re.I)
    content = re.sub(r"<!--[\s\S]*?-->", "", content)
    content = _AD_BLOCK_RE.sub("", content)

    for pattern, replacement in _STRUCTURE_SUBS:
        content = pattern.sub(replacement, content)

    content = re.sub(r"<[^>]+>", " ", content)
    content = html_lib.unescape(content)

    content = re.sub(r"[ \t\r\f\v]+", " ", content)
    content = re.sub(r"\n +", "\n", content)
    content = re.sub(r"\n{3,}", "\n\n", content)
    content = content.strip()

    if len(content) > MAX_CONTENT_LENGTH:
        content = content[:MAX_CONTENT_LENGTH]
        last_period = content.rfind(".")
        if last_period > MAX_CONTENT_LENGTH * 0.8:
            content = content[: last_period + 1]
        content += "\n\n[Content truncated]"

    if image_urls:
        content += "\n\n[Product Images]\n" + "\n".join(f"- {url}" for url in image_urls)

    return content

# catalog/rendering/postprocessors/url_resolver.py
"""
Resolve root-relative URLs against the origin of the catalog XML.

Catalog exports link to "/programs/..." and "/images/..." relative to the
catalog site, which is not the site the fragment ends up embedded in.
"""

import re
from urllib.parse import urlparse

from .utils import parse_fragment, serialize_fragment

BACKGROUND_IMAGE_RE = re.compile(
    r"(background-image\s*:\s*url\(\s*)(['\"]?)(/(?!/)[^'\")]*)(\2\s*\))",
    re.IGNORECASE,
)


def get_base_origin(source_url: str) -> str:
    """Return "scheme://host" for a URL, or "" if it has no scheme or host."""
    try:
        parsed = urlparse(source_url or "")
    except ValueError:
        return ""
    if not parsed.scheme or not parsed.netloc:
        return ""
    return f"{parsed.scheme}://{parsed.netloc}"


def _is_root_relative(value: str) -> bool:
    return value.startswith("/") and not value.startswith("//")


def resolve_style_urls(style: str, base_origin: str) -> str:
    """Make background-image paths in an inline style absolute."""
    return BACKGROUND_IMAGE_RE.sub(
        lambda m: f"{m.group(1)}{m.group(2)}{base_origin}{m.group(3)}{m.group(4)}",
        style,
    )


def url_resolver(html: str, context: dict) -> str:
    """
    Rewrite root-relative href, src and background-image URLs.

    Args:
        html: HTML string to process
        context: Rewrite context; uses 'base_origin' (or 'source_url')

    Returns:
        Processed HTML with absolute URLs
    """
    base_origin = context.get("base_origin") or get_base_origin(
        context.get("source_url", "")
    )
    if not base_origin:
        return html

    soup = parse_fragment(html)

    for link in soup.find_all("a", href=True):
        href = link["href"]
        if _is_root_relative(href):
            link["href"] = base_origin + href

    for img in soup.find_all("img", src=True):
        src = img["src"]
        if _is_root_relative(src):
            img["src"] = base_origin + src

    for element in soup.find_all(style=True):
        style = element["style"]
        if "url(" in style:
            element["style"] = resolve_style_urls(style, base_origin)

    return serialize_fragment(soup)

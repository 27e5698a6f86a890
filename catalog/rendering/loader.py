"""Fetch and parse catalog XML exports."""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import unquote, urlparse

import httpx
from lxml import etree

from .config import get_catalog_config

logger = logging.getLogger(__name__)


class CatalogLoadError(Exception):
    """The catalog XML could not be retrieved or is not well-formed XML."""


def fetch_catalog_xml(url: str) -> bytes:
    """Retrieve the raw XML for a catalog page.

    http(s) URLs are downloaded; file:// URLs and bare paths are read from disk.

    Raises:
        CatalogLoadError: If the resource cannot be retrieved.
    """
    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise CatalogLoadError(f"Malformed URL {url!r}: {e}") from e
    scheme = parsed.scheme.lower()

    if scheme in ("http", "https"):
        config = get_catalog_config()
        try:
            response = httpx.get(
                url,
                timeout=config["FETCH_TIMEOUT"],
                follow_redirects=True,
                headers={"User-Agent": config["USER_AGENT"]},
            )
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise CatalogLoadError(f"Could not fetch {url}: {e}") from e
        return response.content

    if scheme == "file":
        path = Path(unquote(parsed.path))
    elif not scheme:
        path = Path(url)
    else:
        raise CatalogLoadError(f"Unsupported URL scheme: {scheme}")

    try:
        return path.read_bytes()
    except (OSError, ValueError) as e:
        raise CatalogLoadError(f"Could not read {path}: {e}") from e


def parse_catalog_xml(content: bytes) -> etree._Element:
    """Parse catalog XML into an element tree.

    External entities and network access are disabled.

    Raises:
        CatalogLoadError: If the content is empty or not well-formed.
    """
    if not content or not content.strip():
        raise CatalogLoadError("Empty XML document")

    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(content, parser)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise CatalogLoadError(f"Invalid XML: {e}") from e

    if root is None:
        raise CatalogLoadError("Empty XML document")
    return root


def load_catalog(url: str) -> etree._Element:
    """Fetch and parse a catalog XML export."""
    content = fetch_catalog_xml(url)
    root = parse_catalog_xml(content)
    logger.debug(f"Loaded catalog XML from {url} ({len(content)} bytes)")
    return root

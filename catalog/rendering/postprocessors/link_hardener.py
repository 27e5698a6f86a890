# catalog/rendering/postprocessors/link_hardener.py
"""
Open catalog links in a new browsing context.

Two passes:
1. Links inside list items (program and course lists) open in a new tab
2. Any other absolute or root-relative link does too, unless it sits inside
   the "on this page" navigation chrome

In-page links ("#...") and links bound to scrollToSection() are never touched.
"""

import re

from bs4 import Tag

from .utils import parse_fragment, serialize_fragment

SAFE_REL = ["noopener", "noreferrer"]

# Compared after lowercasing and dropping "-" and "_"
IN_PAGE_NAVIGATION_MARKERS = {"onthispage", "notinpdf", "onthispagenav"}

ABSOLUTE_URL_RE = re.compile(r"^[a-z][a-z0-9+.\-]*://", re.IGNORECASE)


def _is_internal_navigation(link: Tag) -> bool:
    return link.get("href", "").startswith("#") or link.has_attr("onclick")


def _is_absolute_or_root_relative(href: str) -> bool:
    return href.startswith("/") or bool(ABSOLUTE_URL_RE.match(href))


def _normalize_marker(class_name: str) -> str:
    return class_name.lower().replace("-", "").replace("_", "")


def _in_page_navigation(link: Tag) -> bool:
    """Check the ancestor chain for on-this-page / not-in-pdf markers."""
    for parent in link.parents:
        classes = parent.get("class", []) if isinstance(parent, Tag) else []
        if isinstance(classes, str):
            classes = classes.split()
        if any(_normalize_marker(c) in IN_PAGE_NAVIGATION_MARKERS for c in classes):
            return True
    return False


def open_in_new_context(link: Tag) -> None:
    """Set target="_blank" and merge noopener/noreferrer into rel."""
    link["target"] = "_blank"
    rel = link.get("rel", [])
    if isinstance(rel, str):
        rel = rel.split()
    link["rel"] = list(dict.fromkeys(list(rel) + SAFE_REL))


def link_hardener(html: str, context: dict) -> str:
    """
    Harden outbound links with target="_blank" and rel="noopener noreferrer".

    Args:
        html: HTML string to process
        context: Rewrite context (not used currently)

    Returns:
        Processed HTML with hardened links
    """
    soup = parse_fragment(html)

    # Pass 1: links in list items
    for li in soup.find_all("li"):
        for link in li.find_all("a", href=True):
            if _is_internal_navigation(link):
                continue
            if link.get("target") == "_blank":
                continue
            open_in_new_context(link)

    # Pass 2: every other outbound link
    for link in soup.find_all("a", href=True):
        if _is_internal_navigation(link):
            continue
        if not _is_absolute_or_root_relative(link["href"]):
            continue
        if _in_page_navigation(link):
            continue
        open_in_new_context(link)

    return serialize_fragment(soup)

"""Helpers shared by the catalog postprocessors for BeautifulSoup usage."""

from __future__ import annotations

import re
from typing import Iterable, List

from bs4 import BeautifulSoup, Tag

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]

# Block elements that act as section/list containers in catalog markup
CONTAINER_TAGS = {"div", "section", "article", "aside", "main"}


def parse_fragment(html: str) -> BeautifulSoup:
    """Parse an HTML fragment into a fresh, mutable tree.

    ``html.parser`` never wraps the input in ``<html>``/``<body>``, so a
    fragment stays a fragment when it is serialized again.
    """
    return BeautifulSoup(html or "", "html.parser")


def serialize_fragment(soup: BeautifulSoup) -> str:
    """Serialise a parsed fragment back to HTML."""
    return str(soup) if soup is not None else ""


def get_classes(tag: Tag) -> List[str]:
    existing_classes = tag.get("class", [])
    if isinstance(existing_classes, str):
        existing_classes = existing_classes.split()
    return list(existing_classes)


def add_classes(tag: Tag, classes: Iterable[str]) -> None:
    """Append classes to a tag, keeping existing ones and skipping duplicates."""
    merged_classes = list(
        dict.fromkeys(get_classes(tag) + [c for c in classes if c])
    )
    if merged_classes:
        tag["class"] = merged_classes


def slugify(text: str) -> str:
    """Lowercase text and collapse every non-alphanumeric run into one hyphen."""
    text = (text or "").strip().lower()
    text = re.sub(r"[^a-z0-9]+", "-", text)
    return text.strip("-")

# catalog/rendering/postprocessors/list_classifier.py
"""
Postprocessor that classifies catalog lists for theming.

This postprocessor:
- Adds "<heading>-list", "course-list-container" and "section-<name>" classes
  to block containers that directly hold a list
- Adds "course-list" and "<heading>-ul" classes to <ul> and <ol> elements
- Lists without a preceding heading get "general-list" / "general-ul"
- Adds an "item-<link text>" class to <li> elements that hold a link, plus
  classes guessed from the link target:
  - degree-<code> (e.g. program_MS_online -> degree-ms)
  - type-minor, type-certificate, type-online
  - level-graduate, level-undergraduate
  - dept-<segment> from the path segment before the last one
"""

import re
from typing import List, Optional
from urllib.parse import urlparse

from bs4 import Tag

from .utils import HEADING_TAGS, add_classes, parse_fragment, serialize_fragment, slugify

LIST_CONTAINER_TAGS = {"div", "section", "article", "aside", "nav", "main"}

DEGREE_CODE_RE = re.compile(r"_([A-Z]{2,4})(?=_|/|$)")


def _token_pattern(tokens: str) -> re.Pattern:
    # Tokens must not be glued to other letters ("undergraduate" is not "graduate")
    return re.compile(rf"(?<![a-z])(?:{tokens})(?![a-z])", re.IGNORECASE)


# (class, pattern) in the order they are tested; several may match
LINK_TARGET_TYPES = [
    ("type-minor", _token_pattern(r"minors?")),
    ("type-certificate", _token_pattern(r"certificates?|certs?")),
    ("type-online", _token_pattern(r"online|distance|distance-learning|ufonline")),
    (
        "level-graduate",
        _token_pattern(
            r"graduate|grad|masters?|doctoral|doctorate|phd|ms|ma|mba|mfa|mph|edd|dnp"
        ),
    ),
    (
        "level-undergraduate",
        _token_pattern(r"undergraduate|undergrad|bachelors?|ba|bs|bsn|bfa|bba"),
    ),
]


def _find_preceding_heading(element: Tag) -> Optional[Tag]:
    """Nearest preceding sibling heading, else nearest preceding heading."""
    heading = element.find_previous_sibling(HEADING_TAGS)
    if heading is None:
        heading = element.find_previous(HEADING_TAGS)
    return heading


def _heading_slug(element: Tag) -> str:
    heading = _find_preceding_heading(element)
    if heading is None:
        return ""
    return slugify(heading.get_text())


def classify_link_target(href: str) -> List[str]:
    """
    Guess classes for a program link from its URL.

    Example:
        >>> classify_link_target("https://example.edu/dept/program_MS_online")
        ['degree-ms', 'type-online', 'level-graduate', 'dept-dept']
    """
    classes = []

    match = DEGREE_CODE_RE.search(href)
    if match:
        classes.append(f"degree-{match.group(1).lower()}")

    for class_name, pattern in LINK_TARGET_TYPES:
        if pattern.search(href):
            classes.append(class_name)

    try:
        path = urlparse(href).path
    except ValueError:
        path = ""
    segments = [s for s in path.split("/") if s]
    if len(segments) >= 2:
        dept_slug = slugify(segments[-2])
        if dept_slug:
            classes.append(f"dept-{dept_slug}")

    return classes


def list_classifier(html: str, context: dict) -> str:
    """
    Add semantic classes to list containers, lists and list items.

    Args:
        html: HTML string to process
        context: Rewrite context; uses 'section_name'

    Returns:
        Processed HTML with classified lists
    """
    section_name = context.get("section_name", "")
    soup = parse_fragment(html)

    seen_containers = set()

    for list_element in soup.find_all(["ul", "ol"]):
        container = list_element.parent
        if (
            isinstance(container, Tag)
            and container.name in LIST_CONTAINER_TAGS
            and id(container) not in seen_containers
        ):
            seen_containers.add(id(container))
            slug = _heading_slug(container)
            add_classes(
                container,
                [
                    f"{slug}-list" if slug else "general-list",
                    "course-list-container",
                    f"section-{section_name}",
                ],
            )

        slug = _heading_slug(list_element)
        add_classes(
            list_element,
            ["course-list", f"{slug}-ul" if slug else "general-ul"],
        )

    for li in soup.find_all("li"):
        link = li.find("a", href=True)
        if link is None:
            continue

        item_classes = []
        text_slug = slugify(link.get_text())
        if text_slug:
            item_classes.append(f"item-{text_slug}")
        item_classes.extend(classify_link_target(link["href"]))

        add_classes(li, item_classes)

    return serialize_fragment(soup)

# catalog/rendering/postprocessors/navigation_normalizer.py
"""
Postprocessor that makes in-page navigation unique across catalog sections.

Several sections of the same catalog page routinely reuse heading ids (every
tab has its own "requirements" heading, for example). This postprocessor:
- Rewrites each heading id to "<section>_section_<id>"
- Mirrors that id into a data-section-id attribute on the heading and on the
  nearest containing block
- Points navigation anchors at the rewritten id and binds them to the
  client-side scrollToSection() helper
"""

from typing import Dict, Optional

from bs4 import Tag

from .utils import (
    CONTAINER_TAGS,
    HEADING_TAGS,
    parse_fragment,
    serialize_fragment,
)

SECTION_ID_ATTRIBUTE = "data-section-id"
NAVIGATION_ID_ATTRIBUTE = "data-id"


def make_section_id(section_name: str, raw_id: str) -> str:
    """Qualify an upstream id with the section it belongs to."""
    return f"{section_name}_section_{raw_id}"


def _find_container(element: Tag) -> Optional[Tag]:
    """Walk up the parent chain to the nearest block container."""
    parent = element.parent
    while parent is not None:
        if isinstance(parent, Tag) and parent.name in CONTAINER_TAGS:
            return parent
        parent = parent.parent
    return None


def _scroll_binding(unique_id: str) -> str:
    js_id = unique_id.replace("\\", "\\\\").replace("'", "\\'")
    return f"scrollToSection('{js_id}'); return false;"


def navigation_normalizer(html: str, context: dict) -> str:
    """
    Namespace heading ids and navigation anchors by section.

    Args:
        html: HTML string to process
        context: Rewrite context; uses 'section_name'

    Returns:
        Processed HTML with section-qualified ids
    """
    section_name = context.get("section_name", "")
    soup = parse_fragment(html)

    # raw id -> unique id, for headings found in this fragment
    heading_ids: Dict[str, str] = {}

    for heading in soup.find_all(HEADING_TAGS):
        # Already normalized on an earlier run
        if heading.get(SECTION_ID_ATTRIBUTE):
            continue

        raw_id = (heading.get("id") or "").strip()
        if not raw_id:
            continue

        unique_id = make_section_id(section_name, raw_id)
        heading_ids[raw_id] = unique_id
        heading["id"] = unique_id
        heading[SECTION_ID_ATTRIBUTE] = unique_id

        container = _find_container(heading)
        if container is not None:
            container[SECTION_ID_ATTRIBUTE] = unique_id

    for anchor in soup.find_all("a"):
        raw_id = (anchor.get(NAVIGATION_ID_ATTRIBUTE) or "").strip()
        if raw_id:
            unique_id = make_section_id(section_name, raw_id)
        else:
            href = anchor.get("href", "")
            if not href.startswith("#") or href[1:] not in heading_ids:
                continue
            unique_id = heading_ids[href[1:]]

        anchor["href"] = f"#{unique_id}"
        anchor["onclick"] = _scroll_binding(unique_id)

    return serialize_fragment(soup)


def navigation_normalizer_default(html: str, context: dict) -> str:
    """
    Default configuration for navigation_normalizer.

    This is the function that should be registered in POSTPROCESSORS.
    """
    return navigation_normalizer(html, context)

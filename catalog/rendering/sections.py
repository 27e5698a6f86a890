"""
Discover and select the displayable sections of a catalog XML document.

Each top-level child of the catalog root is a section ("text",
"criticaltrackingtext", "modelsemesterplantext", ...) holding HTML as text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from lxml import etree

OVERVIEW_NODE = "text"
OVERVIEW_LABEL = "Overview"
SKIPPED_NODES = {"title"}


@dataclass(frozen=True)
class Section:
    node_name: str
    label: str
    raw_markup: str


def section_label(node_name: str, name_attribute: str | None = None) -> str:
    """Display label for a section node."""
    if node_name == OVERVIEW_NODE:
        return OVERVIEW_LABEL
    if name_attribute is not None:
        return name_attribute
    label = node_name.replace("_", " ")
    return label[:1].upper() + label[1:]


def _raw_markup(node: etree._Element) -> str:
    """HTML carried by a section node.

    Usually the HTML is escaped text or CDATA; some exports embed it as
    literal XHTML child elements instead.
    """
    markup = node.text or ""
    for child in node:
        markup += etree.tostring(child, encoding="unicode", with_tail=True)
    return markup


def discover_sections(root: etree._Element) -> Dict[str, Section]:
    """Map lowercase node name -> Section, in document order."""
    sections: Dict[str, Section] = {}

    for node in root:
        # Skip comments and processing instructions
        if not isinstance(node.tag, str):
            continue

        node_name = etree.QName(node).localname.lower()
        if node_name in SKIPPED_NODES:
            continue

        label = section_label(node_name, node.get("name"))
        if node_name in sections:
            # Repeated tags: first occurrence's markup, last occurrence's label
            sections[node_name] = Section(
                node_name, label, sections[node_name].raw_markup
            )
        else:
            sections[node_name] = Section(node_name, label, _raw_markup(node))

    return sections


def parse_tabs(tabs: str | None) -> List[str]:
    """Split a comma-separated tab list into trimmed, lowercase tokens."""
    tokens = [token.strip() for token in (tabs or "").lower().split(",")]
    return [token for token in tokens if token]


def select_sections(available: Dict[str, Section], tabs: str | None) -> List[Section]:
    """
    Resolve the caller's tab list against the discovered sections.

    A blank tab list selects everything in discovery order. Otherwise sections
    follow the caller's order; unknown and empty tokens are dropped and repeats
    collapse to their first position, so "," selects nothing.
    """
    if not (tabs or "").strip():
        return list(available.values())

    requested = parse_tabs(tabs)
    return [available[name] for name in dict.fromkeys(requested) if name in available]

# catalog/rendering/postprocessors/navigation_text_fixer.py
"""
Rewrite "tab" navigation copy to "page" copy.

The catalog authoring tool renders each section as a tab and labels its
navigation "On This Tab". Embedded as stacked sections, that copy is wrong.
"""

import re
from typing import List, Optional

from bs4 import NavigableString, Tag
from bs4.element import Comment

from .utils import get_classes, parse_fragment, serialize_fragment

TITLE_CLASSES = {"onthispage-title", "on-this-page-title", "otp-title"}

NAVIGATION_CLASSES = {"onthispage", "on-this-page", "tabs"}

# "nav"/"menu" starting a class name or one of its - or _ separated parts
NAVIGATION_MARKER_RE = re.compile(r"(?:^|[-_])(?:nav|menu)")

# Longest phrases first so "on this tab" is not rewritten as "on On This Page"
TAB_PHRASE_RE = re.compile(r"\b(?:on|in) this tab\b|\bthis tab\b", re.IGNORECASE)

REPLACEMENT_TEXT = "On This Page"

TITLE_HEADING_TAG = "h3"


def replace_tab_phrases(text: str) -> str:
    return TAB_PHRASE_RE.sub(REPLACEMENT_TEXT, text)


def _is_title(element: Tag) -> bool:
    return any(c in TITLE_CLASSES for c in get_classes(element))


def _is_navigation(element: Tag) -> bool:
    for c in get_classes(element):
        lowered = c.lower()
        if lowered in NAVIGATION_CLASSES or NAVIGATION_MARKER_RE.search(lowered):
            return True
    return False


def _find_ancestor(node, predicate) -> Optional[Tag]:
    parent = node.parent
    while parent is not None:
        if isinstance(parent, Tag) and predicate(parent):
            return parent
        parent = parent.parent
    return None


def navigation_text_fixer(
    html: str,
    context: dict,
    title_tag: str = TITLE_HEADING_TAG,
) -> str:
    """
    Replace "On This Tab" titles with headings and fix navigation text.

    Args:
        html: HTML string to process
        context: Rewrite context (not used currently)
        title_tag: Tag name for the replacement title heading

    Returns:
        Processed HTML with page-themed navigation copy
    """
    soup = parse_fragment(html)

    titles: List[Tag] = [el for el in soup.find_all(True) if _is_title(el)]
    for title in titles:
        # Nested titles are replaced along with their outermost title
        if _find_ancestor(title, _is_title) is not None:
            continue
        text = title.get_text()
        if not TAB_PHRASE_RE.search(text):
            continue

        heading = soup.new_tag(title_tag)
        heading.string = replace_tab_phrases(text.strip())
        classes = get_classes(title)
        if classes:
            heading["class"] = classes
        title.replace_with(heading)

    for string in list(soup.find_all(string=True)):
        if isinstance(string, Comment) or "tab" not in string.lower():
            continue
        if _find_ancestor(string, _is_title) is not None:
            continue
        if _find_ancestor(string, _is_navigation) is None:
            continue

        fixed = replace_tab_phrases(str(string))
        if fixed != string:
            string.replace_with(NavigableString(fixed))

    return serialize_fragment(soup)


def navigation_text_fixer_default(html: str, context: dict) -> str:
    """
    Default configuration for navigation_text_fixer.

    This is the function that should be registered in POSTPROCESSORS.
    """
    return navigation_text_fixer(html, context, title_tag=TITLE_HEADING_TAG)

# catalog/rendering/postprocessors/paragraph_pruner.py
"""
Remove introductory paragraphs from the Overview section on request.

Positions are 1-indexed and refer to the paragraphs as they appear before
any removal: removing [1, 3] from three paragraphs keeps the second one.
"""

import re
from typing import Iterable, Tuple

from .utils import parse_fragment

OVERVIEW_SECTION = "text"


def parse_paragraph_positions(value: str) -> Tuple[int, ...]:
    """
    Parse a comma-separated list of 1-indexed positions.

    Non-numeric, zero and negative tokens are discarded; duplicates keep their
    first position.
    """
    positions = []
    for token in (value or "").split(","):
        token = token.strip()
        if not re.fullmatch(r"[+]?\d+", token):
            continue
        position = int(token)
        if position > 0:
            positions.append(position)
    return tuple(dict.fromkeys(positions))


def paragraph_pruner(html: str, context: dict) -> str:
    """
    Remove paragraphs by position from the Overview ("text") section.

    Args:
        html: HTML string to process
        context: Rewrite context; uses 'section_name' and 'remove_paragraphs'

    Returns:
        Processed HTML without the requested paragraphs
    """
    positions: Iterable[int] = context.get("remove_paragraphs") or ()
    if context.get("section_name") != OVERVIEW_SECTION or not positions:
        return html

    soup = parse_fragment(html)
    paragraphs = soup.find_all("p")

    for position in positions:
        index = position - 1
        if 0 <= index < len(paragraphs) and paragraphs[index].parent is not None:
            paragraphs[index].extract()

    return "".join(str(child) for child in soup.contents)

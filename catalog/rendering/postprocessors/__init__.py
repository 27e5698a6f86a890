# catalog/rendering/postprocessors/__init__.py

import logging

from .link_hardener import link_hardener
from .list_classifier import list_classifier
from .navigation_normalizer import navigation_normalizer_default
from .navigation_text_fixer import navigation_text_fixer_default
from .paragraph_pruner import paragraph_pruner
from .sanitizer import sanitize_html
from .url_resolver import url_resolver

logger = logging.getLogger(__name__)

POSTPROCESSORS = [
    sanitize_html,  # Strip unsafe markup from the upstream export
    navigation_normalizer_default,  # Section-qualified heading ids and scroll bindings
    url_resolver,  # Root-relative URLs -> catalog origin
    list_classifier,  # Reads original headings, so runs before the text fixer
    navigation_text_fixer_default,  # "On This Tab" -> "On This Page"
    link_hardener,  # target="_blank" + rel on outbound links
    paragraph_pruner,  # Overview only, when paragraphs were requested removed
    # Order matters - they run sequentially, each on a fresh parse
]


def apply_postprocessors(html, context):
    """Apply all postprocessors in order"""
    for processor in POSTPROCESSORS:
        html = processor(html, context)
        logger.debug(
            f"{processor.__name__} done for section "
            f"'{context.get('section_name', '')}' ({len(html)} chars)"
        )
    return html

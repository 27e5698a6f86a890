"""
Course catalog rendering: XML export -> sanitized, navigable HTML fragment.
"""

from .loader import CatalogLoadError, load_catalog
from .renderer import render_catalog_document, render_course_catalog

__all__ = [
    'CatalogLoadError',
    'load_catalog',
    'render_catalog_document',
    'render_course_catalog',
]

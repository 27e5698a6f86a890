# catalog/rendering/postprocessors/sanitizer.py

import logging
from functools import lru_cache

import bleach
from bleach.css_sanitizer import CSSSanitizer
from django.utils.html import escape

logger = logging.getLogger(__name__)

ALLOWED_TAGS = frozenset(bleach.sanitizer.ALLOWED_TAGS).union(
    {
        # text
        "p",
        "br",
        "wbr",
        "div",
        "span",
        "section",
        "article",
        "aside",
        "main",
        "nav",
        "header",
        "footer",
        "cite",
        "mark",
        "ins",
        "del",
        "sup",
        "sub",
        "small",
        "u",
        "s",
        # headings
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        # lists
        "ul",
        "ol",
        "li",
        "hr",
        "blockquote",
        "dl",
        "dt",
        "dd",
        # tables (model semester plans are tables)
        "table",
        "thead",
        "tbody",
        "tfoot",
        "tr",
        "th",
        "td",
        "caption",
        "colgroup",
        "col",
        # media
        "img",
        "figure",
        "figcaption",
        "picture",
        "source",
        # links
        "a",
        # semantic
        "time",
        "address",
        "abbr",
    }
)

GLOBAL_ATTRIBUTES = {"class", "id", "title", "role", "style", "lang"}

TAG_ATTRIBUTES = {
    "a": {"href", "target", "rel", "name"},
    "img": {"src", "alt", "width", "height", "loading", "decoding"},
    "source": {"src", "srcset", "type", "media"},
    "th": {"colspan", "rowspan", "scope"},
    "td": {"colspan", "rowspan"},
    "col": {"span"},
    "colgroup": {"span"},
    "ol": {"start", "type", "reversed"},
    "li": {"value"},
    "time": {"datetime"},
    "blockquote": {"cite"},
}

ALLOWED_CSS_PROPERTIES = [
    "background-color",
    "background-image",
    "background-position",
    "background-repeat",
    "background-size",
    "border",
    "color",
    "display",
    "float",
    "font-size",
    "font-style",
    "font-weight",
    "height",
    "margin",
    "margin-bottom",
    "margin-left",
    "margin-right",
    "margin-top",
    "padding",
    "text-align",
    "vertical-align",
    "width",
]

ALLOWED_PROTOCOLS = ["http", "https", "mailto", "tel"]


def _allow_attribute(tag, name, value):
    """Attribute filter for bleach; data-* and aria-* are allowed everywhere."""
    if name in GLOBAL_ATTRIBUTES:
        return True
    if name.startswith(("data-", "aria-")):
        return True
    return name in TAG_ATTRIBUTES.get(tag, ())


@lru_cache(maxsize=1)
def _get_css_sanitizer():
    """Cache the CSS sanitizer, building it is not free."""
    return CSSSanitizer(allowed_css_properties=ALLOWED_CSS_PROPERTIES)


def sanitize_html(html, context):
    """
    Sanitize a catalog section's raw markup using bleach.
    This is the FIRST postprocessor: everything after it may add attributes
    (like the scroll bindings) that bleach would strip.
    """
    try:
        return bleach.clean(
            html or "",
            tags=ALLOWED_TAGS,
            attributes=_allow_attribute,
            protocols=ALLOWED_PROTOCOLS,
            css_sanitizer=_get_css_sanitizer(),
            strip=True,
            strip_comments=True,
        )
    except Exception as e:
        logger.error(
            f"Bleach sanitization failed for section "
            f"'{context.get('section_name', '')}': {e}",
            exc_info=True,
        )
        # Never hand back unsanitized markup
        return escape(html or "")

# catalog/rendering/renderer.py

import logging

from django.utils.html import format_html

from .config import get_catalog_config
from .loader import CatalogLoadError, load_catalog
from .postprocessors import apply_postprocessors
from .postprocessors.paragraph_pruner import OVERVIEW_SECTION, parse_paragraph_positions
from .postprocessors.sanitizer import sanitize_html
from .postprocessors.url_resolver import get_base_origin
from .sections import discover_sections, select_sections

logger = logging.getLogger(__name__)

NO_URL_MESSAGE = "No XML URL provided."
LOAD_FAILED_MESSAGE = "Failed to load the XML file. Please check the URL."
PARSE_ERROR_MESSAGE = "Error parsing the XML: {}"


def error_fragment(message):
    """Inline error shown in place of the catalog."""
    return str(format_html('<p style="color:red;">{}</p>', message))


def render_section(section, source_url, remove_paragraphs=()):
    """
    Run one section's markup through the postprocessor pipeline.

    Markup the parser rejects outright falls back to the sanitized markup, so
    one broken section never takes the rest of the catalog down with it.
    """
    context = {
        "section_name": section.node_name,
        "source_url": source_url,
        "base_origin": get_base_origin(source_url),
        "remove_paragraphs": (
            remove_paragraphs if section.node_name == OVERVIEW_SECTION else ()
        ),
    }

    try:
        return apply_postprocessors(section.raw_markup, context)
    except Exception:
        logger.exception(
            f"Postprocessing failed for section '{section.node_name}', "
            f"rendering sanitized markup only"
        )
        return sanitize_html(section.raw_markup, context)


def render_catalog_document(root, source_url, tabs="", remove_paragraph=""):
    """
    Render the selected sections of an already parsed catalog document.

    Args:
        root: Parsed catalog XML root element
        source_url: URL the XML came from, used to resolve relative links
        tabs: Comma-separated section names; empty renders every section
        remove_paragraph: Comma-separated 1-indexed Overview paragraphs to drop
    """
    config = get_catalog_config()
    sections = select_sections(discover_sections(root), tabs)
    remove_paragraphs = parse_paragraph_positions(remove_paragraph)

    heading_tag = config["SECTION_HEADING_TAG"]
    output = [format_html('<div class="{}">', config["CONTAINER_CLASS"])]

    for section in sections:
        section_html = render_section(section, source_url, remove_paragraphs)
        output.append(format_html("<{0}>{1}</{0}>", heading_tag, section.label))
        output.append(format_html('<div class="{}">', config["SECTION_CLASS"]))
        output.append(section_html)
        output.append("</div>")

    output.append("</div>")
    return "".join(str(part) for part in output)


def render_course_catalog(url, tabs="", remove_paragraph=""):
    """
    Main rendering function: fetch the catalog XML and render its sections.

    Always returns renderable HTML; failures become an inline error message.

    Args:
        url: URL (or path) of the catalog XML
        tabs: Comma-separated section names; empty renders every section
        remove_paragraph: Comma-separated 1-indexed Overview paragraphs to drop
    """
    url = (url or "").strip()
    if not url:
        return error_fragment(NO_URL_MESSAGE)

    try:
        root = load_catalog(url)
    except CatalogLoadError as e:
        logger.warning(f"Failed to load catalog XML: {e}")
        return error_fragment(LOAD_FAILED_MESSAGE)

    try:
        return render_catalog_document(root, url, tabs, remove_paragraph)
    except Exception as e:
        logger.exception(f"Catalog rendering failed for {url}")
        return error_fragment(PARSE_ERROR_MESSAGE.format(e))

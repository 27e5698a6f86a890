# catalog/templatetags/course_catalog_tags.py

from django import template
from django.templatetags.static import static
from django.utils.html import format_html
from django.utils.safestring import mark_safe

from catalog.rendering.renderer import render_course_catalog

register = template.Library()

"""
Django template tags for embedding course catalog XML exports.

Usage in templates:
1. Load the tags: {% load course_catalog_tags %}

2. Include the scroll helper once per page: {% course_catalog_script %}

3. Render the catalog:
   {% display_courses url="https://catalog.example.edu/programs/x/index.xml" %}
   {% display_courses url=page.catalog_url tabs="text,criticaltrackingtext" remove_paragraph="1,2" %}

"""


@register.simple_tag
def display_courses(url="", tabs="", remove_paragraph=""):
    """
    Render catalog sections from an XML export.

    tabs: comma-separated section names (e.g. "text" for the Overview,
    "modelsemesterplantext"); all sections when empty.
    remove_paragraph: comma-separated 1-indexed Overview paragraphs to drop.
    """
    # Section markup is sanitized by the pipeline, error messages are escaped
    return mark_safe(
        render_course_catalog(
            str(url or ""), str(tabs or ""), str(remove_paragraph or "")
        )
    )


@register.simple_tag
def course_catalog_script():
    """Script tag for the scrollToSection() helper used by section navigation."""
    return format_html(
        '<script src="{}" defer></script>', static("catalog/js/course_catalog.js")
    )

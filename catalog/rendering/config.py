from django.conf import settings

DEFAULT_CATALOG_CONFIG = {
    "FETCH_TIMEOUT": 30.0,
    "USER_AGENT": "course-catalog-display/1.0",
    "CONTAINER_CLASS": "course-catalog",
    "SECTION_CLASS": "course-section",
    "SECTION_HEADING_TAG": "h2",
}


def get_catalog_config():
    """
    Configuration for catalog rendering.

    Reads the optional COURSE_CATALOG dict from Django settings and fills in
    defaults for missing keys. Works without configured settings too, so the
    pipeline can be used outside a Django project.
    """
    overrides = {}
    if settings.configured:
        overrides = getattr(settings, "COURSE_CATALOG", None) or {}

    config = dict(DEFAULT_CATALOG_CONFIG)
    config.update(overrides)
    return config

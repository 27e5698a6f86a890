import django
import pytest
from django.conf import settings

SAMPLE_CATALOG_URL = "https://catalog.example.edu/programs/biology/index.xml"

SAMPLE_CATALOG_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<page>
  <title>Biology | Undergraduate Catalog</title>
  <text name="Ignored For Overview"><![CDATA[
<p>Intro one.</p><p>Intro two.</p>
<div class="block"><h2 id="about">About the Major</h2><p>Details.</p></div>
]]></text>
  <criticaltrackingtext name="Critical Tracking"><![CDATA[
<div class="onthispage"><p class="onthispage-title">On This Tab</p>
<ul><li><a href="#about" data-id="about">About</a></li></ul></div>
<div class="block"><h2 id="about">Tracking Courses</h2>
<ul><li><a href="/programs/biology/biology_BS/">Biology, B.S.</a></li></ul>
<p style="background-image: url('/images/banner.png')">Banner</p>
<p><a href="https://www.example.org/advising">Advising</a></p>
</div>
]]></criticaltrackingtext>
  <!-- generated by the catalog export -->
  <model_semester_plan><![CDATA[<p>Semester 1</p><script>alert(1)</script>]]></model_semester_plan>
</page>
"""


def pytest_configure():
    if not settings.configured:
        settings.configure(
            INSTALLED_APPS=[
                "django.contrib.staticfiles",
                "catalog",
            ],
            TEMPLATES=[
                {
                    "BACKEND": "django.template.backends.django.DjangoTemplates",
                    "APP_DIRS": True,
                }
            ],
            STATIC_URL="/static/",
            USE_TZ=True,
        )
        django.setup()


@pytest.fixture
def sample_xml() -> bytes:
    return SAMPLE_CATALOG_XML


@pytest.fixture
def fake_fetch(monkeypatch):
    """Serve catalog XML without touching the network.

    Returns a dict mapping URL -> bytes; unknown URLs fail to load.
    """
    from catalog.rendering.loader import CatalogLoadError

    responses = {SAMPLE_CATALOG_URL: SAMPLE_CATALOG_XML}

    def fetch(url):
        if url not in responses:
            raise CatalogLoadError(f"Could not fetch {url}")
        return responses[url]

    monkeypatch.setattr("catalog.rendering.loader.fetch_catalog_xml", fetch)
    return responses


@pytest.fixture
def settings_override():
    """Apply django.test.override_settings for the rest of the test."""
    from django.test import override_settings

    applied = []

    def apply(**kwargs):
        override = override_settings(**kwargs)
        override.enable()
        applied.append(override)

    yield apply

    for override in reversed(applied):
        override.disable()

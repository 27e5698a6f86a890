"""Tests for catalog section discovery and tab selection."""

import pytest
from lxml import etree

from catalog.rendering.sections import (
    Section,
    discover_sections,
    parse_tabs,
    section_label,
    select_sections,
)


@pytest.fixture
def root(sample_xml):
    return etree.fromstring(sample_xml)


class TestDiscoverSections:
    def test_title_is_never_a_section(self, root):
        sections = discover_sections(root)
        assert "title" not in sections

    def test_sections_in_document_order(self, root):
        sections = discover_sections(root)
        assert list(sections) == ["text", "criticaltrackingtext", "model_semester_plan"]

    def test_labels(self, root):
        sections = discover_sections(root)
        assert sections["text"].label == "Overview"
        assert sections["criticaltrackingtext"].label == "Critical Tracking"
        assert sections["model_semester_plan"].label == "Model semester plan"

    def test_raw_markup_from_cdata(self, root):
        sections = discover_sections(root)
        assert "<p>Intro one.</p>" in sections["text"].raw_markup

    def test_escaped_markup(self):
        root = etree.fromstring(
            b"<page><text>&lt;p&gt;A&lt;/p&gt;&lt;p&gt;B&lt;/p&gt;</text></page>"
        )
        assert discover_sections(root)["text"].raw_markup == "<p>A</p><p>B</p>"

    def test_literal_child_elements(self):
        root = etree.fromstring(b"<page><text>Lead <p>A</p> tail</text></page>")
        assert discover_sections(root)["text"].raw_markup == "Lead <p>A</p> tail"

    def test_uppercase_tag_names_are_lowercased(self):
        root = etree.fromstring(b"<page><TITLE>x</TITLE><ReqText>y</ReqText></page>")
        sections = discover_sections(root)
        assert list(sections) == ["reqtext"]
        assert sections["reqtext"].label == "Reqtext"

    def test_repeated_tag_keeps_first_markup(self):
        root = etree.fromstring(
            b'<page><extra name="One">first</extra><extra name="Two">second</extra></page>'
        )
        sections = discover_sections(root)
        assert sections["extra"] == Section("extra", "Two", "first")


class TestSectionLabel:
    def test_overview_ignores_name_attribute(self):
        assert section_label("text", "Something Else") == "Overview"

    def test_empty_name_attribute_is_used(self):
        assert section_label("foo", "") == ""

    def test_only_first_letter_capitalized(self):
        assert section_label("concentration_courses_text") == "Concentration courses text"


class TestSelectSections:
    @pytest.fixture
    def available(self, root):
        return discover_sections(root)

    @pytest.mark.parametrize("tabs", ["", "   ", None])
    def test_empty_selects_everything_in_discovery_order(self, available, tabs):
        selected = select_sections(available, tabs)
        assert [s.node_name for s in selected] == list(available)

    def test_caller_order_is_kept(self, available):
        selected = select_sections(available, " criticaltrackingtext , TEXT ")
        assert [s.node_name for s in selected] == ["criticaltrackingtext", "text"]

    def test_unknown_tokens_are_dropped(self, available):
        selected = select_sections(available, "nope,text,title,also-nope")
        assert [s.node_name for s in selected] == ["text"]

    def test_only_unknown_tokens_selects_nothing(self, available):
        assert select_sections(available, "nope") == []

    @pytest.mark.parametrize("tabs", [",", " , ,"])
    def test_only_separators_selects_nothing(self, available, tabs):
        assert select_sections(available, tabs) == []

    def test_repeated_tokens_render_once(self, available):
        selected = select_sections(available, "text,text")
        assert [s.node_name for s in selected] == ["text"]


def test_parse_tabs():
    assert parse_tabs(" Text, ,CriticalTrackingText ") == ["text", "criticaltrackingtext"]

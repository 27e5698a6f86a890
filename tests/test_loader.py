"""Tests for catalog XML retrieval and parsing."""

from pathlib import Path

import httpx
import pytest

from catalog.rendering.loader import (
    CatalogLoadError,
    fetch_catalog_xml,
    load_catalog,
    parse_catalog_xml,
)


class TestParseCatalogXml:
    def test_valid_xml(self, sample_xml):
        root = parse_catalog_xml(sample_xml)
        assert root.tag == "page"

    @pytest.mark.parametrize("content", [b"", b"   \n", b"<page><text></page>", b"not xml"])
    def test_invalid_xml_raises(self, content):
        with pytest.raises(CatalogLoadError):
            parse_catalog_xml(content)

    def test_external_entities_are_not_resolved(self, tmp_path: Path):
        secret = tmp_path / "secret.txt"
        secret.write_text("top secret")
        content = (
            f'<?xml version="1.0"?><!DOCTYPE page [<!ENTITY x SYSTEM "{secret.as_uri()}">]>'
            "<page><text>&x;</text></page>"
        ).encode()
        root = parse_catalog_xml(content)
        assert "top secret" not in (root.findtext("text") or "")


class TestFetchCatalogXml:
    def test_reads_local_path(self, tmp_path: Path, sample_xml):
        path = tmp_path / "index.xml"
        path.write_bytes(sample_xml)
        assert fetch_catalog_xml(str(path)) == sample_xml

    def test_reads_file_url(self, tmp_path: Path, sample_xml):
        path = tmp_path / "index.xml"
        path.write_bytes(sample_xml)
        assert fetch_catalog_xml(path.as_uri()) == sample_xml

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(CatalogLoadError):
            fetch_catalog_xml(str(tmp_path / "missing.xml"))

    def test_unsupported_scheme_raises(self):
        with pytest.raises(CatalogLoadError, match="Unsupported URL scheme"):
            fetch_catalog_xml("ftp://catalog.example.edu/index.xml")

    def test_http_fetch(self, monkeypatch, sample_xml):
        calls = []

        def fake_get(url, **kwargs):
            calls.append((url, kwargs))
            return httpx.Response(200, content=sample_xml, request=httpx.Request("GET", url))

        monkeypatch.setattr(httpx, "get", fake_get)

        url = "https://catalog.example.edu/programs/biology/index.xml"
        assert fetch_catalog_xml(url) == sample_xml

        assert calls[0][0] == url
        assert calls[0][1]["follow_redirects"] is True
        assert calls[0][1]["timeout"] == 30.0
        assert "User-Agent" in calls[0][1]["headers"]

    def test_http_error_status_raises(self, monkeypatch):
        def fake_get(url, **kwargs):
            return httpx.Response(404, request=httpx.Request("GET", url))

        monkeypatch.setattr(httpx, "get", fake_get)

        with pytest.raises(CatalogLoadError):
            fetch_catalog_xml("https://catalog.example.edu/missing/index.xml")

    def test_connection_error_raises(self, monkeypatch):
        def fake_get(url, **kwargs):
            raise httpx.ConnectError("connection refused")

        monkeypatch.setattr(httpx, "get", fake_get)

        with pytest.raises(CatalogLoadError):
            fetch_catalog_xml("https://catalog.example.edu/index.xml")

    def test_timeout_comes_from_settings(self, monkeypatch, settings_override, sample_xml):
        seen = {}

        def fake_get(url, **kwargs):
            seen.update(kwargs)
            return httpx.Response(200, content=sample_xml, request=httpx.Request("GET", url))

        monkeypatch.setattr(httpx, "get", fake_get)
        settings_override(COURSE_CATALOG={"FETCH_TIMEOUT": 5})

        fetch_catalog_xml("https://catalog.example.edu/index.xml")
        assert seen["timeout"] == 5


def test_load_catalog(tmp_path: Path, sample_xml):
    path = tmp_path / "index.xml"
    path.write_bytes(sample_xml)
    root = load_catalog(str(path))
    assert root.findtext("title") == "Biology | Undergraduate Catalog"

"""
URL List Tests

Exercises reading the URL list, order-preserving deduplication, resolution
of relative entries against the base domain, and request-URI validation.

Usage:
    pytest tests/test_urls.py
"""

import logging

import pytest

from batchpdf.exceptions import UrlParseError
from batchpdf.utils.urls import (
    get_domain_from_url,
    is_url_valid,
    read_url_list,
    remove_duplicates,
    resolve_url,
)


def test_read_url_list_keeps_blank_lines(tmp_path) -> None:
    source = tmp_path / "urls.txt"
    source.write_bytes(b"https://a.test/1.pdf\n\n/b/2.pdf\r\n/c/3.pdf")
    assert read_url_list(source) == ["https://a.test/1.pdf", "", "/b/2.pdf", "/c/3.pdf"]


def test_read_url_list_drops_byte_order_mark(tmp_path) -> None:
    source = tmp_path / "urls.txt"
    source.write_bytes("\ufeff/a/1.pdf\n/b/2.pdf\n".encode("utf-8"))
    assert read_url_list(source) == ["/a/1.pdf", "/b/2.pdf"]


def test_read_url_list_missing_file_is_not_fatal(tmp_path, caplog) -> None:
    with caplog.at_level(logging.ERROR):
        assert read_url_list(tmp_path / "missing.txt") == []
    assert "Could not read URL list" in caplog.text


def test_read_url_list_undecodable_file(tmp_path, caplog) -> None:
    source = tmp_path / "urls.txt"
    source.write_bytes(b"/ok.pdf\n\xff\xfe\xfa\n")
    with caplog.at_level(logging.ERROR):
        urls = read_url_list(source)
    assert urls in ([], ["/ok.pdf"])
    assert "Could not read URL list" in caplog.text


def test_remove_duplicates_preserves_first_occurrence() -> None:
    assert remove_duplicates(["a", "b", "a", "c", "b"]) == ["a", "b", "c"]


def test_remove_duplicates_is_exact_match() -> None:
    entries = ["/x.pdf", "/x.pdf/", "/X.pdf", "/x.pdf"]
    assert remove_duplicates(entries) == ["/x.pdf", "/x.pdf/", "/X.pdf"]


def test_get_domain_from_url() -> None:
    assert get_domain_from_url("https://Example.com/a.pdf") == "example.com"
    assert get_domain_from_url("/docs/file.pdf") == ""
    assert get_domain_from_url("") == ""


def test_resolve_relative_url() -> None:
    assert (
        resolve_url("/docs/file.pdf", "https://example.com")
        == "https://example.com/docs/file.pdf"
    )


def test_resolve_relative_url_without_leading_slash() -> None:
    assert (
        resolve_url("docs/file.pdf", "https://example.com/")
        == "https://example.com/docs/file.pdf"
    )


def test_resolve_absolute_url_unchanged() -> None:
    url = "https://other.test/x/doc.ZIP?v=1"
    assert resolve_url(url, "https://example.com") == url


def test_resolve_malformed_url_is_not_treated_as_relative() -> None:
    with pytest.raises(UrlParseError):
        resolve_url("http://[::1/file.pdf", "https://example.com")


@pytest.mark.parametrize(
    "url",
    [
        "https://example.com/a.pdf",
        "http://example.com:8080/a.pdf?x=1",
        "/docs/a.pdf",
        "/docs/Annual%20Report.pdf",
        "mailto:someone@example.com",
    ],
)
def test_is_url_valid(url: str) -> None:
    assert is_url_valid(url)


@pytest.mark.parametrize(
    "url",
    [
        "",
        "docs/a.pdf",
        "http://[::1/a.pdf",
        "https://example.com:abc/a.pdf",
        "https://example.com/a\nb.pdf",
        "https://example.com/a\x7f.pdf",
        "https://example.com/%zz.pdf",
        "/%%%",
        "/docs/a%2",
    ],
)
def test_is_url_invalid(url: str) -> None:
    assert not is_url_valid(url)

"""
Filename Sanitization Tests

Covers the URL-to-filename routine: extension handling, removal of the
redundant `_pdf` / `_zip` fragments, rejection of empty names and stability
when a result is fed back in.

Usage:
    pytest tests/test_path.py
"""

import pytest

from batchpdf.exceptions import InvalidFilenameError
from batchpdf.utils.path import (
    create_dir,
    file_exists,
    get_file_extension,
    get_file_name_only,
    url_to_filename,
)


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://site.test/a/Report.PDF", "report.pdf"),
        ("https://other.test/x/doc.ZIP?v=1", "doc.zip"),
        ("https://site.test/files/Annual Report 2023 (final).pdf", "annual_report_2023_final.pdf"),
        ("https://site.test/my_pdf_guide.pdf", "my_guide.pdf"),
        ("https://site.test/__init__.pdf", "init.pdf"),
        ("https://site.test/docs/", "docs"),
        ("https://site.test/.pdf", "pdf.pdf"),
        ("https://site.test/a/b.pdf#page=2", "b.pdf"),
        ("/relative/Only-Path.pdf", "only_path.pdf"),
    ],
)
def test_url_to_filename(url: str, expected: str) -> None:
    assert url_to_filename(url) == expected


def test_url_to_filename_ignores_host_and_query() -> None:
    a = url_to_filename("https://one.test/x/file.pdf?token=abc")
    b = url_to_filename("http://two.test/y/FILE.pdf")
    assert a == b == "file.pdf"


@pytest.mark.parametrize(
    "url",
    [
        "https://site.test/",
        "https://site.test",
        "https://site.test/!!!",
        "https://site.test/%%%/",
    ],
)
def test_url_to_filename_rejects_empty_stem(url: str) -> None:
    with pytest.raises(InvalidFilenameError):
        url_to_filename(url)


@pytest.mark.parametrize(
    "url",
    [
        "https://site.test/a/Report.PDF",
        "https://other.test/x/doc.ZIP?v=1",
        "https://site.test/files/Annual Report 2023 (final).pdf",
        "https://site.test/my_pdf_guide.pdf",
        "https://site.test/.pdf",
        "https://site.test/docs/",
    ],
)
def test_url_to_filename_is_stable(url: str) -> None:
    once = url_to_filename(url)
    assert url_to_filename(once) == once
    assert url_to_filename(url) == once


def test_output_is_lowercase_and_safe() -> None:
    name = url_to_filename("https://site.test/Ünïcode File (v2)!.PDF")
    assert name == name.lower()
    stem = name[: -len(".pdf")]
    assert all(c.isascii() and (c.isalnum() or c == "_") for c in stem)


def test_get_file_extension() -> None:
    assert get_file_extension("/a/b.tar.gz") == ".gz"
    assert get_file_extension("/a.d/b") == ""
    assert get_file_extension("/a/b/") == ""


def test_get_file_name_only() -> None:
    assert get_file_name_only("/a/b.pdf") == "b.pdf"
    assert get_file_name_only("/a/b/") == "b"
    assert get_file_name_only("") == ""


def test_create_dir_and_file_exists(tmp_path) -> None:
    target = tmp_path / "nested" / "PDFs"
    create_dir(target)
    create_dir(target)
    assert target.is_dir()
    assert not file_exists(target)

    document = target / "doc.pdf"
    assert not file_exists(document)
    document.write_bytes(b"%PDF")
    assert file_exists(document)


def test_file_exists_treats_unstattable_path_as_missing(tmp_path) -> None:
    assert not file_exists(tmp_path / ("a" * 300 + ".pdf"))

"""
Reading, deduplicating, resolving and validating the list of source URLs.
"""

import logging
import re
from pathlib import Path
from typing import Iterable
from urllib.parse import urlsplit

from batchpdf.exceptions import UrlParseError

log = logging.getLogger(__name__)

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def read_url_list(path: str | Path) -> list[str]:
    """
    Reads a newline-delimited list of URLs.

    Blank lines are kept as empty strings and a leading byte order mark is
    dropped. If the file is missing or cannot be decoded, the error is logged
    and whatever was read so far is returned.
    """
    urls: list[str] = []
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            for line in f:
                urls.append(line.rstrip("\r\n"))
    except (OSError, UnicodeDecodeError) as e:
        log.error(f"[red]Could not read URL list {path}: {e}[/red]")
    return urls


def remove_duplicates(entries: Iterable[str]) -> list[str]:
    """Removes exact duplicates while preserving the order of first occurrence."""
    return list(dict.fromkeys(entries))


def get_domain_from_url(raw_url: str) -> str:
    """
    Extracts the hostname from a URL, or an empty string for a relative path.

    Raises:
        UrlParseError: If the string cannot be parsed as a URL.
    """
    try:
        return urlsplit(raw_url).hostname or ""
    except ValueError as e:
        log.debug(f"Failed to parse URL '{raw_url}': {e}")
        raise UrlParseError(f"Malformed URL '{raw_url}': {e}") from e


def resolve_url(raw_url: str, base_domain: str) -> str:
    """
    Turns a relative entry into an absolute URL on the base domain.
    Absolute URLs are returned unchanged.
    """
    if get_domain_from_url(raw_url):
        return raw_url
    if not raw_url.startswith("/"):
        raw_url = "/" + raw_url
    return base_domain.rstrip("/") + raw_url


def is_url_valid(uri: str) -> bool:
    """
    Checks that a string is syntactically usable as a request URI: either an
    absolute URL with a scheme or an absolute path, with every '%' starting a
    two-digit hex escape. Reachability is not checked.
    """
    if not uri or _CONTROL_CHARS.search(uri) or _BAD_ESCAPE.search(uri):
        return False
    try:
        parts = urlsplit(uri)
        # Accessing the port validates it.
        parts.port  # noqa: B018
    except ValueError:
        return False
    if not parts.scheme and not uri.startswith("/"):
        return False
    return True

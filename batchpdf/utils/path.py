"""
Utilities for handling file paths and deriving safe filenames from URLs.
"""

import posixpath
import re
from pathlib import Path
from urllib.parse import urlsplit

from batchpdf.exceptions import InvalidFilenameError

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")
_REPEATED_UNDERSCORES = re.compile(r"_+")

# Leftovers of the extension once the dot has been replaced.
REDUNDANT_SUBSTRINGS = ("_pdf", "_zip")


def get_file_extension(url_path: str) -> str:
    """
    Returns the extension of the last path segment, including the leading dot
    (e.g. '.pdf'), or an empty string if the segment has no dot.
    """
    segment = url_path.rsplit("/", 1)[-1]
    dot = segment.rfind(".")
    return segment[dot:] if dot >= 0 else ""


def get_file_name_only(url_path: str) -> str:
    """Returns the last segment of a slash-separated path, ignoring trailing slashes."""
    return posixpath.basename(url_path.rstrip("/"))


def url_to_filename(url: str) -> str:
    """
    Converts a URL into a lowercase, filesystem-safe filename.

    The name is built from the final path segment only, so the scheme, host,
    query string and fragment never leave a trace in it. Every run of
    characters outside [a-z0-9] becomes a single underscore, a leading
    underscore is dropped, the redundant '_pdf' / '_zip' fragments are removed
    and the original extension is appended again.

    Raises:
        InvalidFilenameError: If the URL cannot be parsed or nothing is left of
            the name once it has been cleaned.
    """
    lowercase_url = url.lower()
    try:
        url_path = urlsplit(lowercase_url).path
    except ValueError as e:
        raise InvalidFilenameError(f"Cannot parse '{url}': {e}") from e

    ext = get_file_extension(url_path)
    base_filename = get_file_name_only(url_path)

    safe_filename = _NON_ALPHANUMERIC.sub("_", base_filename)
    safe_filename = _REPEATED_UNDERSCORES.sub("_", safe_filename)
    safe_filename = safe_filename.removeprefix("_")

    for redundant in REDUNDANT_SUBSTRINGS:
        safe_filename = safe_filename.replace(redundant, "")

    if not safe_filename:
        raise InvalidFilenameError(f"No usable filename in '{url}'")

    return safe_filename + ext


def create_dir(directory_path: Path) -> None:
    """Creates a directory if it does not already exist."""
    directory_path.mkdir(parents=True, exist_ok=True)


def file_exists(file_path: Path) -> bool:
    """
    Checks if a path exists and is not a directory.

    A path the filesystem refuses to stat (for example a name that is too long)
    counts as missing; creating the file later reports the real error.
    """
    try:
        return file_path.exists() and not file_path.is_dir()
    except OSError:
        return False

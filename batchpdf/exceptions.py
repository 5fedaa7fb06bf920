"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class BatchPdfError(Exception):
    """Base exception for all application-specific errors."""


class ConfigurationError(BatchPdfError):
    """Raised for issues related to configuration loading or validation."""


class UrlParseError(BatchPdfError):
    """Raised when a URL entry cannot be parsed at all."""


class InvalidFilenameError(BatchPdfError):
    """Raised when no usable filename can be derived from a URL."""


class DownloadError(BatchPdfError):
    """Base class for failures while fetching or saving a single document."""


class HTTPStatusError(DownloadError):
    """Raised when the server answers with anything other than 200 OK."""

    def __init__(self, status: int, reason: str | None = None):
        self.status = status
        self.reason = reason or ""
        super().__init__(f"HTTP {status} {self.reason}".strip())


class InvalidContentTypeError(DownloadError):
    """Raised when the response is not declared as application/pdf."""

    def __init__(self, content_type: str):
        self.content_type = content_type
        super().__init__(
            f"invalid content type '{content_type}' (expected application/pdf)"
        )


class EmptyResponseError(DownloadError):
    """Raised when the response body is zero bytes long."""


class FileWriteError(DownloadError):
    """Raised when the downloaded body cannot be written to disk."""

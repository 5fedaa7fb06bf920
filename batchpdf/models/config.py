"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_INPUT_PATH = "valid_pdf.txt"
DEFAULT_OUTPUT_DIR = "PDFs"
DEFAULT_BASE_DOMAIN = "https://www.klnsh-usaueber.com"
DEFAULT_REQUEST_TIMEOUT = 180.0  # 3 minutes


class DownloadConfig(BaseModel):
    """A validated configuration model for the application."""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    # Sources and destinations
    input_path: str = DEFAULT_INPUT_PATH
    output_dir: str = DEFAULT_OUTPUT_DIR
    base_domain: str = DEFAULT_BASE_DOMAIN

    # Download Settings
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    max_workers: int = 1
    dry_run: bool = False

    # Internal fields not loaded from INI file
    config_path: str | None = Field(default=None, repr=False)

    @field_validator("input_path", "output_dir")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Ensures file and directory settings are not blank."""
        if not v:
            raise ValueError("Path settings cannot be empty.")
        return v

    @field_validator("base_domain")
    @classmethod
    def validate_base_domain(cls, v: str) -> str:
        """
        Ensures the base domain is an absolute http(s) URL and strips any trailing
        slash so relative paths can be appended directly.
        """
        try:
            parts = urlsplit(v)
        except ValueError as e:
            raise ValueError(f"Base domain is not a valid URL: {e}") from e
        if parts.scheme not in ("http", "https") or not parts.hostname:
            raise ValueError(
                "Base domain must be an absolute http(s) URL, "
                f"e.g. 'https://example.com' (got '{v}')."
            )
        return v.rstrip("/")

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Ensures the per-request timeout is positive and below an hour."""
        if v <= 0 or v > 3600:
            raise ValueError("Request timeout must be between 0 and 3600 seconds.")
        return v

    @field_validator("max_workers")
    @classmethod
    def validate_workers(cls, v: int) -> int:
        """Ensures a reasonable number of workers."""
        if v < 1 or v > 32:
            raise ValueError("Max workers must be between 1 and 32.")
        return v

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        internal_fields = {"config_path", "dry_run"}
        return {key for key in cls.model_fields if key not in internal_fields}

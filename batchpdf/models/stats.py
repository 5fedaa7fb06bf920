"""
Models for tracking the outcome of each download and the session as a whole.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class DownloadOutcome(Enum):
    """What happened to a single URL entry."""

    DOWNLOADED = "downloaded"
    SKIPPED_EXISTS = "skipped_exists"
    SKIPPED_INVALID = "skipped_invalid"
    FAILED = "failed"
    DRY_RUN = "dry_run"


@dataclass
class DownloadResult:
    """The result of processing one URL."""

    url: str
    outcome: DownloadOutcome
    path: Path | None = None
    bytes_written: int = 0
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome is DownloadOutcome.DOWNLOADED


@dataclass
class DownloadStats:
    """Tracks statistics for a download session."""

    urls_read: int = 0
    duplicates_removed: int = 0
    downloaded: int = 0
    skipped_exists: int = 0
    skipped_invalid: int = 0
    failed: int = 0
    would_download: int = 0
    total_size_downloaded: int = 0
    dry_run: bool = False
    results: list[DownloadResult] = field(default_factory=list, repr=False)

    def record(self, result: DownloadResult) -> None:
        """Adds a single result to the running totals."""
        self.results.append(result)
        if result.outcome is DownloadOutcome.DOWNLOADED:
            self.downloaded += 1
            self.total_size_downloaded += result.bytes_written
        elif result.outcome is DownloadOutcome.SKIPPED_EXISTS:
            self.skipped_exists += 1
        elif result.outcome is DownloadOutcome.SKIPPED_INVALID:
            self.skipped_invalid += 1
        elif result.outcome is DownloadOutcome.DRY_RUN:
            self.would_download += 1
        else:
            self.failed += 1

    @property
    def processed(self) -> int:
        return (
            self.downloaded
            + self.skipped_exists
            + self.skipped_invalid
            + self.failed
            + self.would_download
        )

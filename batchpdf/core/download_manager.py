"""
The main orchestrator: reads the URL list, cleans it up and runs every entry
through resolution, validation and download.
"""

import asyncio
import logging
import time
from collections import OrderedDict
from pathlib import Path

from rich.markup import escape

from batchpdf.exceptions import ConfigurationError, InvalidFilenameError, UrlParseError
from batchpdf.media import Downloader
from batchpdf.models.config import DownloadConfig
from batchpdf.models.stats import DownloadOutcome, DownloadResult, DownloadStats
from batchpdf.utils.path import create_dir, file_exists, url_to_filename
from batchpdf.utils.urls import (
    is_url_valid,
    read_url_list,
    remove_duplicates,
    resolve_url,
)

log = logging.getLogger(__name__)


class DownloadManager:
    """Orchestrates the entire download session."""

    def __init__(self, config: DownloadConfig, downloader: Downloader | None = None):
        self.config = config
        self.output_dir = Path(config.output_dir)
        self.downloader = downloader or Downloader(
            request_timeout=config.request_timeout, max_workers=config.max_workers
        )
        self.stats = DownloadStats(dry_run=config.dry_run)
        self.start_time = time.monotonic()
        self.semaphore = asyncio.Semaphore(config.max_workers)
        self._file_locks: OrderedDict[str, asyncio.Lock] = OrderedDict()
        self._max_locks = 1000
        self._file_locks_main = asyncio.Lock()

    async def _get_file_lock(self, filename: str) -> asyncio.Lock:
        """
        Gets or creates the lock guarding a target filename, so two URLs that
        sanitize to the same name are never written at the same time.
        """
        async with self._file_locks_main:
            if filename in self._file_locks:
                self._file_locks.move_to_end(filename)
                return self._file_locks[filename]

            lock = asyncio.Lock()
            self._file_locks[filename] = lock
            if len(self._file_locks) > self._max_locks:
                oldest, oldest_lock = next(iter(self._file_locks.items()))
                if not oldest_lock.locked():
                    del self._file_locks[oldest]
            return lock

    async def execute_downloads(self) -> DownloadStats:
        """Processes every URL from the input file and returns the session stats."""
        if not self.config.dry_run:
            try:
                create_dir(self.output_dir)
            except OSError as e:
                raise ConfigurationError(
                    f"Could not create output directory '{self.output_dir}': {e}"
                ) from e

        log.info(f"Reading URLs from file: [dim]{escape(self.config.input_path)}[/dim]")
        entries = read_url_list(self.config.input_path)
        unique_urls = remove_duplicates(entries)
        self.stats.urls_read = len(entries)
        self.stats.duplicates_removed = len(entries) - len(unique_urls)
        if self.stats.duplicates_removed:
            log.info(f"Removed {self.stats.duplicates_removed} duplicate URLs.")

        if not unique_urls:
            log.warning("[yellow]No URLs to process. Exiting.[/yellow]")
            return self.stats

        if self.config.max_workers == 1:
            for raw_url in unique_urls:
                self.stats.record(await self.process_url(raw_url))
        else:
            await asyncio.gather(*(self._process_limited(u) for u in unique_urls))

        return self.stats

    async def _process_limited(self, raw_url: str) -> None:
        async with self.semaphore:
            self.stats.record(await self.process_url(raw_url))

    async def process_url(self, raw_url: str) -> DownloadResult:
        """Resolves, validates and downloads a single entry of the list."""
        try:
            url = resolve_url(raw_url, self.config.base_domain)
        except UrlParseError as e:
            log.debug(
                f"Skipping unparseable URL: {escape(repr(raw_url))} ({escape(str(e))})"
            )
            return DownloadResult(raw_url, DownloadOutcome.SKIPPED_INVALID, reason=str(e))

        if not is_url_valid(url):
            log.debug(f"Skipping invalid URL: {escape(repr(url))}")
            return DownloadResult(
                url, DownloadOutcome.SKIPPED_INVALID, reason="invalid URL"
            )

        try:
            filename = url_to_filename(url).lower()
        except InvalidFilenameError as e:
            log.debug(
                f"Skipping URL without a usable filename: {escape(repr(url))} "
                f"({escape(str(e))})"
            )
            return DownloadResult(url, DownloadOutcome.SKIPPED_INVALID, reason=str(e))

        if self.config.dry_run:
            return self._simulate(url, self.output_dir / filename)

        async with await self._get_file_lock(filename):
            return await self.downloader.download_pdf(url, self.output_dir)

    def _simulate(self, url: str, file_path: Path) -> DownloadResult:
        if file_exists(file_path):
            log.info(
                f"  [yellow]○ Skipping:[/] [dim]{escape(str(file_path))}[/dim] "
                "(already exists)"
            )
            return DownloadResult(
                url, DownloadOutcome.SKIPPED_EXISTS, path=file_path, reason="exists"
            )
        log.info(
            f"  [cyan]→ (Dry Run)[/] {escape(url)} would be saved to "
            f"[dim]{escape(str(file_path))}[/dim]"
        )
        return DownloadResult(url, DownloadOutcome.DRY_RUN, path=file_path)

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self.start_time

    async def close(self) -> None:
        """Releases the network resources held by the downloader."""
        await self.downloader.close()

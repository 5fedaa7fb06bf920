"""
Handles the low-level downloading of PDF documents over HTTP, validating each
response before anything is written to disk.
"""

import asyncio
import logging
import os
from pathlib import Path

import aiofiles
import aiohttp
from rich.markup import escape

from batchpdf.exceptions import (
    DownloadError,
    EmptyResponseError,
    FileWriteError,
    HTTPStatusError,
    InvalidContentTypeError,
    InvalidFilenameError,
)
from batchpdf.models.config import DEFAULT_REQUEST_TIMEOUT
from batchpdf.models.stats import DownloadOutcome, DownloadResult
from batchpdf.utils.path import file_exists, url_to_filename

log = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
TEMP_SUFFIX = ".part"


class Downloader:
    """
    Fetches one PDF per call through a shared aiohttp session.

    Nothing is retried: every failure is logged and reported as a FAILED
    result so the caller can move on to the next URL.
    """

    def __init__(
        self,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        max_workers: int = 1,
    ):
        self.request_timeout = request_timeout
        self.max_workers = max_workers
        self._session: aiohttp.ClientSession | None = None
        self._session_lock = asyncio.Lock()

    async def __aenter__(self) -> "Downloader":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Gets or creates the ClientSession used for every request of this run."""
        async with self._session_lock:
            if self._session and not self._session.closed:
                return self._session

            connector = aiohttp.TCPConnector(
                limit=self.max_workers * 2,
                limit_per_host=self.max_workers,
                ttl_dns_cache=600,  # 10 minutes
                enable_cleanup_closed=True,
            )
            timeout = aiohttp.ClientTimeout(total=self.request_timeout)
            self._session = aiohttp.ClientSession(connector=connector, timeout=timeout)
            log.debug(
                f"Created download session (timeout={self.request_timeout}s, "
                f"limit_per_host={self.max_workers})"
            )
            return self._session

    async def close(self) -> None:
        """Closes the underlying HTTP session."""
        async with self._session_lock:
            if self._session and not self._session.closed:
                await self._session.close()
                log.debug("Download session closed.")
            self._session = None

    @staticmethod
    def target_path(url: str, output_dir: Path) -> Path:
        """Returns where the document behind `url` is stored inside `output_dir`."""
        return Path(output_dir) / url_to_filename(url).lower()

    async def download_pdf(self, url: str, output_dir: Path) -> DownloadResult:
        """
        Downloads a PDF into `output_dir` unless a file with the same sanitized
        name is already there.

        Returns:
            A DownloadResult describing what happened. This method does not raise
            for per-URL problems.
        """
        try:
            file_path = self.target_path(url, output_dir)
        except InvalidFilenameError as e:
            log.debug(
                f"Skipping URL without a usable filename: {escape(repr(url))} "
                f"({escape(str(e))})"
            )
            return DownloadResult(url, DownloadOutcome.SKIPPED_INVALID, reason=str(e))

        if await asyncio.to_thread(file_exists, file_path):
            log.info(
                f"  [yellow]○ Skipping:[/] [dim]{escape(str(file_path))}[/dim] "
                "(already exists)"
            )
            return DownloadResult(
                url, DownloadOutcome.SKIPPED_EXISTS, path=file_path, reason="exists"
            )

        try:
            body = await self.fetch_pdf(url)
            await self.write_file(body, file_path)
        except (DownloadError, aiohttp.ClientError, asyncio.TimeoutError) as e:
            reason = str(e) or type(e).__name__
            log.error(f"  [red]✗ Failed:[/] {escape(url)} ({escape(reason)})")
            return DownloadResult(
                url, DownloadOutcome.FAILED, path=file_path, reason=reason
            )

        log.info(
            f"  [green]✓ Downloaded[/] {len(body)} bytes: "
            f"{escape(url)} → [dim]{escape(str(file_path))}[/dim]"
        )
        return DownloadResult(
            url, DownloadOutcome.DOWNLOADED, path=file_path, bytes_written=len(body)
        )

    async def fetch_pdf(self, url: str) -> bytes:
        """
        Performs the GET request and returns the full body of a PDF response.

        Raises:
            HTTPStatusError: The status code is not 200.
            InvalidContentTypeError: The Content-Type does not mention application/pdf.
            EmptyResponseError: The body is empty.
            aiohttp.ClientError, asyncio.TimeoutError: On network failures.
        """
        session = await self._get_session()
        async with session.get(url) as response:
            if response.status != 200:
                raise HTTPStatusError(response.status, response.reason)

            content_type = response.headers.get("Content-Type", "")
            if PDF_CONTENT_TYPE not in content_type:
                raise InvalidContentTypeError(content_type)

            body = await response.read()

        if not body:
            raise EmptyResponseError("downloaded 0 bytes; not creating file")
        return body

    async def write_file(self, body: bytes, file_path: Path) -> None:
        """
        Writes `body` to a temporary file next to `file_path` and renames it into
        place, so an interrupted write never leaves a truncated document behind.

        Raises:
            FileWriteError: If the file cannot be created, written or renamed.
        """
        temp_path = file_path.with_name(file_path.name + TEMP_SUFFIX)
        try:
            async with aiofiles.open(temp_path, "wb") as f:
                await f.write(body)
            await asyncio.to_thread(os.replace, temp_path, file_path)
        except OSError as e:
            raise FileWriteError(f"could not write {file_path}: {e}") from e
        finally:
            try:
                os.remove(temp_path)
            except FileNotFoundError:
                pass
            except OSError:
                log.debug(f"Could not remove temporary file {temp_path}")

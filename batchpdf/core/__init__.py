"""
Core application engine for orchestrating the download process.

The `DownloadManager` reads and cleans the URL list and walks it, delegating
each individual fetch to the `Downloader`.
"""

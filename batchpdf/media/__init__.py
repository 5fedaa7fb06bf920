"""
Media Processing Layer.

This package is responsible for fetching documents over HTTP, validating the
responses and writing them to disk.
"""

from .downloader import Downloader

__all__ = ["Downloader"]

"""
batchpdf: a batch downloader for lists of PDF links.
"""

__version__ = "1.0.0"

"""bugsnag-event-downloader - CLI tool for exporting Bugsnag error events.

Downloads the events of a single Bugsnag error within a time window and
renders them as CSV, with columns driven by a field-mapping file.
"""

__version__ = "0.1.0"
__author__ = "bugsnag-event-downloader contributors"
__description__ = "Download Bugsnag error events as CSV"

from bugsnag_event_downloader.config import DownloaderConfig
from bugsnag_event_downloader.errors import (
    DownloaderError,
    MappingLoadError,
    UpstreamError,
    ValidationError,
)

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "DownloaderConfig",
    "DownloaderError",
    "MappingLoadError",
    "UpstreamError",
    "ValidationError",
]

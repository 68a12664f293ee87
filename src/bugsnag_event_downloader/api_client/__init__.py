"""Bugsnag Data Access API clients."""

from bugsnag_event_downloader.api_client.error_event_client import ErrorEventClient

__all__ = ["ErrorEventClient"]

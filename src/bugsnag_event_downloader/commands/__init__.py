"""Top-level commands orchestrating fetch and conversion."""

from bugsnag_event_downloader.commands.error_events import ErrorEventsCommand

__all__ = ["ErrorEventsCommand"]

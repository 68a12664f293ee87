"""Pydantic data models for Bugsnag API records."""

from bugsnag_event_downloader.models.event import ErrorEvent, ExceptionInfo

__all__ = [
    "ErrorEvent",
    "ExceptionInfo",
]

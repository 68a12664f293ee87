"""Utility helpers for bugsnag-event-downloader."""

"""Shared fixtures for bugsnag-event-downloader tests."""

from datetime import UTC, datetime
from pathlib import Path

import pytest

from bugsnag_event_downloader.models import ErrorEvent

RECEIVED_AT = datetime(2022, 1, 1, 0, 0, 0, tzinfo=UTC)


def event_payload(event_id: str = "33333", **overrides) -> dict:
    """Event JSON as the Bugsnag API returns it."""
    payload = {
        "id": event_id,
        "url": f"https://api.bugsnag.com/projects/11111/events/{event_id}",
        "project_url": "https://api.bugsnag.com/projects/11111",
        "is_full_report": True,
        "error_id": "22222",
        "received_at": "2022-01-01T00:00:00.000Z",
        "exceptions": [
            {
                "error_class": "NotFoundError",
                "message": "Response code = 404",
            }
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_event():
    """Factory building ErrorEvent models from API-shaped payloads."""
    def _make(event_id: str = "33333", **overrides) -> ErrorEvent:
        return ErrorEvent.model_validate(event_payload(event_id, **overrides))
    return _make


@pytest.fixture
def csv_map_file(tmp_path: Path) -> Path:
    """Field map selecting id, url, project_url and received_at."""
    map_file = tmp_path / "csv_map.csv"
    map_file.write_text(
        "header,path\n"
        "id,id\n"
        "url,url\n"
        "project_url,project_url\n"
        "received_at,received_at\n",
        encoding="utf-8",
    )
    return map_file


@pytest.fixture
def make_payload():
    """Factory building raw API event payloads."""
    return event_payload

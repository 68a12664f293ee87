"""The error-events command: fetch one error's events and render them as CSV."""

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import TypeVar

from bugsnag_event_downloader.api_client import ErrorEventClient
from bugsnag_event_downloader.config import DownloaderConfig
from bugsnag_event_downloader.converter import CsvConverter
from bugsnag_event_downloader.errors import ValidationError
from bugsnag_event_downloader.utils.dates import as_utc

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ErrorEventsCommand:
    """Download the events of a Bugsnag error within a time window as CSV.

    Construction validates every input before failing: the client checks the
    project and error ids, the converter checks the map path, the command
    checks the window. All validation failures are reported together as one
    ValidationError.
    """

    def __init__(
        self,
        project_id: str | None,
        error_id: str | None,
        csv_map_path: str | Path | None,
        start_date: datetime | None,
        end_date: datetime | None,
        config: DownloaderConfig | None = None,
    ):
        self.error_id = error_id
        self.config = config or DownloaderConfig()

        failures: list[ValidationError] = []

        window_missing = [
            name for name, value in (("start_date", start_date), ("end_date", end_date)) if value is None
        ]
        if window_missing:
            failures.append(ValidationError(window_missing))
        else:
            start_date, end_date = as_utc(start_date), as_utc(end_date)
            if start_date > end_date:
                failures.append(ValidationError(["start_date", "end_date"]))
        self.start_date = start_date
        self.end_date = end_date

        self.client = self._attempt(
            lambda: ErrorEventClient(project_id=project_id, error_id=error_id, config=self.config),
            failures,
        )
        self.csv_converter = self._attempt(lambda: CsvConverter(csv_map_path=csv_map_path), failures)

        if len(failures) == 1:
            raise failures[0]
        if failures:
            raise ValidationError.merge(*failures)

    @staticmethod
    def _attempt(factory: Callable[[], T], failures: list[ValidationError]) -> T | None:
        """Build a component, recording a validation failure instead of raising it."""
        try:
            return factory()
        except ValidationError as e:
            logger.debug(f"Validation failed: {e.attributes}")
            failures.append(e)
            return None

    def get(self) -> str:
        """Fetch all matching events and return them rendered as CSV."""
        events = self.client.fetch_all(self.error_id, self.start_date, self.end_date)
        return self.csv_converter.convert(events)

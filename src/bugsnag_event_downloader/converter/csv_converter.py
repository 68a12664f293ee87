"""CSV rendering of error events driven by a field map."""

import csv
import io
import json
import logging
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from typing import Any

from bugsnag_event_downloader.converter.field_map import FieldMap, load_field_map
from bugsnag_event_downloader.errors import ValidationError
from bugsnag_event_downloader.models import ErrorEvent
from bugsnag_event_downloader.utils.dates import format_utc_timestamp

logger = logging.getLogger(__name__)


def render_cell(value: Any) -> str:
    """String form of an extracted value as it appears in a CSV cell."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return format_utc_timestamp(value)
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, default=str, separators=(",", ":"))
    return str(value)


class CsvConverter:
    """Converts error events into CSV text using a field map file."""

    def __init__(self, csv_map_path: str | Path | None):
        """Initialize converter and load its field map.

        Raises:
            ValidationError: If csv_map_path is missing
            MappingLoadError: If the field map file cannot be loaded
        """
        if csv_map_path is None or not str(csv_map_path).strip():
            raise ValidationError(["csv_map_path"])

        self.csv_map_path = Path(csv_map_path)
        self.field_map: FieldMap = load_field_map(self.csv_map_path)

    def convert(self, events: Iterable[ErrorEvent]) -> str:
        """Render events as CSV: a header line, then one line per event."""
        out = io.StringIO(newline="")
        writer = csv.writer(out, lineterminator="\n")
        writer.writerow(self.field_map.headers)

        row_count = 0
        for event in events:
            record = event.to_record()
            writer.writerow([render_cell(value) for value in self.field_map.extract_row(record)])
            row_count += 1

        logger.debug(f"Rendered {row_count} rows with {len(self.field_map)} columns")
        return out.getvalue()

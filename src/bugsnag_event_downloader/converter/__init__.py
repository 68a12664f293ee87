"""Field-map driven conversion of events into CSV."""

from bugsnag_event_downloader.converter.csv_converter import CsvConverter, render_cell
from bugsnag_event_downloader.converter.field_map import FieldColumn, FieldMap, load_field_map

__all__ = [
    "CsvConverter",
    "FieldColumn",
    "FieldMap",
    "load_field_map",
    "render_cell",
]

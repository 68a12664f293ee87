"""Models for Bugsnag error events as returned by the Data Access API."""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from bugsnag_event_downloader.utils.dates import as_utc


class ExceptionInfo(BaseModel):
    """One entry of an event's exception chain."""
    error_class: str = ""
    message: str = ""

    model_config = ConfigDict(extra="allow")


class ErrorEvent(BaseModel):
    """A single error event snapshot.

    Attributes beyond the modelled ones (``context``, ``severity``,
    ``metaData``, ...) are kept so field maps can reach them.
    """
    id: str
    url: str = ""
    project_url: str = ""
    is_full_report: bool = False
    error_id: str = ""
    received_at: datetime
    exception: list[ExceptionInfo] = Field(
        default_factory=list,
        validation_alias=AliasChoices("exception", "exceptions"),
    )

    model_config = ConfigDict(extra="allow", frozen=True)

    @field_validator("received_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC and normalize aware ones to UTC."""
        return as_utc(v)

    def to_record(self) -> dict[str, Any]:
        """Plain nested structure used for field-path lookups.

        The exception chain is reachable under both ``exception`` and the
        API's own ``exceptions`` key.
        """
        record = self.model_dump()
        record.setdefault("exceptions", record["exception"])
        return record

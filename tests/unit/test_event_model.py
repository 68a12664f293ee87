"""Unit tests for the ErrorEvent model."""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from bugsnag_event_downloader.models import ErrorEvent, ExceptionInfo


class TestErrorEvent:
    """Test ErrorEvent parsing from API payloads."""

    def test_parse_api_payload(self, make_payload):
        """Test a full report payload becomes a typed event."""
        event = ErrorEvent.model_validate(make_payload())

        assert event.id == "33333"
        assert event.error_id == "22222"
        assert event.is_full_report is True
        assert event.received_at == datetime(2022, 1, 1, tzinfo=UTC)
        assert event.exception == [ExceptionInfo(error_class="NotFoundError", message="Response code = 404")]

    def test_exception_key_accepted(self, make_payload):
        """Test the singular 'exception' key works as well as 'exceptions'."""
        payload = make_payload()
        payload["exception"] = payload.pop("exceptions")

        event = ErrorEvent.model_validate(payload)
        assert event.exception[0].error_class == "NotFoundError"

    def test_naive_timestamp_is_utc(self, make_payload):
        event = ErrorEvent.model_validate(make_payload(received_at="2022-01-01T09:30:00"))
        assert event.received_at == datetime(2022, 1, 1, 9, 30, tzinfo=UTC)

    def test_offset_timestamp_converted_to_utc(self, make_payload):
        """Test non-UTC offsets are normalized."""
        event = ErrorEvent.model_validate(make_payload(received_at="2022-01-01T09:00:00+09:00"))
        assert event.received_at.utcoffset() == timedelta(0)
        assert event.received_at == datetime(2022, 1, 1, 0, 0, tzinfo=timezone.utc)

    def test_unknown_attributes_retained(self, make_payload):
        """Test extra API attributes are available in the record."""
        event = ErrorEvent.model_validate(make_payload(context="GET /users", metaData={"request": {"url": "/users"}}))
        record = event.to_record()

        assert record["context"] == "GET /users"
        assert record["metaData"]["request"]["url"] == "/users"
        assert record["exception"][0]["message"] == "Response code = 404"

    def test_exception_chain_under_both_keys(self, make_payload):
        """Test field paths may use the API's 'exceptions' name."""
        record = ErrorEvent.model_validate(make_payload()).to_record()

        assert record["exceptions"] == record["exception"]
        assert record["exceptions"][0]["error_class"] == "NotFoundError"

    def test_missing_id_rejected(self, make_payload):
        payload = make_payload()
        del payload["id"]
        with pytest.raises(PydanticValidationError):
            ErrorEvent.model_validate(payload)

    def test_events_are_immutable(self, make_event):
        event = make_event()
        with pytest.raises(PydanticValidationError):
            event.id = "other"

"""UTC timestamp helpers shared by the client, the converter and the CLI."""

from datetime import UTC, datetime, timedelta


def as_utc(value: datetime) -> datetime:
    """Return ``value`` in UTC, treating naive datetimes as already UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def to_api_timestamp(value: datetime, round_up: bool = False) -> str:
    """Format a datetime the way Bugsnag filters expect it.

    Filters take whole seconds. With ``round_up`` a fractional second moves
    to the next whole second so an upper bound never excludes it.

    Examples:
        >>> to_api_timestamp(datetime(2022, 1, 1, tzinfo=UTC))
        '2022-01-01T00:00:00Z'
        >>> to_api_timestamp(datetime(2022, 1, 1, 0, 0, 0, 900000, tzinfo=UTC), round_up=True)
        '2022-01-01T00:00:01Z'
    """
    value = as_utc(value)
    if round_up and value.microsecond:
        value = value.replace(microsecond=0) + timedelta(seconds=1)
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


def format_utc_timestamp(value: datetime) -> str:
    """Render a datetime with millisecond precision and a UTC suffix.

    Examples:
        >>> format_utc_timestamp(datetime(2022, 1, 1, 0, 0, 0, 123456, tzinfo=UTC))
        '2022-01-01 00:00:00.123 UTC'
    """
    value = as_utc(value)
    return f"{value:%Y-%m-%d %H:%M:%S}.{value.microsecond // 1000:03d} UTC"


def parse_cli_timestamp(text: str) -> datetime:
    """Parse an ISO 8601 string from the command line into a UTC datetime."""
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return as_utc(datetime.fromisoformat(text))

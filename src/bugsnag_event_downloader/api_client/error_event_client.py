"""Client for the Bugsnag "list events of an error" endpoint.

https://bugsnagapiv2.docs.apiary.io/#reference/errors/events/list-the-events-on-an-error
"""

import logging
from collections.abc import Iterator
from datetime import datetime

import httpx
from pydantic import ValidationError as PydanticValidationError

from bugsnag_event_downloader.config import DownloaderConfig
from bugsnag_event_downloader.errors import UpstreamError, ValidationError
from bugsnag_event_downloader.models import ErrorEvent
from bugsnag_event_downloader.utils.dates import as_utc, to_api_timestamp

logger = logging.getLogger(__name__)

API_VERSION = "2"


def _is_blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


class ErrorEventClient:
    """Fetches the events of one Bugsnag error, following pagination links."""

    def __init__(
        self,
        project_id: str | None,
        error_id: str | None,
        config: DownloaderConfig | None = None,
        http_client: httpx.Client | None = None,
    ):
        """Initialize the client.

        Args:
            project_id: Bugsnag project id
            error_id: Bugsnag error id
            config: Downloader configuration (defaults when omitted)
            http_client: Transport to use instead of a client built from config

        Raises:
            ValidationError: If project_id or error_id is missing
        """
        missing = [
            name
            for name, value in (("project_id", project_id), ("error_id", error_id))
            if _is_blank(value)
        ]
        if missing:
            raise ValidationError(missing)

        self.project_id = project_id
        self.error_id = error_id
        self.config = config or DownloaderConfig()
        self._http_client = http_client

    def events_url(self, error_id: str) -> str:
        """URL of the first events page for ``error_id``."""
        base_url = self.config.api.base_url
        return f"{base_url}/projects/{self.project_id}/errors/{error_id}/events"

    def _headers(self) -> dict[str, str]:
        headers = {"X-Version": API_VERSION, "Accept": "application/json"}
        if self.config.api.auth_token:
            headers["Authorization"] = f"token {self.config.api.auth_token}"
        return headers

    def _first_page_params(self, start_date: datetime, end_date: datetime) -> list[tuple[str, str]]:
        return [
            ("full_reports", "true"),
            ("per_page", str(self.config.api.per_page)),
            ("filters[event.since][][type]", "eq"),
            ("filters[event.since][][value]", to_api_timestamp(start_date)),
            ("filters[event.before][][type]", "eq"),
            ("filters[event.before][][value]", to_api_timestamp(end_date, round_up=True)),
        ]

    def _get(self, client: httpx.Client, url: str, params: list[tuple[str, str]] | None) -> httpx.Response:
        try:
            response = client.get(url, params=params, headers=self._headers())
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise UpstreamError(
                f"{e.response.reason_phrase or 'request failed'} for {e.request.url}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"Request to {url} failed: {e}") from e
        return response

    @staticmethod
    def _parse_page(response: httpx.Response) -> list[ErrorEvent]:
        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamError(f"Response from {response.request.url} is not JSON") from e

        if not isinstance(payload, list):
            raise UpstreamError(f"Expected a list of events from {response.request.url}")

        try:
            return [ErrorEvent.model_validate(item) for item in payload]
        except PydanticValidationError as e:
            raise UpstreamError(f"Malformed event in response from {response.request.url}: {e}") from e

    def iter_pages(self, error_id: str, start_date: datetime, end_date: datetime) -> Iterator[list[ErrorEvent]]:
        """Yield one list of events per upstream page until no next link remains."""
        owns_client = self._http_client is None
        client = self._http_client or httpx.Client(timeout=self.config.api.timeout)

        try:
            url: str | None = self.events_url(error_id)
            params: list[tuple[str, str]] | None = self._first_page_params(start_date, end_date)
            page_number = 0

            while url:
                page_number += 1
                logger.debug(f"Requesting events page {page_number}: {url}")
                response = self._get(client, url, params)
                events = self._parse_page(response)

                total = response.headers.get("X-Total-Count")
                if total is not None and page_number == 1:
                    logger.debug(f"Upstream reports {total} events in window")

                yield events

                # Next links already carry the query string
                url = response.links.get("next", {}).get("url")
                params = None
        finally:
            if owns_client:
                client.close()

    def fetch_all(self, error_id: str, start_date: datetime, end_date: datetime) -> list[ErrorEvent]:
        """Fetch every event of ``error_id`` received within the window.

        Pages are drained in upstream order. Events outside
        ``[start_date, end_date]`` are dropped, as are events naming a
        different error; events without an ``error_id`` belong to the
        requested error since the endpoint is scoped to it.
        """
        start = as_utc(start_date)
        end = as_utc(end_date)

        events = [
            event
            for page in self.iter_pages(error_id, start, end)
            for event in page
            if (not event.error_id or event.error_id == error_id) and start <= event.received_at <= end
        ]
        logger.info(f"Fetched {len(events)} events for error {error_id}")
        return events

"""Error kinds raised by the downloader pipeline."""

from collections.abc import Iterable
from pathlib import Path


class DownloaderError(Exception):
    """Base class for all downloader errors."""


class ValidationError(DownloaderError):
    """Required construction inputs are missing or invalid.

    ``attributes`` lists the offending input names, de-duplicated, in the
    order they were first reported. Two errors compare equal when they name
    the same set of attributes.
    """

    def __init__(self, attributes: Iterable[str]):
        self.attributes: list[str] = list(dict.fromkeys(attributes))
        super().__init__(f"Missing or invalid attributes: {', '.join(self.attributes)}")

    @classmethod
    def merge(cls, *errors: "ValidationError") -> "ValidationError":
        """Combine several validation errors into one carrying the union."""
        return cls(attribute for error in errors for attribute in error.attributes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return set(self.attributes) == set(other.attributes)

    def __hash__(self) -> int:
        return hash(frozenset(self.attributes))


class UpstreamError(DownloaderError):
    """The Bugsnag API failed, refused the request, or returned garbage."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        detail = f"HTTP {status_code}: {message}" if status_code is not None else message
        super().__init__(detail)


class MappingLoadError(DownloaderError):
    """A field-mapping file was given but could not be turned into columns."""

    def __init__(self, path: str | Path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot load field map {self.path}: {reason}")

"""Error taxonomy for the journal preview pipeline."""

from __future__ import annotations

NO_ENTRIES_MESSAGE = "No journal entries found yet."
LOAD_FAILED_MESSAGE = "Could not load journal entries at this time."


class PreviewError(Exception):
    """Base class for every failure the preview pipeline can report."""


class TransportUnavailableError(PreviewError):
    """No usable transport exists in the current environment."""


class HttpStatusError(PreviewError):
    """The endpoint answered outside the 2xx range."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"Network response was not ok ({status_code})")
        self.status_code = status_code


class NetworkError(PreviewError):
    """The request could not complete."""


class DecodeError(PreviewError):
    """The payload is not valid JSON."""


class ValidationError(PreviewError):
    """The payload decoded but holds no usable entry collection."""


def user_message(exc: BaseException) -> str:
    """Collapse an error into one of the two messages shown to visitors."""
    if isinstance(exc, ValidationError):
        return NO_ENTRIES_MESSAGE
    return LOAD_FAILED_MESSAGE

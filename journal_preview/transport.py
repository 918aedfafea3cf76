"""Transports that retrieve the journal JSON payload."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

import requests

from .decoder import decode_text
from .errors import (
    DecodeError,
    HttpStatusError,
    NetworkError,
    PreviewError,
    TransportUnavailableError,
)

try:
    import httpx
except ImportError:  # pragma: no cover - checked by httpx_available
    httpx = None

logger = logging.getLogger(__name__)

TRANSPORT_CHOICES = ("auto", "httpx", "requests")


class Transport(ABC):
    """Retrieves one decoded JSON value per call, without retrying."""

    name = "transport"

    def __init__(self, timeout: Optional[float] = None) -> None:
        self.timeout = timeout

    @abstractmethod
    async def fetch_json(self, url: str) -> Any:
        """Return the parsed JSON body at ``url`` or raise a PreviewError."""


class HttpxTransport(Transport):
    """Preferred transport built on ``httpx.AsyncClient``."""

    name = "httpx"

    async def fetch_json(self, url: str) -> Any:
        if httpx is None:
            raise TransportUnavailableError("httpx is not installed.")

        client_options: dict = {"follow_redirects": True}
        if self.timeout is not None:
            client_options["timeout"] = self.timeout

        logger.debug("GET %s via httpx", url)
        try:
            async with httpx.AsyncClient(**client_options) as client:
                response = await client.get(url)
        except httpx.HTTPError as exc:
            raise NetworkError(f"Request to {url} failed: {exc}") from exc

        if not response.is_success:
            raise HttpStatusError(response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise DecodeError(f"Response from {url} is not valid JSON") from exc


class RequestsTransport(Transport):
    """Fallback transport: a blocking ``requests`` call driven by callbacks.

    The request runs on the loop's default executor. Its ``on_load`` and
    ``on_error`` callbacks settle a future on the event loop, so the caller
    awaits it exactly like the preferred transport.
    """

    name = "requests"

    def __init__(
        self,
        timeout: Optional[float] = None,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        super().__init__(timeout)
        self._session_factory = session_factory

    def _send(
        self,
        url: str,
        on_load: Callable[[int, str], None],
        on_error: Callable[[Exception], None],
    ) -> None:
        try:
            with self._session_factory() as session:
                response = session.get(url, timeout=self.timeout)
                status, text = response.status_code, response.text
        except requests.RequestException as exc:
            on_error(exc)
            return
        on_load(status, text)

    async def fetch_json(self, url: str) -> Any:
        loop = asyncio.get_running_loop()
        future: asyncio.Future = loop.create_future()

        def settle(result: Any = None, error: Optional[BaseException] = None) -> None:
            if future.done():
                return
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(result)

        def on_load(status: int, text: str) -> None:
            if not 200 <= status < 300:
                loop.call_soon_threadsafe(settle, None, HttpStatusError(status))
                return
            try:
                payload = decode_text(text)
            except PreviewError as exc:
                loop.call_soon_threadsafe(settle, None, exc)
                return
            loop.call_soon_threadsafe(settle, payload)

        def on_error(exc: Exception) -> None:
            error = NetworkError(f"Request to {url} failed: {exc}")
            error.__cause__ = exc
            loop.call_soon_threadsafe(settle, None, error)

        logger.debug("GET %s via requests", url)
        await loop.run_in_executor(None, self._send, url, on_load, on_error)
        return await future


def httpx_available() -> bool:
    """Return True when the preferred async client can be used."""
    return httpx is not None and hasattr(httpx, "AsyncClient")


def select_transport(
    preference: str = "auto", timeout: Optional[float] = None
) -> Transport:
    """Pick the transport once for the run, checking for the preferred client.

    Forcing ``httpx`` when it is missing still returns the httpx transport;
    its fetch then fails with TransportUnavailableError and the page shows
    the degraded message.
    """
    if preference not in TRANSPORT_CHOICES:
        raise ValueError(f"Unsupported transport: {preference}")

    if preference == "requests":
        transport: Transport = RequestsTransport(timeout=timeout)
    elif preference == "httpx" or httpx_available():
        transport = HttpxTransport(timeout=timeout)
    else:
        logger.info("httpx unavailable; falling back to requests transport")
        transport = RequestsTransport(timeout=timeout)

    logger.debug("Selected %s transport", transport.name)
    return transport

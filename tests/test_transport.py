import asyncio
from types import SimpleNamespace

import httpx
import pytest
import requests
import respx

from journal_preview import transport as transport_module
from journal_preview.errors import (
    DecodeError,
    HttpStatusError,
    NetworkError,
    TransportUnavailableError,
)
from journal_preview.transport import (
    HttpxTransport,
    RequestsTransport,
    select_transport,
)

from conftest import JOURNAL_URL


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def get(self, url, timeout=None):
        self.requests.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.response


@respx.mock
def test_httpx_transport_returns_parsed_json():
    route = respx.get(JOURNAL_URL).mock(
        return_value=httpx.Response(200, json={"entries": [{"id": "a"}]})
    )

    payload = asyncio.run(HttpxTransport().fetch_json(JOURNAL_URL))

    assert payload == {"entries": [{"id": "a"}]}
    assert route.call_count == 1


@respx.mock
def test_httpx_transport_raises_on_non_success_status():
    respx.get(JOURNAL_URL).mock(return_value=httpx.Response(404))

    with pytest.raises(HttpStatusError) as excinfo:
        asyncio.run(HttpxTransport().fetch_json(JOURNAL_URL))

    assert excinfo.value.status_code == 404


@respx.mock
def test_httpx_transport_wraps_connection_errors():
    respx.get(JOURNAL_URL).mock(side_effect=httpx.ConnectError("refused"))

    with pytest.raises(NetworkError):
        asyncio.run(HttpxTransport().fetch_json(JOURNAL_URL))


@respx.mock
def test_httpx_transport_raises_decode_error_for_malformed_body():
    respx.get(JOURNAL_URL).mock(return_value=httpx.Response(200, text="{oops"))

    with pytest.raises(DecodeError):
        asyncio.run(HttpxTransport().fetch_json(JOURNAL_URL))


def test_httpx_transport_unavailable_without_httpx(monkeypatch):
    monkeypatch.setattr(transport_module, "httpx", None)

    with pytest.raises(TransportUnavailableError):
        asyncio.run(HttpxTransport().fetch_json(JOURNAL_URL))


def test_requests_transport_parses_text_body():
    session = FakeSession(
        response=SimpleNamespace(status_code=200, text='{"entries": [{"id": "b"}]}')
    )
    transport = RequestsTransport(timeout=2.5, session_factory=lambda: session)

    payload = asyncio.run(transport.fetch_json(JOURNAL_URL))

    assert payload == {"entries": [{"id": "b"}]}
    assert session.requests == [(JOURNAL_URL, 2.5)]


def test_requests_transport_accepts_any_2xx():
    session = FakeSession(response=SimpleNamespace(status_code=203, text="[]"))
    transport = RequestsTransport(session_factory=lambda: session)

    assert asyncio.run(transport.fetch_json(JOURNAL_URL)) == []


def test_requests_transport_raises_on_error_status():
    session = FakeSession(response=SimpleNamespace(status_code=500, text="oops"))
    transport = RequestsTransport(session_factory=lambda: session)

    with pytest.raises(HttpStatusError) as excinfo:
        asyncio.run(transport.fetch_json(JOURNAL_URL))

    assert excinfo.value.status_code == 500


def test_requests_transport_raises_decode_error():
    session = FakeSession(response=SimpleNamespace(status_code=200, text="<html>"))
    transport = RequestsTransport(session_factory=lambda: session)

    with pytest.raises(DecodeError):
        asyncio.run(transport.fetch_json(JOURNAL_URL))


def test_requests_transport_wraps_request_exceptions():
    session = FakeSession(error=requests.ConnectionError("offline"))
    transport = RequestsTransport(session_factory=lambda: session)

    with pytest.raises(NetworkError) as excinfo:
        asyncio.run(transport.fetch_json(JOURNAL_URL))

    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)


def test_select_transport_prefers_httpx():
    assert isinstance(select_transport(), HttpxTransport)


def test_select_transport_falls_back_when_httpx_missing(monkeypatch):
    monkeypatch.setattr(transport_module, "httpx", None)

    selected = select_transport("auto", timeout=3.0)

    assert isinstance(selected, RequestsTransport)
    assert selected.timeout == 3.0


def test_select_transport_honours_explicit_choice():
    assert isinstance(select_transport("requests"), RequestsTransport)
    assert isinstance(select_transport("httpx"), HttpxTransport)


def test_select_transport_rejects_unknown_choice():
    with pytest.raises(ValueError):
        select_transport("carrier-pigeon")

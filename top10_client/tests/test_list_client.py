import time

import pytest
import requests

from top10_client.list_client import ListClient, build_url
from top10_client.models import Failure, Query, Success
from top10_client.normalize import NETWORK_ERROR_MESSAGE


ENDPOINT = "http://127.0.0.1:5000"


class FakeResponse:
    def __init__(self, status_code=200, body=None, raw_error=None):
        self.status_code = status_code
        self._body = body
        self._raw_error = raw_error

    def json(self):
        if self._raw_error:
            raise ValueError(self._raw_error)
        return self._body


@pytest.fixture
def calls(monkeypatch):
    """Record requests.post calls; the test sets calls.reply to control the outcome."""

    class Recorder(list):
        reply = FakeResponse(200, {"success": True, "products": []})

    rec = Recorder()

    def fake_post(url, **kwargs):
        rec.append((url, kwargs))
        if isinstance(rec.reply, Exception):
            raise rec.reply
        return rec.reply

    monkeypatch.setattr(requests, "post", fake_post)
    return rec


def test_build_url_appends_route_once():
    assert build_url(ENDPOINT) == ENDPOINT + "/api/generate-list"
    assert build_url(ENDPOINT + "/") == ENDPOINT + "/api/generate-list"
    assert build_url(ENDPOINT + "/api/generate-list") == ENDPOINT + "/api/generate-list"


def test_request_shape(calls):
    client = ListClient(endpoint=ENDPOINT, timeout_s=7)
    client.submit_sync(Query(text="  gaming laptops ", email=" me@example.com "))

    assert len(calls) == 1
    url, kwargs = calls[0]
    assert url == ENDPOINT + "/api/generate-list"
    assert kwargs["json"] == {"prompt": "gaming laptops", "email": "me@example.com"}
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert kwargs["timeout"] == 7


def test_email_defaults_to_empty_string(calls):
    ListClient(endpoint=ENDPOINT).submit_sync(Query.build("chips"))
    assert calls[0][1]["json"] == {"prompt": "chips", "email": ""}


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_blank_query_never_hits_network(calls, text):
    with pytest.raises(ValueError):
        ListClient(endpoint=ENDPOINT).submit_sync(Query.build(text))
    assert calls == []


def test_connection_refused_is_generic_failure(calls):
    calls.reply = requests.ConnectionError(
        f"HTTPConnectionPool(host='127.0.0.1', port=5000): Max retries exceeded with url: {ENDPOINT}/api/generate-list"
    )
    result = ListClient(endpoint=ENDPOINT).submit_sync(Query.build("chips"))

    assert result == Failure(NETWORK_ERROR_MESSAGE)
    assert "http" not in result.message.lower()
    assert "127.0.0.1" not in result.message
    assert len(calls) == 1


def test_timeout_is_generic_failure(calls):
    calls.reply = requests.Timeout("read timed out")
    result = ListClient(endpoint=ENDPOINT).submit_sync(Query.build("chips"))
    assert result == Failure(NETWORK_ERROR_MESSAGE)


def test_non_json_body_is_generic_failure(calls):
    calls.reply = FakeResponse(502, raw_error="Expecting value: line 1 column 1 (char 0)")
    result = ListClient(endpoint=ENDPOINT).submit_sync(Query.build("chips"))
    assert result == Failure(NETWORK_ERROR_MESSAGE)


def test_application_failure_message(calls):
    calls.reply = FakeResponse(200, {"success": False, "error": "no results"})
    result = ListClient(endpoint=ENDPOINT).submit_sync(Query.build("chips"))
    assert result == Failure("no results")


@pytest.mark.asyncio
async def test_async_submit_returns_success(calls):
    calls.reply = FakeResponse(
        200,
        {
            "success": True,
            "title": "Top 3",
            "intro": "",
            "products": [{"asin": "A"}, {"asin": "B"}, {"asin": "C"}],
            "generated_at": "now",
            "affiliate_id": "ai4u-20",
        },
    )
    result = await ListClient(endpoint=ENDPOINT).submit(Query.build("chips"))

    assert isinstance(result, Success)
    assert [p.asin for p in result.products] == ["A", "B", "C"]
    assert len(calls) == 1


@pytest.mark.parametrize("timeout", [0, -1])
def test_non_positive_timeout_rejected(timeout):
    with pytest.raises(ValueError):
        ListClient(endpoint=ENDPOINT, timeout_s=timeout)


@pytest.mark.asyncio
async def test_overall_deadline_maps_to_network_failure(monkeypatch):
    def trickling_post(url, **kwargs):
        time.sleep(0.5)
        return FakeResponse(200, {"success": True, "products": []})

    monkeypatch.setattr(requests, "post", trickling_post)
    result = await ListClient(endpoint=ENDPOINT, timeout_s=0.05).submit(Query.build("chips"))

    assert result == Failure(NETWORK_ERROR_MESSAGE)


@pytest.mark.asyncio
async def test_async_submit_blank_query_raises_before_network(calls):
    with pytest.raises(ValueError):
        await ListClient(endpoint=ENDPOINT).submit(Query.build("  "))
    assert calls == []

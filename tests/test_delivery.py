"""Tests for the Slack delivery client."""

import asyncio
import json

import httpx
import pytest

from statuswatch.delivery import SlackClient
from statuswatch.exceptions import ConfigurationError
from statuswatch.models import SlackMessage, create_header_block

SLACK_URL = "https://hooks.slack.test/services/T000/B000/XXXX"
MESSAGE = SlackMessage(text="hello", blocks=[create_header_block("Hello")])


def test_successful_send():
    requests = []

    def respond(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, text="ok")

    client = SlackClient(transport=httpx.MockTransport(respond))
    result = asyncio.run(client.send(MESSAGE, SLACK_URL))

    assert result.sent
    assert result.status_code == 200
    assert len(requests) == 1
    assert requests[0].method == "POST"
    assert str(requests[0].url) == SLACK_URL
    assert requests[0].headers["content-type"] == "application/json"
    assert json.loads(requests[0].content) == {
        "text": "hello",
        "blocks": [
            {"type": "header", "text": {"type": "plain_text", "text": "Hello", "emoji": True}}
        ],
    }


def test_non_success_response_is_captured_verbatim():
    client = SlackClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(404, text="no_service"))
    )
    result = asyncio.run(client.send(MESSAGE, SLACK_URL))

    assert not result.sent
    assert result.status_code == 404
    assert result.body_text == "no_service"


def test_no_retry_on_failure():
    calls = []

    def respond(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(500, text="internal_error")

    client = SlackClient(transport=httpx.MockTransport(respond))
    asyncio.run(client.send(MESSAGE, SLACK_URL))
    assert len(calls) == 1


@pytest.mark.parametrize("sink_url", [None, ""])
def test_missing_sink_url_fails_fast(sink_url):
    calls = []
    client = SlackClient(transport=httpx.MockTransport(lambda request: calls.append(request)))

    with pytest.raises(ConfigurationError, match="Slack webhook not configured"):
        asyncio.run(client.send(MESSAGE, sink_url))
    assert calls == []


def test_timeout_is_reported_as_failure():
    def respond(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = SlackClient(timeout=2.0, transport=httpx.MockTransport(respond))
    result = asyncio.run(client.send(MESSAGE, SLACK_URL))

    assert not result.sent
    assert result.status_code is None
    assert "timed out" in result.body_text


def test_connection_error_is_reported_as_failure():
    def respond(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = SlackClient(transport=httpx.MockTransport(respond))
    result = asyncio.run(client.send(MESSAGE, SLACK_URL))

    assert not result.sent
    assert result.status_code is None
    assert result.body_text == "connection refused"

import copy
import json
import pathlib
import sys
from typing import Any, Dict, List

import httpx
import pytest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from statuswatch.common import compute_hmac_sha256
from statuswatch.webhook.config import NotifierConfig

RESOURCES = pathlib.Path(__file__).parent / "resources"
SECRET = "It's a Secret to Everybody"
SLACK_URL = "https://hooks.slack.test/services/T000/B000/XXXX"


def load_resource(name: str) -> Dict[str, Any]:
    with open(RESOURCES / name, "r", encoding="utf-8") as f:
        return json.load(f)


def sign(body: bytes, secret: str = SECRET) -> str:
    return f"sha256={compute_hmac_sha256(body, secret)}"


class SlackSink:
    """Records requests made to the fake Slack webhook."""

    def __init__(self, status_code: int = 200, text: str = "ok") -> None:
        self.status_code = status_code
        self.text = text
        self.requests: List[httpx.Request] = []
        self.transport = httpx.MockTransport(self._respond)

    def _respond(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, text=self.text)

    @property
    def payloads(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def sample_payload() -> Dict[str, Any]:
    return copy.deepcopy(load_resource("sample_webhook_status_change.json"))


@pytest.fixture
def config() -> NotifierConfig:
    return NotifierConfig(
        webhook_secret=SECRET,
        slack_webhook_url=SLACK_URL,
        project_key="UT",
        from_status="In Review",
        to_status="To Do",
        log_dir=None,
    )


@pytest.fixture
def slack_sink() -> SlackSink:
    return SlackSink()

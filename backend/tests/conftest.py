import json

import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from app.services.scan.relay import ScanRelay
from app.services.scan.shodan_client import ShodanHostClient

API_KEY = "test-shodan-key"


@pytest.fixture
def settings():
    return Settings(_env_file=None, SHODAN_API_KEY=API_KEY, SHODAN_BASE_URL="https://shodan.test")


class FakeShodan:
    """Records outbound requests and answers them with a canned response."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.payload = {}
        self.exc = None

    def reply(self, payload=None, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_(self, exc):
        self.exc = exc

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if isinstance(self.payload, (dict, list)):
            return httpx.Response(self.status_code, content=json.dumps(self.payload).encode(),
                                  headers={"content-type": "application/json"})
        return httpx.Response(self.status_code, text=self.payload or "")


@pytest.fixture
def shodan():
    return FakeShodan()


@pytest.fixture
def shodan_client(settings, shodan):
    return ShodanHostClient(
        api_key=settings.SHODAN_API_KEY,
        base_url=settings.SHODAN_BASE_URL,
        timeout=settings.SHODAN_TIMEOUT_SECONDS,
        transport=httpx.MockTransport(shodan.handler),
    )


@pytest.fixture
def client(settings, shodan_client):
    app = create_app(settings, relay=ScanRelay(shodan_client, allowlist=settings.scan_allowlist))
    return TestClient(app)

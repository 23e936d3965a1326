# backend/app/services/scan/shodan_client.py
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional
from urllib.parse import quote

import httpx


BASE_URL = "https://api.shodan.io"
DEFAULT_TIMEOUT = 30.0


class LookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass
class HostLookupResult:
    status: LookupStatus
    data: Optional[dict[str, Any]] = None
    status_code: Optional[int] = None
    detail: Optional[str] = None

    @classmethod
    def found(cls, data: dict[str, Any], status_code: int) -> "HostLookupResult":
        return cls(LookupStatus.FOUND, data=data, status_code=status_code)

    @classmethod
    def not_found(cls) -> "HostLookupResult":
        return cls(LookupStatus.NOT_FOUND, status_code=404)

    @classmethod
    def failed(cls, detail: str, status_code: Optional[int] = None) -> "HostLookupResult":
        return cls(LookupStatus.FAILED, status_code=status_code, detail=detail)


class ShodanHostClient:
    """
    Thin client for Shodan's /shodan/host/{ip} endpoint.
    One request per call, no retries; every outcome is returned as a
    HostLookupResult instead of being raised.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def fetch_host(self, ip: str) -> HostLookupResult:
        url = f"{self.base_url}/shodan/host/{quote(ip, safe='')}"
        params = {"key": self.api_key}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.get(url, params=params)
        except httpx.TimeoutException:
            return HostLookupResult.failed(f"timeout of {self.timeout:g}s exceeded")
        except httpx.HTTPError as e:
            return HostLookupResult.failed(self._redact(f"{type(e).__name__}: {e}"))

        if resp.status_code == 404:
            return HostLookupResult.not_found()

        if resp.is_error:
            detail = f"Request failed with status code {resp.status_code}"
            message = _error_message(resp)
            if message:
                detail = f"{detail}: {message}"
            return HostLookupResult.failed(self._redact(detail), status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError:
            return HostLookupResult.failed("Invalid JSON in Shodan response", status_code=resp.status_code)

        if not isinstance(data, dict):
            return HostLookupResult.failed(
                f"Unexpected Shodan payload type: {type(data).__name__}",
                status_code=resp.status_code,
            )

        return HostLookupResult.found(data, resp.status_code)

    def _redact(self, text: str) -> str:
        if self.api_key:
            return text.replace(self.api_key, "***")
        return text


def _error_message(resp: httpx.Response) -> Optional[str]:
    """Shodan reports failures as {"error": "..."}; fall back to the raw body."""
    try:
        body = resp.json()
    except ValueError:
        text = resp.text.strip()
        return text[:200] or None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return None

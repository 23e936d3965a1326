from typing import Any, Literal, Optional

from pydantic import BaseModel


class ScanRequest(BaseModel):
    # Left untyped on purpose: the relay reports a missing or non-string
    # target itself, with a 400 instead of FastAPI's 422.
    target: Any = None


class ServiceBanner(BaseModel):
    """One service/banner entry reported by Shodan for the host."""
    port: Optional[int] = None
    transport: Optional[str] = None
    product: Optional[str] = None
    version: Optional[str] = None
    banner: Optional[str] = None
    http: Optional[dict[str, Any]] = None


class HostScanResponse(BaseModel):
    found: Literal[True] = True
    ip: Optional[str] = None
    org: Optional[str] = None
    isp: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    last_update: Optional[str] = None
    ports: list[int] = []
    hostnames: list[str] = []
    os: Optional[str] = None
    services: list[ServiceBanner] = []
    vulns: list[str] = []
    raw: dict[str, Any] = {}


class HostNotFoundResponse(BaseModel):
    found: Literal[False] = False
    message: str = "No data for this IP"


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None

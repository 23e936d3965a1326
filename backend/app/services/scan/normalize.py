# backend/app/services/scan/normalize.py
from typing import Any, Optional

from app.schemas.scan import HostScanResponse, ServiceBanner


def _first(data: dict[str, Any], *keys: str) -> Any:
    """First value among keys that is present and not null/empty."""
    for key in keys:
        value = data.get(key)
        if value is not None and value != "":
            return value
    return None


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _port(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return None


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _ports(value: Any) -> list[int]:
    ports = (_port(p) for p in _as_list(value))
    return [p for p in ports if p is not None]


def _texts(value: Any) -> list[str]:
    return [_text(v) for v in _as_list(value) if v is not None]


def _vuln_ids(vulns: Any) -> list[str]:
    # Shodan sends vulns either keyed by CVE id or as a plain list
    if isinstance(vulns, dict):
        return [str(k) for k in vulns.keys()]
    return _texts(vulns)


def _service(entry: dict[str, Any]) -> ServiceBanner:
    http = entry.get("http")
    return ServiceBanner(
        port=_port(entry.get("port")),
        transport=_text(entry.get("transport")),
        product=_text(_first(entry, "product")),
        version=_text(_first(entry, "version")),
        banner=_text(_first(entry, "data", "banner")),
        http=http if isinstance(http, dict) and http else None,
    )


def normalize_host(data: dict[str, Any], ip: Optional[str] = None) -> HostScanResponse:
    """
    Reshape a Shodan host payload into the relay's response schema.
    Values of an unexpected type are coerced to text or dropped, so any
    JSON object yields a record. The payload itself is passed through
    untouched as `raw`.
    """
    return HostScanResponse(
        found=True,
        ip=_text(_first(data, "ip_str")) or ip,
        org=_text(_first(data, "org")),
        isp=_text(_first(data, "isp")),
        country=_text(_first(data, "country_name", "country_code", "country")),
        city=_text(_first(data, "city")),
        latitude=_number(data.get("latitude")),
        longitude=_number(data.get("longitude")),
        last_update=_text(_first(data, "last_update", "timestamp")),
        ports=_ports(data.get("ports")),
        hostnames=_texts(data.get("hostnames")),
        os=_text(_first(data, "os")),
        services=[_service(s) for s in _as_list(data.get("data")) if isinstance(s, dict)],
        vulns=_vuln_ids(data.get("vulns")),
        raw=data,
    )

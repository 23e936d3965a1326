# backend/app/services/scan/relay.py
import logging
from ipaddress import IPv4Network
from typing import Any, Iterable, Union

from app.core.errors import TargetValidationError, UpstreamError
from app.schemas.scan import HostNotFoundResponse, HostScanResponse
from app.services.scan.normalize import normalize_host
from app.services.scan.shodan_client import LookupStatus, ShodanHostClient
from app.services.scan.target import validate_target

logger = logging.getLogger(__name__)


class ScanRelay:
    """validate -> Shodan lookup -> normalize, once per request."""

    def __init__(self, client: ShodanHostClient, allowlist: Iterable[IPv4Network] = ()) -> None:
        self.client = client
        self.allowlist = list(allowlist)

    async def scan(self, target: Any) -> Union[HostScanResponse, HostNotFoundResponse]:
        try:
            ip = validate_target(target, self.allowlist)
        except TargetValidationError as e:
            logger.info("Rejected scan target %r: %s", target, e.message)
            raise

        result = await self.client.fetch_host(ip)

        if result.status is LookupStatus.NOT_FOUND:
            logger.info("Shodan has no data for %s", ip)
            return HostNotFoundResponse()

        if result.status is LookupStatus.FAILED:
            logger.warning("Shodan error for %s (status=%s): %s", ip, result.status_code, result.detail)
            raise UpstreamError(result.detail or "Unknown Shodan error", upstream_status=result.status_code)

        return normalize_host(result.data or {}, ip)

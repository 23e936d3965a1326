# backend/app/services/scan/target.py
import re
from ipaddress import IPv4Network, ip_address
from typing import Any, Iterable

from app.core.errors import TargetValidationError

# Shape only: octet values are not range-checked, so 999.999.999.999 passes.
IPV4_REGEX = re.compile(r"^(\d{1,3}\.){3}\d{1,3}$")

MISSING_TARGET = "target (IPv4 address) is required"
UNSUPPORTED_FORMAT = "Unsupported target format. Use IPv4 like 45.33.12.101"
OUTSIDE_ALLOWLIST = "Target is outside the allowed address ranges"


def validate_target(target: Any, allowlist: Iterable[IPv4Network] = ()) -> str:
    """
    Check a caller-supplied scan target and return it as a bare IPv4 string.
    Raises TargetValidationError for anything the relay will not forward.
    """
    if not target or not isinstance(target, str):
        raise TargetValidationError(MISSING_TARGET)

    ip = target.strip()
    # fullmatch so a trailing newline is not accepted by "$"
    if not IPV4_REGEX.fullmatch(ip):
        raise TargetValidationError(UNSUPPORTED_FORMAT)

    networks = list(allowlist)
    if networks and not _in_networks(ip, networks):
        raise TargetValidationError(OUTSIDE_ALLOWLIST)

    return ip


def _in_networks(ip: str, networks: list[IPv4Network]) -> bool:
    try:
        addr = ip_address(ip)
    except ValueError:
        # passes the shape check but has an octet > 255
        return False
    return any(addr in net for net in networks)

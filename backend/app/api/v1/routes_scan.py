# backend/app/api/v1/routes_scan.py
import logging
from typing import Union

from fastapi import APIRouter, Depends, Request

from app.core.errors import InternalScanError, ScanError
from app.schemas.scan import ErrorResponse, HostNotFoundResponse, HostScanResponse, ScanRequest
from app.services.scan.relay import ScanRelay

logger = logging.getLogger(__name__)

router = APIRouter()


def get_relay(request: Request) -> ScanRelay:
    return request.app.state.relay


@router.post(
    "/scan",
    response_model=Union[HostScanResponse, HostNotFoundResponse],
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    tags=["scan"],
)
async def scan_host(
    payload: ScanRequest,
    relay: ScanRelay = Depends(get_relay),
) -> Union[HostScanResponse, HostNotFoundResponse]:
    """
    Look up a single IPv4 address on Shodan and return the normalized host record.
    """
    try:
        return await relay.scan(payload.target)
    except ScanError:
        raise
    except Exception as e:
        logger.exception("Unexpected error scanning %r", payload.target)
        raise InternalScanError(str(e)) from e

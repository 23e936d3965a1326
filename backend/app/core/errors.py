# backend/app/core/errors.py
from typing import Any, Optional


class ScanError(Exception):
    """Base for failures that are turned into a JSON error response."""

    status_code: int = 500
    error: str = "internal_server_error"

    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error}
        if self.detail is not None:
            payload["detail"] = self.detail
        return payload


class TargetValidationError(ScanError):
    status_code = 400

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.message}


class UpstreamError(ScanError):
    """Shodan could not be queried. Always reported to the caller as 502."""

    status_code = 502
    error = "Error querying Shodan"

    def __init__(self, detail: str, upstream_status: Optional[int] = None) -> None:
        super().__init__(detail, detail=detail)
        self.upstream_status = upstream_status


class InternalScanError(ScanError):
    status_code = 500
    error = "internal_server_error"

    def __init__(self, detail: str) -> None:
        super().__init__(detail, detail=detail)

"""Typed client-side exception hierarchy for LaMetric local API calls."""

from __future__ import annotations

from typing import Any


class LaMetricClientError(RuntimeError):
    """Base error for LaMetric client operations."""

    category = "INTERNAL_ERROR"

    def __init__(
        self,
        *,
        action: str,
        detail: str,
        status_code: int | None = None,
        reason: str | None = None,
    ) -> None:
        message = f"{action} failed"
        if status_code is not None:
            message = f"{message} with HTTP {status_code}"
            if reason:
                message = f"{message} {reason}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.action = action
        self.detail = detail
        self.status_code = status_code
        self.reason = reason


class DeviceTransportError(LaMetricClientError):
    """The HTTP exchange with the device did not complete."""

    category = "TRANSPORT_ERROR"


class DeviceUnreachableError(DeviceTransportError):
    """Device endpoint could not be reached."""

    category = "DEVICE_UNREACHABLE"


class DeviceTimeoutError(DeviceTransportError):
    """Device request timed out."""

    category = "TIMEOUT"


class ResponseParseError(LaMetricClientError):
    """Device returned a non-empty body that is not JSON."""

    category = "PARSE_ERROR"


class DeviceApplicationError(LaMetricClientError):
    """Device answered with an ``errors`` payload.

    The payload shape is defined by the device firmware, not by this library,
    so it is kept verbatim on :attr:`errors`.
    """

    category = "APPLICATION_ERROR"

    def __init__(
        self,
        *,
        action: str,
        errors: Any,
        status_code: int | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(
            action=action,
            detail=f"device reported errors: {errors!r}",
            status_code=status_code,
            reason=reason,
        )
        self.errors = errors


class DeviceHTTPError(LaMetricClientError):
    """Device answered with a status outside the 2xx range."""

    category = "HTTP_ERROR"


class InvalidPathError(LaMetricClientError, TypeError):
    """Endpoint path is not a string."""

    category = "INVALID_REQUEST"

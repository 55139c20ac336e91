"""Async client API for the LaMetric Time local REST interface."""

from .exceptions import (
    DeviceApplicationError,
    DeviceHTTPError,
    DeviceTimeoutError,
    DeviceTransportError,
    DeviceUnreachableError,
    InvalidPathError,
    LaMetricClientError,
    ResponseParseError,
)
from .http import DEFAULT_BLUETOOTH_NAME, LaMetricLocal

__all__ = [
    "DEFAULT_BLUETOOTH_NAME",
    "DeviceApplicationError",
    "DeviceHTTPError",
    "DeviceTimeoutError",
    "DeviceTransportError",
    "DeviceUnreachableError",
    "InvalidPathError",
    "LaMetricClientError",
    "LaMetricLocal",
    "ResponseParseError",
]

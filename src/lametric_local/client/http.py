"""HTTP client for the LaMetric Time local REST API."""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Mapping, Sequence
from typing import Any

import httpx

from lametric_local.core.config import ClientConfig, build_config

from .exceptions import (
    DeviceApplicationError,
    DeviceHTTPError,
    DeviceTimeoutError,
    DeviceUnreachableError,
    InvalidPathError,
    ResponseParseError,
)

logger = logging.getLogger(__name__)

DEFAULT_BLUETOOTH_NAME = "lametric-local"


class LaMetricLocal:
    """Async client for one device's local API.

    Every endpoint method builds its URL eagerly and returns an awaitable, so a
    bad path raises at call time while network and response failures surface
    when the result is awaited.
    """

    def __init__(
        self,
        options: Mapping[str, Any] | ClientConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = build_config(options)
        self._headers = self._config.request_headers
        self._client_options = self._config.http_client_options()
        self._transport = transport

    @property
    def options(self) -> ClientConfig:
        """Effective configuration for this client."""
        return self._config

    def build_endpoint(self, path: str) -> str:
        """Return the absolute URL for an API path relative to the version root."""
        if not isinstance(path, str):
            raise InvalidPathError(
                action="build endpoint",
                detail=f"path must be a string, got {type(path).__name__}",
            )
        if path.startswith("/"):
            path = path[1:]
        base_url = self._config.base_url or ""
        return f"{base_url}/api/{self._config.api_version}/{path}"

    def request(self, method: str, path: str, params: Any = None) -> Awaitable[Any]:
        """Build the endpoint now and return an awaitable for the normalized result."""
        url = self.build_endpoint(path)
        return self._dispatch(method.lower(), url, params)

    def get(self, path: str, params: Any = None) -> Awaitable[Any]:
        return self.request("get", path, params)

    def post(self, path: str, params: Any = None) -> Awaitable[Any]:
        return self.request("post", path, params)

    def put(self, path: str, params: Any = None) -> Awaitable[Any]:
        return self.request("put", path, params)

    def delete(self, path: str, params: Any = None) -> Awaitable[Any]:
        return self.request("delete", path, params)

    def get_api_version(self) -> Awaitable[Any]:
        """Fetch the API version descriptor."""
        return self.get("")

    def get_device_state(self, fields: Sequence[str] | None = None) -> Awaitable[Any]:
        """Fetch device state, optionally restricted to some top-level fields."""
        params: dict[str, Any] = {}
        if fields:
            params["fields"] = ",".join(fields)
        return self.get("device", params)

    def get_apps(self) -> Awaitable[Any]:
        return self.get("device/apps")

    def get_app(self, app_package: str) -> Awaitable[Any]:
        return self.get(f"device/apps/{app_package}")

    def switch_to_next_app(self) -> Awaitable[Any]:
        return self.put("device/apps/next")

    def switch_to_previous_app(self) -> Awaitable[Any]:
        return self.put("device/apps/prev")

    def activate_widget(self, app_package: str, widget_id: str) -> Awaitable[Any]:
        return self.put(f"device/apps/{app_package}/widgets/{widget_id}/activate")

    def interact_with_widget(
        self,
        app_package: str,
        widget_id: str,
        action_id: str,
        params: Mapping[str, Any] | None = None,
    ) -> Awaitable[Any]:
        """Send an action to a running widget."""
        return self.post(
            f"device/apps/{app_package}/widgets/{widget_id}/actions",
            {"id": action_id, "params": params or {}},
        )

    def get_notification_queue(self) -> Awaitable[Any]:
        return self.get("device/notifications")

    def push_notification(
        self,
        model: Mapping[str, Any],
        priority: str | None = None,
        icon_type: str | None = None,
        lifetime: int | None = None,
    ) -> Awaitable[Any]:
        """Queue a notification; unset optional fields are left to the device."""
        params: dict[str, Any] = {"model": model}
        if priority:
            params["priority"] = priority
        if icon_type:
            params["icon_type"] = icon_type
        if lifetime:
            params["lifetime"] = lifetime
        return self.post("device/notifications", params)

    def cancel_notification(self, notification_id: int | str) -> Awaitable[Any]:
        return self.delete(f"device/notifications/{notification_id}")

    def get_display_state(self) -> Awaitable[Any]:
        return self.get("device/display")

    def update_display_state(
        self,
        brightness: int | None = None,
        brightness_mode: str | None = None,
        screensaver: Mapping[str, Any] | None = None,
    ) -> Awaitable[Any]:
        params: dict[str, Any] = {}
        if brightness:
            params["brightness"] = brightness
        if brightness_mode:
            params["brightness_mode"] = brightness_mode
        if screensaver:
            params["screensaver"] = screensaver
        return self.put("device/display", params)

    def get_audio_state(self) -> Awaitable[Any]:
        return self.get("device/audio")

    def update_audio_state(self, volume: int) -> Awaitable[Any]:
        return self.put("device/audio", {"volume": volume})

    def get_bluetooth_state(self) -> Awaitable[Any]:
        return self.get("device/bluetooth")

    def update_bluetooth_state(self, active: bool, name: str | None = None) -> Awaitable[Any]:
        return self.put(
            "device/bluetooth",
            {"active": active, "name": name or DEFAULT_BLUETOOTH_NAME},
        )

    def get_wifi_state(self) -> Awaitable[Any]:
        return self.get("device/wifi")

    def _http_client(self) -> httpx.AsyncClient:
        client_options = dict(self._client_options)
        client_options["headers"] = dict(self._headers)
        if self._transport is not None:
            client_options["transport"] = self._transport
        return httpx.AsyncClient(**client_options)

    async def _dispatch(self, method: str, url: str, params: Any) -> Any:
        action = f"{method.upper()} {url}"
        request_kwargs: dict[str, Any] = {}
        if method == "get":
            request_kwargs["params"] = params
        elif params is not None:
            request_kwargs["content"] = json.dumps(params, allow_nan=False)

        logger.debug("sending %s", action)
        http_client = self._http_client()
        try:
            async with http_client:
                response = await http_client.request(method.upper(), url, **request_kwargs)
        except httpx.TimeoutException as exc:
            raise DeviceTimeoutError(action=action, detail=str(exc)) from exc
        except httpx.RequestError as exc:
            raise DeviceUnreachableError(action=action, detail=str(exc)) from exc

        logger.debug("%s answered HTTP %s", action, response.status_code)
        return _normalize_response(response, action=action)


def _normalize_response(response: httpx.Response, *, action: str) -> Any:
    status_code = response.status_code
    reason = response.reason_phrase
    text = response.text

    # An empty body is a valid, empty result.
    if text == "":
        data: Any = {}
    else:
        try:
            data = json.loads(text, parse_constant=_reject_constant)
        except ValueError as exc:
            raise ResponseParseError(
                action=action,
                detail="response body is not valid JSON",
                status_code=status_code,
                reason=reason,
            ) from exc

    if isinstance(data, dict) and "errors" in data:
        raise DeviceApplicationError(
            action=action,
            errors=data["errors"],
            status_code=status_code,
            reason=reason,
        )

    if not 200 <= status_code <= 299:
        raise DeviceHTTPError(
            action=action,
            detail="device returned an error status",
            status_code=status_code,
            reason=reason,
        )
    return data


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")

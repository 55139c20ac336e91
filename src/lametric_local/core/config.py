"""Client option defaults and merging for LaMetric local API clients."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
    field_validator,
)

from lametric_local import __version__

DEFAULT_API_VERSION = "v2"
USER_AGENT = f"lametric-local/{__version__}"

DEFAULT_HEADERS: dict[str, str] = {
    "Accept": "*/*",
    "Connection": "close",
    "Content-Type": "application/json",
    "User-Agent": USER_AGENT,
}

DEFAULT_OPTIONS: dict[str, Any] = {
    "base_url": None,
    "basic_authorization": None,
    "api_version": DEFAULT_API_VERSION,
    "request_options": {
        "headers": DEFAULT_HEADERS,
    },
}


class ConfigError(ValueError):
    """Raised when client options cannot be merged or validated."""


def _coerce_text(value: Any) -> Any:
    # Scalars such as httpx.URL or 2 become text; containers are left to fail validation.
    if value is None or isinstance(value, (str, bytes, Mapping, list, tuple, set)):
        return value
    return str(value)


TextValue = Annotated[str, BeforeValidator(_coerce_text)]


class RequestOptions(BaseModel):
    """Defaults applied to every HTTP call made by one client.

    Keys other than ``headers`` are kept and handed to ``httpx.AsyncClient``.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    headers: Mapping[TextValue, TextValue] = Field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_HEADERS))
    )

    @field_validator("headers", mode="after")
    @classmethod
    def _freeze_headers(cls, headers: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(headers))

    @field_serializer("headers")
    def _dump_headers(self, headers: Mapping[str, str]) -> dict[str, str]:
        return dict(headers)


class ClientConfig(BaseModel):
    """Effective client configuration, fixed for the lifetime of a client."""

    model_config = ConfigDict(extra="allow", frozen=True)

    base_url: TextValue | None = None
    basic_authorization: TextValue | None = None
    api_version: TextValue = DEFAULT_API_VERSION
    request_options: RequestOptions = Field(default_factory=RequestOptions)

    @property
    def request_headers(self) -> dict[str, str]:
        """Merged request headers, with basic auth layered on top."""
        headers = dict(self.request_options.headers)
        if self.basic_authorization:
            headers["Authorization"] = f"Basic {self.basic_authorization}"
        return headers

    def http_client_options(self) -> dict[str, Any]:
        """Extra request options forwarded to ``httpx.AsyncClient``."""
        return dict(self.request_options.model_extra or {})


def build_config(options: Mapping[str, Any] | ClientConfig | None = None) -> ClientConfig:
    """Merge caller options over the defaults and validate the result.

    Nested mappings are copied as they are merged; leaf values such as an
    ``ssl.SSLContext`` are kept by reference.
    """
    if isinstance(options, ClientConfig):
        return options

    merged = _copy_mappings(DEFAULT_OPTIONS)
    if options is not None:
        if not isinstance(options, Mapping):
            raise ConfigError(f"options must be a mapping, got {type(options).__name__}")
        _deep_merge_dict(merged, options)

    try:
        return ClientConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"invalid client options: {exc}") from exc


def _copy_mappings(value: Mapping[str, Any]) -> dict[str, Any]:
    return {
        key: _copy_mappings(item) if isinstance(item, Mapping) else item
        for key, item in value.items()
    }


def _deep_merge_dict(target: dict[str, Any], updates: Mapping[str, Any]) -> None:
    for key, value in updates.items():
        existing = target.get(key)
        if isinstance(existing, dict) and isinstance(value, Mapping):
            _deep_merge_dict(existing, value)
            continue
        target[key] = _copy_mappings(value) if isinstance(value, Mapping) else value

# Copyright (c) 2024 Airbyte, Inc., all rights reserved.
"""These internal functions are used to interact with the Airbyte API over HTTP.

All HTTP traffic in the provider goes through `ApiClient.do_request()`, so that auth header
normalization, fixed headers, timeouts, and transport-failure reporting live in one place.
Modules outside of this file should not call `requests` directly.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import TYPE_CHECKING, Any

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from requests.structures import CaseInsensitiveDict

from airbyte_provider import constants
from airbyte_provider.exceptions import AirbyteApiContentError, AirbyteTransportError
from airbyte_provider.secrets import SecretString


if TYPE_CHECKING:
    from collections.abc import Mapping


logger = logging.getLogger("airbyte_provider")


def status_ok(status_code: int) -> bool:
    """Check if a status code is OK."""
    return status_code >= 200 and status_code < 300  # noqa: PLR2004  # allow inline magic numbers


def normalize_bearer_token(token: str | None) -> str:
    """Return the `Authorization` header value for a token.

    Empty input yields an empty string. Values that already start with `Bearer` are returned
    as-is; anything else gets the `Bearer ` prefix.
    """
    if not token:
        return ""

    if token.startswith(constants.BEARER_PREFIX):
        return token

    return f"{constants.BEARER_PREFIX} {token}"


class ApiValidationError(BaseModel):
    """A single field-level validation error reported by the Airbyte API."""

    model_config = ConfigDict(populate_by_name=True)

    property_path: str | None = Field(default=None, alias="propertyPath")
    invalid_value: str | None = Field(default=None, alias="invalidValue")
    message: str | None = None


class ApiErrorEnvelope(BaseModel):
    """The error body returned by the Airbyte API for non-2xx responses.

    Any field may be missing or `null`.
    """

    model_config = ConfigDict(populate_by_name=True)

    message: str | None = None
    exception_class_name: str | None = Field(default=None, alias="exceptionClassName")
    exception_stack: list[str] | None = Field(default=None, alias="exceptionStack")
    validation_errors: list[ApiValidationError] | None = Field(
        default=None,
        alias="validationErrors",
    )


def decode_api_error(body: bytes | str) -> str:
    """Extract a readable message from an Airbyte API error body.

    The upstream appends JSON parser location details (`at [Source: ...]`) to some messages;
    everything from that marker onwards is dropped and the rest is stripped.

    Raises:
        AirbyteApiContentError: If the body is not a JSON error envelope.
    """
    try:
        envelope = ApiErrorEnvelope.model_validate_json(body)
    except ValidationError as ex:
        raise AirbyteApiContentError(
            message="content type mismatch or invalid provider api host or path",
            original_exception=ex,
        ) from ex

    return (envelope.message or "").split(constants.API_ERROR_STACK_MARKER, 1)[0].strip()


@dataclass
class ApiResponse:
    """A fully buffered response from the Airbyte API."""

    body: bytes
    status_code: int
    status_text: str
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """True when the status code is in the 2xx range."""
        return status_ok(self.status_code)


class ApiClient:
    """A thin HTTP client for the Airbyte API.

    One client is created per provider configuration and shared with every resource service
    configured from it. Requests are blocking, with a fixed timeout and no retries.
    """

    def __init__(
        self,
        host: str,
        authorization: str | None = None,
        *,
        timeout: float = constants.DEFAULT_TIMEOUT_SECS,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the client."""
        self.host = host
        self.authorization = SecretString(authorization or "")
        self.timeout = timeout
        self._session = session or requests.Session()

    def __repr__(self) -> str:
        return f"ApiClient(host={self.host!r}, authorization={self.authorization!r})"

    def url(self, path: str) -> str:
        """Join the host with an endpoint path."""
        return self.host.rstrip("/") + "/" + path.lstrip("/")

    def _build_headers(
        self,
        headers: Mapping[str, str] | None,
    ) -> CaseInsensitiveDict[str]:
        request_headers: CaseInsensitiveDict[str] = CaseInsensitiveDict()
        if self.authorization:
            # Normalized on every call, in case the credential was swapped after construction.
            self.authorization = SecretString(normalize_bearer_token(self.authorization))
            request_headers["Authorization"] = self.authorization

        request_headers["Accept"] = "*/*"
        request_headers["User-Agent"] = constants.USER_AGENT
        request_headers["Content-Type"] = "application/json"

        # Caller-supplied headers win over the fixed ones.
        request_headers.update(headers or {})
        return request_headers

    def do_request(
        self,
        method: str,
        url: str,
        body: bytes | str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> ApiResponse:
        """Send a request and return the buffered response.

        Any non-2xx status is returned normally; interpreting it is up to the caller.

        Raises:
            AirbyteTransportError: If no response could be received or read. The error carries
                the synthetic status code 500 to keep it distinct from a real HTTP 500 response,
                which is returned without raising.
        """
        request_headers = self._build_headers(headers)
        logger.debug("Sending %s request to %s", method, url)
        try:
            response = self._session.request(
                method=method,
                url=url,
                data=body or None,
                headers=dict(request_headers),
                timeout=self.timeout,
            )
            content = response.content
        except requests.RequestException as ex:
            raise AirbyteTransportError(
                method=method,
                url=url,
                status_code=constants.TRANSPORT_ERROR_STATUS_CODE,
                status_text=constants.TRANSPORT_ERROR_STATUS_TEXT,
                original_exception=ex,
            ) from ex

        logger.debug("Received status %s from %s %s", response.status_code, method, url)
        return ApiResponse(
            body=content,
            status_code=response.status_code,
            status_text=f"{response.status_code} {response.reason or ''}".strip(),
            headers=dict(response.headers),
        )

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()


def encode_payload(payload: BaseModel | dict[str, Any]) -> bytes:
    """Encode a request payload as JSON using the Airbyte API's field names."""
    if isinstance(payload, BaseModel):
        return payload.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")

    return json.dumps(payload).encode("utf-8")


@lru_cache
def get_api_client(host: str, authorization: str) -> ApiClient:
    """Return the shared API client for one provider configuration.

    The provider and every resource service configured with the same host and credentials
    receive the same client. Different credentials yield a different client.
    """
    return ApiClient(host, authorization)

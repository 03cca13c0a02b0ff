# Copyright (c) 2024 Airbyte, Inc., all rights reserved.
"""Constants shared across the Airbyte Cloud provider codebase."""

from __future__ import annotations


PROVIDER_TYPE_NAME: str = "airbyte"
"""The provider type name. Resource type names are prefixed with this value."""

DISTRIBUTION_NAME: str = "airbyte-cloud-provider"
"""The name of the installed distribution, used to resolve the build version."""

# API Client Constants

DEFAULT_API_HOST: str = "https://api.airbyte.com"
"""The default Airbyte Cloud API host.

Endpoint paths (for example `/v1/sources`) are appended to this value.
"""

DEFAULT_TIMEOUT_SECS: float = 10.0
"""The fixed timeout applied to every request made against the Airbyte API."""

USER_AGENT: str = "PCT"
"""The `User-Agent` header sent with every request."""

BEARER_PREFIX: str = "Bearer"
"""The prefix expected on the `Authorization` header value."""

TRANSPORT_ERROR_STATUS_CODE: int = 500
"""Synthetic status code reported when a request fails before a response is received."""

TRANSPORT_ERROR_STATUS_TEXT: str = "500 Internal Server Error"
"""Synthetic status text reported when a request fails before a response is received."""

API_ERROR_STACK_MARKER: str = "at [Source:"
"""Marker after which upstream error messages carry JSON parser location noise.

Everything from the first occurrence of this marker onwards is dropped from error messages.
"""

SOURCES_PATH: str = "/v1/sources"
"""Collection endpoint for sources."""

DESTINATIONS_PATH: str = "/v1/destinations"
"""Collection endpoint for destinations."""

CONNECTIONS_PATH: str = "/v1/connections"
"""Collection endpoint for connections."""

# Provider Configuration Constants

HOST_ENV_VAR: str = "AIRBYTE_HOST"
"""The environment variable name for the Airbyte API host."""

AUTHORIZATION_ENV_VAR: str = "AIRBYTE_AUTHORIZATION"
"""The environment variable name for the Airbyte API bearer token."""

SECRET_PREFIX: str = "SECRET:"
"""Prefix marking a CLI config value as a reference to a named secret."""

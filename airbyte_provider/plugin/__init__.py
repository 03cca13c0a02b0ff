# Copyright (c) 2024 Airbyte, Inc., all rights reserved.
"""Host framework integration for the Airbyte Cloud provider.

- `airbyte_provider.plugin.provider` holds the provider service.
- `airbyte_provider.plugin.resources` holds the resource services, one per resource kind.
- `airbyte_provider.plugin.server` runs the stdio server loop.
"""

from __future__ import annotations

from airbyte_provider.plugin.provider import Provider, ProviderCredentials
from airbyte_provider.plugin.resources import ResourceAdapter, get_resource_factories
from airbyte_provider.plugin.schema import (
    ProviderService,
    ResourceService,
    ServiceRequest,
    ServiceResponse,
    error_response,
)
from airbyte_provider.plugin.server import PluginServer, serve


__all__ = [
    "PluginServer",
    "Provider",
    "ProviderCredentials",
    "ProviderService",
    "ResourceAdapter",
    "ResourceService",
    "ServiceRequest",
    "ServiceResponse",
    "error_response",
    "get_resource_factories",
    "serve",
]

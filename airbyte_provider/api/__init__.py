# Copyright (c) 2024 Airbyte, Inc., all rights reserved.
"""Typed access to the Airbyte API resources managed by the provider.

Each resource kind is described by a `ResourceDescriptor`. A `ResourceClient` performs the CRUD
lifecycle for any descriptor.

```python
from airbyte_provider.api import DESCRIPTORS, get_descriptor

stripe = get_descriptor("source_stripe")
print(stripe.path, stripe.update_capability)
```
"""

from __future__ import annotations

from airbyte_provider import exceptions as exc
from airbyte_provider.api.connections import CONNECTION, ConnectionResource, ConnectionSchedule
from airbyte_provider.api.destinations import (
    DESTINATION_DESCRIPTORS,
    DESTINATION_MYSQL,
    DESTINATION_POSTGRES,
    DestinationMysql,
    DestinationPostgres,
)
from airbyte_provider.api.resources import (
    ApiModel,
    ResourceClient,
    ResourceDescriptor,
    ResourceModel,
    UpdateCapability,
)
from airbyte_provider.api.sources import (
    SOURCE_AMPLITUDE,
    SOURCE_DESCRIPTORS,
    SOURCE_FACEBOOK_MARKETING,
    SOURCE_FRESHDESK,
    SOURCE_GOOGLE_ANALYTICS_V4,
    SOURCE_GOOGLE_SHEETS,
    SOURCE_HUBSPOT,
    SOURCE_PIPEDRIVE,
    SOURCE_SHOPIFY,
    SOURCE_STRIPE,
    SOURCE_ZENDESK_SUPPORT,
    SourceStripe,
)


DESCRIPTORS: dict[str, ResourceDescriptor] = {
    descriptor.name: descriptor
    for descriptor in [*SOURCE_DESCRIPTORS, *DESTINATION_DESCRIPTORS, CONNECTION]
}
"""All supported resource kinds, keyed by kind name."""


def get_descriptor(name: str) -> ResourceDescriptor:
    """Look up a resource kind by name.

    Raises:
        AirbyteUnknownResourceTypeError: If the kind is not supported.
    """
    if name not in DESCRIPTORS:
        raise exc.AirbyteUnknownResourceTypeError(
            resource_type=name,
            available_types=sorted(DESCRIPTORS),
        )

    return DESCRIPTORS[name]


__all__ = [
    "CONNECTION",
    "DESCRIPTORS",
    "DESTINATION_MYSQL",
    "DESTINATION_POSTGRES",
    "SOURCE_AMPLITUDE",
    "SOURCE_FACEBOOK_MARKETING",
    "SOURCE_FRESHDESK",
    "SOURCE_GOOGLE_ANALYTICS_V4",
    "SOURCE_GOOGLE_SHEETS",
    "SOURCE_HUBSPOT",
    "SOURCE_PIPEDRIVE",
    "SOURCE_SHOPIFY",
    "SOURCE_STRIPE",
    "SOURCE_ZENDESK_SUPPORT",
    "ApiModel",
    "ConnectionResource",
    "ConnectionSchedule",
    "DestinationMysql",
    "DestinationPostgres",
    "ResourceClient",
    "ResourceDescriptor",
    "ResourceModel",
    "SourceStripe",
    "UpdateCapability",
    "get_descriptor",
]

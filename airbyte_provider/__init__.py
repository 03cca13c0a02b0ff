# Copyright (c) 2024 Airbyte, Inc., all rights reserved.
"""***Manage Airbyte Cloud sources, destinations and connections as code.***

The Airbyte Cloud provider is a plugin for an infrastructure-as-code host framework. Each
supported Airbyte resource kind is exposed as a resource service with a schema and a CRUD
lifecycle, backed by the Airbyte public API.

## Getting Started

Run the plugin server (this is normally done by the host framework):

```bash
AIRBYTE_AUTHORIZATION=my-token airbyte-provider serve
```

Or drive a resource directly from the command line:

```bash
airbyte-provider resources
airbyte-provider schema airbyte_source_stripe
airbyte-provider create airbyte_source_stripe --plan=./stripe.yaml
```

From Python, the resource clients can be used without the plugin layer:

```python
from airbyte_provider import ApiClient, ResourceClient
from airbyte_provider.api import SOURCE_STRIPE

client = ResourceClient(ApiClient("https://api.airbyte.com", "my-token"), SOURCE_STRIPE)
source = client.read("my-source-id")
```

## Modules

- **`airbyte_provider.api`** - Resource models and the generic CRUD client.
- **`airbyte_provider.plugin`** - Provider and resource services, and the plugin server.
- **`airbyte_provider.secrets`** - Resolving credentials from the environment.
- **`airbyte_provider.exceptions`** - The provider's exception hierarchy.
"""

from __future__ import annotations

from airbyte_provider import api, exceptions, plugin, secrets
from airbyte_provider._util.api_util import ApiClient, ApiResponse
from airbyte_provider.api import ResourceClient, ResourceDescriptor, UpdateCapability
from airbyte_provider.plugin import Provider, ResourceAdapter
from airbyte_provider.secrets import get_secret
from airbyte_provider.version import get_version


__version__ = get_version()

__all__ = [
    # Modules
    "api",
    "exceptions",
    "plugin",
    "secrets",
    # Classes
    "ApiClient",
    "ApiResponse",
    "Provider",
    "ResourceAdapter",
    "ResourceClient",
    "ResourceDescriptor",
    "UpdateCapability",
    # Functions
    "get_secret",
    "get_version",
]

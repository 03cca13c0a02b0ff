# Copyright (c) 2024 Airbyte, Inc., all rights reserved.
"""Resource services, translating host framework payloads into Airbyte API calls.

One `ResourceAdapter` serves each resource kind. Adapters are created unconfigured, receive the
provider credentials through `configure()`, and then run the CRUD lifecycle:

`create` -> `read`* -> (`update` -> `read`*)* -> `delete`

The state written by every lifecycle call is the plan (or the prior state) overlaid with the
fields reported by the API. Sensitive configuration values always come from the plan, since the
API masks them when echoing them back.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING

import pendulum
from overrides import overrides

from airbyte_provider import exceptions as exc
from airbyte_provider._util.api_util import get_api_client
from airbyte_provider.api import DESCRIPTORS, ResourceClient, UpdateCapability
from airbyte_provider.plugin.provider import ProviderCredentials
from airbyte_provider.plugin.schema import (
    ResourceService,
    ServiceRequest,
    ServiceResponse,
    decode,
    encode,
    schema_from_model,
)


if TYPE_CHECKING:
    from collections.abc import Callable

    from airbyte_provider._util.api_util import ApiClient
    from airbyte_provider.api import ResourceDescriptor, ResourceModel


logger = logging.getLogger("airbyte_provider")

RFC850_FORMAT = "dddd, DD-MMM-YY HH:mm:ss zz"
"""Pendulum format string for RFC 850 timestamps, e.g. `Monday, 02-Jan-06 15:04:05 UTC`."""


def last_updated_timestamp() -> str:
    """Return the current time as an RFC 850 timestamp."""
    return pendulum.now().format(RFC850_FORMAT)


class ResourceAdapter(ResourceService):
    """The resource service for one Airbyte resource kind."""

    def __init__(
        self,
        descriptor: ResourceDescriptor,
        client: ApiClient | None = None,
    ) -> None:
        """Initialize the adapter.

        If `client` is provided, the adapter is usable without calling `configure()`.
        """
        self.descriptor = descriptor
        self._resource_client: ResourceClient | None = (
            ResourceClient(client, descriptor) if client else None
        )

    def __repr__(self) -> str:
        return f"ResourceAdapter(kind={self.descriptor.name!r})"

    @property
    def resource_client(self) -> ResourceClient:
        """The API client for this resource kind.

        Raises:
            AirbyteProviderNotConfiguredError: If `configure()` has not been called.
        """
        if self._resource_client is None:
            raise exc.AirbyteProviderNotConfiguredError(
                resource_type=self.descriptor.name,
            )

        return self._resource_client

    def _load(self, contents: str) -> ResourceModel:
        return self.descriptor.model.from_state(decode(contents))

    def _state_response(
        self,
        state: ResourceModel,
        *,
        timestamped: bool = True,
    ) -> ServiceResponse:
        return ServiceResponse(
            state_id=state.resource_id or "",
            state_contents=encode(state.to_state()),
            state_last_updated=last_updated_timestamp() if timestamped else "",
        )

    @overrides
    def metadata(self, req: ServiceRequest) -> ServiceResponse:
        return ServiceResponse(type_name=f"{req.type_name}_{self.descriptor.name}")

    @overrides
    def configure(self, req: ServiceRequest) -> ServiceResponse:
        """Attach the API client for the credentials published by the provider."""
        creds = ProviderCredentials.decode(req.resource_data)
        self._resource_client = ResourceClient(
            get_api_client(creds.host, creds.authorization),
            self.descriptor,
        )
        return ServiceResponse()

    @overrides
    def schema(self) -> ServiceResponse:
        title = self.descriptor.name.replace("_", " ").title()
        resource_schema = schema_from_model(
            self.descriptor.model,
            description=f"{title} resource for Airbyte",
        )
        return ServiceResponse(schema_contents=resource_schema.encode())

    @overrides
    def create(self, req: ServiceRequest) -> ServiceResponse:
        client = self.resource_client
        plan = self._load(req.plan_contents)
        created = client.create(plan)
        state = plan.merge_server_fields(created)
        logger.info("Created %s '%s'.", self.descriptor.name, state.resource_id)
        return self._state_response(state)

    @overrides
    def read(self, req: ServiceRequest) -> ServiceResponse:
        client = self.resource_client
        state = self._load(req.state_contents)
        if not req.state_id:
            # Nothing has been created yet.
            return ServiceResponse(state_id="", state_contents=req.state_contents)

        current = client.read(req.state_id)
        state = state.with_identity(req.state_id).merge_server_fields(current)
        return self._state_response(state, timestamped=False)

    @overrides
    def update(self, req: ServiceRequest) -> ServiceResponse:
        """Apply the plan, or refresh the resource when its kind cannot be updated.

        For kinds that cannot be updated, the state is rebuilt from the prior state (or the
        server's view when there is none), so unapplied plan values are never reported.
        """
        client = self.resource_client
        resource_id = req.plan_id or req.state_id
        plan = self._load(req.plan_contents).with_identity(resource_id)
        current = client.update(plan)

        if self.descriptor.update_capability == UpdateCapability.READ_ONLY_UPDATE:
            base = (
                self._load(req.state_contents).with_identity(resource_id)
                if req.state_contents
                else current
            )
            return self._state_response(base.merge_server_fields(current))

        state = plan.merge_server_fields(current)
        logger.info("Updated %s '%s'.", self.descriptor.name, state.resource_id)
        return self._state_response(state)

    @overrides
    def delete(self, req: ServiceRequest) -> ServiceResponse:
        self.resource_client.delete(req.state_id)
        logger.info("Deleted %s '%s'.", self.descriptor.name, req.state_id)
        return ServiceResponse()


def get_resource_factories() -> list[Callable[[], ResourceService]]:
    """Return a factory for every supported resource kind, in registration order."""
    return [partial(ResourceAdapter, descriptor) for descriptor in DESCRIPTORS.values()]

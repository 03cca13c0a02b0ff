# Copyright (c) 2024 Airbyte, Inc., all rights reserved.
"""The connection resource kind, linking a source to a destination."""

from __future__ import annotations

from typing import ClassVar

from airbyte_provider import constants
from airbyte_provider.api.resources import (
    ApiModel,
    ResourceDescriptor,
    ResourceModel,
    UpdateCapability,
    api_field,
)


class ConnectionSchedule(ApiModel):
    schedule_type: str = api_field("Schedule Type", alias="scheduleType")
    cron_expression: str | None = api_field(
        "Cron Expression",
        alias="cronExpression",
        default=None,
    )


class ConnectionResource(ResourceModel):
    """A sync connection between a source and a destination.

    The stream catalog and operator configuration are left to the API's defaults.
    """

    id_field: ClassVar[str] = "connection_id"

    name: str = api_field("Name")
    source_id: str = api_field("Source ID", alias="sourceId")
    destination_id: str = api_field("Destination ID", alias="destinationId")
    connection_id: str | None = api_field(
        "Connection ID",
        alias="connectionId",
        default=None,
        computed=True,
    )
    data_residency: str | None = api_field("Data Residency", alias="dataResidency", default=None)
    namespace_definition: str | None = api_field(
        "Namespace Definition",
        alias="namespaceDefinition",
        default=None,
    )
    namespace_format: str | None = api_field(
        "Namespace Format",
        alias="namespaceFormat",
        default=None,
    )
    non_breaking_schema_updates_behavior: str | None = api_field(
        "Non-Breaking Schema Updates Behavior",
        alias="nonBreakingSchemaUpdatesBehavior",
        default=None,
    )
    prefix: str | None = api_field("Prefix", default=None)
    status: str | None = api_field("Status", default=None)
    schedule: ConnectionSchedule = api_field(
        "Schedule",
        default_factory=lambda: ConnectionSchedule(schedule_type="manual"),
    )


CONNECTION = ResourceDescriptor(
    name="connection",
    path=constants.CONNECTIONS_PATH,
    model=ConnectionResource,
    update_capability=UpdateCapability.UNSUPPORTED,
)

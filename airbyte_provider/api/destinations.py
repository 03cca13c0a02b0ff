# Copyright (c) 2024 Airbyte, Inc., all rights reserved.
"""Destination resource kinds supported by the provider."""

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


class DestinationResource(ResourceModel):
    """Fields shared by every destination resource."""

    id_field: ClassVar[str] = "destination_id"

    name: str = api_field("Name")
    destination_id: str | None = api_field(
        "Destination ID",
        alias="destinationId",
        default=None,
        computed=True,
    )
    workspace_id: str = api_field("Workspace ID", alias="workspaceId")


# MySQL


class DestinationMysqlConfiguration(ApiModel):
    destination_type: str = api_field("Destination Type", alias="destinationType", default="mysql")
    host: str = api_field("Host")
    username: str = api_field("Username")
    password: str = api_field("Password", sensitive=True)
    database: str = api_field("Database")
    port: int = api_field("Port", default=3306)


class DestinationMysql(DestinationResource):
    configuration: DestinationMysqlConfiguration = api_field(
        "Connection configuration",
        default_factory=DestinationMysqlConfiguration,
    )


# Postgres


class PostgresSslMode(ApiModel):
    mode: str = api_field("SSL Mode", default="disable")


class PostgresTunnelMethod(ApiModel):
    tunnel_method: str = api_field("Tunnel Method", default="NO_TUNNEL")


class DestinationPostgresConfiguration(ApiModel):
    destination_type: str = api_field(
        "Destination Type",
        alias="destinationType",
        default="postgres",
    )
    host: str = api_field("Host")
    username: str = api_field("Username")
    password: str = api_field("Password", sensitive=True)
    database: str = api_field("Database")
    port: int = api_field("Port", default=5432)
    schema_: str = api_field("Default Schema", alias="schema", default="public")
    ssl_mode: PostgresSslMode = api_field("SSL Mode", default_factory=PostgresSslMode)
    tunnel_method: PostgresTunnelMethod = api_field(
        "SSH Tunnel Method",
        default_factory=PostgresTunnelMethod,
    )


class DestinationPostgres(DestinationResource):
    configuration: DestinationPostgresConfiguration = api_field(
        "Connection configuration",
        default_factory=DestinationPostgresConfiguration,
    )


# Descriptors

DESTINATION_MYSQL = ResourceDescriptor(
    name="destination_mysql",
    path=constants.DESTINATIONS_PATH,
    model=DestinationMysql,
    update_capability=UpdateCapability.UNSUPPORTED,
)
DESTINATION_POSTGRES = ResourceDescriptor(
    name="destination_postgres",
    path=constants.DESTINATIONS_PATH,
    model=DestinationPostgres,
    update_capability=UpdateCapability.UNSUPPORTED,
)

DESTINATION_DESCRIPTORS: list[ResourceDescriptor] = [
    DESTINATION_MYSQL,
    DESTINATION_POSTGRES,
]
"""All supported destination kinds."""

# Copyright (c) 2024 Airbyte, Inc., all rights reserved.
"""The Airbyte provider service.

The provider validates the API host and credentials, creates the API client, and republishes the
credentials to every resource service through `resource_data`.

Missing settings fall back to the `AIRBYTE_HOST` and `AIRBYTE_AUTHORIZATION` secrets, which are
looked up in environment variables and then in a `.env` file.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from overrides import overrides
from pydantic import BaseModel, ValidationError

from airbyte_provider import constants
from airbyte_provider import exceptions as exc
from airbyte_provider._util.api_util import get_api_client
from airbyte_provider.plugin.schema import (
    ProviderService,
    Schema,
    ServiceRequest,
    ServiceResponse,
    StringAttribute,
    decode,
)
from airbyte_provider.secrets import try_get_secret


if TYPE_CHECKING:
    from collections.abc import Mapping

    from airbyte_provider._util.api_util import ApiClient


logger = logging.getLogger("airbyte_provider")


class ProviderCredentials(BaseModel):
    """The provider settings, as configured and as handed to resource services."""

    host: str = ""
    authorization: str = ""

    def encode(self) -> str:
        return self.model_dump_json()

    @classmethod
    def decode(cls, resource_data: str) -> ProviderCredentials:
        """Decode credentials published by the provider.

        Raises:
            AirbyteProviderInputError: If the data is empty or malformed.
        """
        if not resource_data:
            raise exc.AirbyteProviderInputError(
                message="no data provided to configure resource",
            )

        try:
            creds = cls.model_validate_json(resource_data)
        except ValidationError as ex:
            raise exc.AirbyteProviderInputError(
                message="malformed data provided to configure resource",
                original_exception=ex,
            ) from ex

        if not creds.host or not creds.authorization:
            raise exc.AirbyteProviderInputError(
                message="malformed data provided to configure resource",
            )

        return creds


class Provider(ProviderService):
    """The Airbyte Cloud provider."""

    def __init__(self) -> None:
        self.client: ApiClient | None = None
        self.resource_services: dict[str, str] = {}

    @overrides
    def metadata(self, req: ServiceRequest) -> ServiceResponse:
        return ServiceResponse(type_name=constants.PROVIDER_TYPE_NAME)

    @overrides
    def schema(self) -> ServiceResponse:
        provider_schema = Schema(
            description="Airbyte provider plugin",
            attributes={
                "host": StringAttribute(
                    description=(
                        "URI for Airbyte API. May also be provided via "
                        f"{constants.HOST_ENV_VAR} environment variable."
                    ),
                    required=True,
                ),
                "authorization": StringAttribute(
                    description=(
                        "Bearer Token for airbyte provider. May also be provided via "
                        f"{constants.AUTHORIZATION_ENV_VAR} environment variable."
                    ),
                    required=True,
                    sensitive=True,
                ),
            },
        )
        return ServiceResponse(schema_contents=provider_schema.encode())

    @overrides
    def configure(self, req: ServiceRequest) -> ServiceResponse:
        """Validate the provider settings and publish credentials to resource services.

        Resource services configured from the returned data share this configuration's client.

        Raises:
            AirbyteProviderInputError: If the host or authorization cannot be resolved.
        """
        config = decode(req.config_contents) or {}
        if not isinstance(config, dict):
            raise exc.AirbyteProviderInputError(
                message="Provider configuration must be a JSON object.",
            )

        host = config.get("host") or try_get_secret(constants.HOST_ENV_VAR) or ""
        authorization = (
            config.get("authorization") or try_get_secret(constants.AUTHORIZATION_ENV_VAR) or ""
        )
        if not host or not authorization:
            raise exc.AirbyteProviderInputError(
                message=(
                    "invalid host or credentials received.\n"
                    "Provider is unable to create Airbyte API client."
                ),
            )

        self.client = get_api_client(str(host), str(authorization))
        logger.info("Configured Airbyte API client for host '%s'.", host)

        creds = ProviderCredentials(host=str(host), authorization=str(authorization))
        return ServiceResponse(resource_data=creds.encode())

    @overrides
    def resources(self) -> ServiceResponse:
        return ServiceResponse(resource_services=dict(self.resource_services))

    @overrides
    def update_resource_services(self, resource_services: Mapping[str, str]) -> None:
        if resource_services:
            self.resource_services = dict(resource_services)

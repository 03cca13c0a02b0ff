# Copyright (c) 2024 Airbyte, Inc., all rights reserved.
"""The plugin server, connecting the host framework to the provider services.

Requests and responses are newline-delimited JSON objects on stdin and stdout:

```json
{"id": 1, "service": "provider", "method": "configure", "request": {"config_contents": "..."}}
{"id": 1, "response": {"resource_data": "...", "error": ""}}
```

`service` is either `provider` or a registered resource type name (e.g.
`airbyte_source_stripe`). The server-level `version` method returns the plugin version.

Failures are reported in the `error` field of the response. The server keeps running after
any request error, and exits when stdin is closed.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import TYPE_CHECKING, Any

from airbyte_provider import exceptions as exc
from airbyte_provider.logging import get_global_file_logger
from airbyte_provider.plugin.schema import (
    ServiceRequest,
    ServiceResponse,
    error_response,
)


if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from typing import TextIO

    from airbyte_provider.plugin.schema import ProviderService, ResourceService


logger = logging.getLogger("airbyte_provider")

PROVIDER_SERVICE = "provider"
VERSION_METHOD = "version"

PROVIDER_METHODS = {"metadata", "schema", "configure", "resources"}
RESOURCE_METHODS = {"metadata", "schema", "configure", "create", "read", "update", "delete"}


class PluginServer:
    """Dispatches host framework requests to the provider and its resource services."""

    def __init__(
        self,
        version: str,
        provider: ProviderService,
        resources: Iterable[ResourceService],
    ) -> None:
        self.version = version
        self.provider = provider
        self.provider_type_name = provider.metadata(ServiceRequest()).type_name
        self.resources: dict[str, ResourceService] = {}
        for resource in resources:
            metadata = resource.metadata(ServiceRequest(type_name=self.provider_type_name))
            self.resources[metadata.type_name] = resource

        self.provider.update_resource_services(
            {
                type_name: type_name.removeprefix(f"{self.provider_type_name}_")
                for type_name in self.resources
            }
        )

    def _get_resource(self, type_name: str) -> ResourceService:
        if type_name not in self.resources:
            raise exc.AirbyteUnknownResourceTypeError(
                resource_type=type_name,
                available_types=sorted(self.resources),
            )

        return self.resources[type_name]

    def _call_provider(self, method: str, req: ServiceRequest) -> ServiceResponse:
        if method not in PROVIDER_METHODS:
            raise exc.AirbyteProviderInputError(
                message="Unknown provider method.",
                input_value=method,
            )

        if method == "schema":
            return self.provider.schema()

        if method == "resources":
            return self.provider.resources()

        return getattr(self.provider, method)(req)

    def _call_resource(self, type_name: str, method: str, req: ServiceRequest) -> ServiceResponse:
        resource = self._get_resource(type_name)
        if method not in RESOURCE_METHODS:
            raise exc.AirbyteProviderInputError(
                message="Unknown resource method.",
                input_value=method,
            )

        if method == "schema":
            return resource.schema()

        return getattr(resource, method)(req)

    def dispatch(self, service: str, method: str, req: ServiceRequest) -> ServiceResponse:
        """Call a service method, converting any failure into an error response."""
        try:
            if service == PROVIDER_SERVICE:
                return self._call_provider(method, req)

            return self._call_resource(service, method, req)
        except exc.AirbyteProviderError as ex:
            logger.warning(
                "Request '%s.%s' failed: %s",
                service,
                method,
                ex.safe_logging_dict(),
            )
            return error_response(ex)
        except Exception as ex:
            logger.exception("Unexpected error handling '%s.%s'.", service, method)
            return error_response(ex)

    def handle(self, message: Any) -> dict[str, Any]:  # noqa: ANN401
        """Handle one decoded request message and return the response message."""
        if not isinstance(message, dict):
            return {
                "id": None,
                "response": error_response(
                    exc.AirbyteProviderInputError(message="Request must be a JSON object.")
                ).to_dict(),
            }

        request_id = message.get("id")
        method = str(message.get("method") or "")
        if method == VERSION_METHOD:
            return {"id": request_id, "response": {"version": self.version, "error": ""}}

        request_data = message.get("request")
        if request_data is not None and not isinstance(request_data, dict):
            response = error_response(
                exc.AirbyteProviderInputError(message="Request payload must be a JSON object.")
            )
            return {"id": request_id, "response": response.to_dict()}

        response = self.dispatch(
            service=str(message.get("service") or ""),
            method=method,
            req=ServiceRequest.from_dict(request_data),
        )
        return {"id": request_id, "response": response.to_dict()}

    def handle_line(self, line: str) -> dict[str, Any]:
        """Handle one raw request line."""
        try:
            message = json.loads(line)
        except json.JSONDecodeError as ex:
            logger.warning("Received a malformed request line.")
            return {
                "id": None,
                "response": error_response(
                    exc.AirbyteProviderInputError(
                        message="Request is not valid JSON.",
                        original_exception=ex,
                    )
                ).to_dict(),
            }

        return self.handle(message)

    def run(self, stdin: TextIO, stdout: TextIO) -> None:
        """Serve requests until `stdin` is closed."""
        for line in stdin:
            if not line.strip():
                continue

            stdout.write(json.dumps(self.handle_line(line)) + "\n")
            stdout.flush()


def serve(
    version: str,
    provider_factory: Callable[[], ProviderService],
    resource_factories: Iterable[Callable[[], ResourceService]],
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> None:
    """Register the provider and resource services and serve requests on stdio."""
    get_global_file_logger()
    server = PluginServer(
        version=version,
        provider=provider_factory(),
        resources=[factory() for factory in resource_factories],
    )
    logger.info(
        "Serving provider '%s' version %s with %d resource types.",
        server.provider_type_name,
        version,
        len(server.resources),
    )
    print("Starting Airbyte provider plugin server.", file=sys.stderr)
    try:
        server.run(stdin or sys.stdin, stdout or sys.stdout)
    except KeyboardInterrupt:
        print("Airbyte provider plugin server interrupted by user.", file=sys.stderr)

    print("Airbyte provider plugin server stopped.", file=sys.stderr)

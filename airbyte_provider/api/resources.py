# Copyright (c) 2024 Airbyte, Inc., all rights reserved.
"""Generic CRUD client for Airbyte API resources.

Every managed resource kind (a source, a destination, or a connection) follows the same request
lifecycle against a fixed collection endpoint. Rather than repeating that lifecycle per kind, each
kind is described by a `ResourceDescriptor` and served by one `ResourceClient`.

## Example

```python
from airbyte_provider._util.api_util import ApiClient
from airbyte_provider.api import ResourceClient
from airbyte_provider.api.sources import SOURCE_STRIPE, SourceStripe, SourceStripeConfiguration

client = ResourceClient(ApiClient("https://api.airbyte.com", "my-token"), SOURCE_STRIPE)
source = client.create(
    SourceStripe(
        name="stripe",
        workspace_id="...",
        configuration=SourceStripeConfiguration(
            start_date="2024-01-01",
            client_secret="sk_...",
            account_id="acct_...",
        ),
    )
)
print(source.source_id)
```
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from airbyte_provider import exceptions as exc
from airbyte_provider._util import api_util


if TYPE_CHECKING:
    from collections.abc import Callable

    from pydantic.fields import FieldInfo
    from typing_extensions import Self

    from airbyte_provider._util.api_util import ApiClient, ApiResponse


logger = logging.getLogger("airbyte_provider")


class UpdateCapability(str, Enum):
    """How a resource kind can be updated through the Airbyte API."""

    UPDATABLE = "updatable"
    """The full configuration is replaced with a PUT request."""

    READ_ONLY_UPDATE = "read_only_update"
    """No update endpoint exists. Updates re-read the resource without applying new values."""

    UNSUPPORTED = "unsupported"
    """No update endpoint exists. Updates are rejected with an error."""


def api_field(  # noqa: PLR0913  # Too many arguments
    description: str,
    *,
    alias: str | None = None,
    default: Any = "",
    default_factory: Callable[[], Any] | None = None,
    sensitive: bool = False,
    optional: bool = False,
    computed: bool = False,
) -> Any:
    """Declare a model field along with its provider schema flags.

    Fields are required in the provider schema unless flagged `optional` or `computed`, or
    annotated as accepting `None`.
    """
    schema_flags = {
        "sensitive": sensitive,
        "optional": optional,
        "computed": computed,
    }
    extra: dict[str, Any] = {key: True for key, value in schema_flags.items() if value}
    if default_factory is not None:
        return Field(
            default_factory=default_factory,
            alias=alias,
            description=description,
            json_schema_extra=extra or None,
        )

    return Field(
        default=default,
        alias=alias,
        description=description,
        json_schema_extra=extra or None,
    )


def is_sensitive(field_info: FieldInfo) -> bool:
    """Return True if a field was declared with `api_field(..., sensitive=True)`."""
    flags = field_info.json_schema_extra
    return isinstance(flags, dict) and bool(flags.get("sensitive"))


def state_name(field_name: str) -> str:
    """Return the provider state attribute name for a model field.

    Fields that would shadow pydantic internals carry a trailing underscore in Python only.
    """
    return field_name.rstrip("_")


class ApiModel(BaseModel):
    """Base class for request and response bodies of the Airbyte API.

    Python field names are the attribute names used in provider state. Aliases are the field
    names used on the wire.
    """

    model_config = ConfigDict(populate_by_name=True)

    def to_api_json(self) -> bytes:
        """Encode the model as an Airbyte API request body."""
        return api_util.encode_payload(self)

    def to_state(self) -> dict[str, Any]:
        """Return the model as a provider state dictionary."""
        state: dict[str, Any] = {}
        for name, value in self:
            state[state_name(name)] = value.to_state() if isinstance(value, ApiModel) else value

        return state

    def merge_from(self, server: ApiModel) -> Self:
        """Overlay the values reported by the server onto this model.

        Only fields present in the server's response are copied. Empty values and fields flagged
        `sensitive` are skipped, since the API omits or masks them. Nested models are merged
        field by field.
        """
        own_fields = type(self).model_fields
        server_fields = type(server).model_fields
        update: dict[str, Any] = {}
        for name in server.model_fields_set:
            if name not in own_fields or is_sensitive(server_fields[name]):
                continue

            value = getattr(server, name)
            if value is None or value == "":
                continue

            current = getattr(self, name)
            if isinstance(value, ApiModel):
                if not isinstance(current, ApiModel):
                    # A masked block cannot stand in for one the plan left unset.
                    continue

                value = current.merge_from(value)

            update[name] = value

        return self.model_copy(update=update)


class ResourceModel(ApiModel):
    """Base class for the top-level body of a managed resource."""

    id_field: ClassVar[str]
    """The name of the field holding the upstream-assigned identity."""

    @property
    def resource_id(self) -> str | None:
        """The upstream-assigned identity, or `None` before the resource is created."""
        return getattr(self, self.id_field) or None

    @classmethod
    def id_alias(cls) -> str:
        """The wire name of the identity field."""
        return cls.model_fields[cls.id_field].alias or cls.id_field

    @classmethod
    def from_api_json(cls, body: bytes | str) -> ResourceModel:
        """Decode an Airbyte API response body.

        Raises:
            AirbyteApiContentError: If the body does not match the model.
        """
        try:
            return cls.model_validate_json(body)
        except ValidationError as ex:
            raise exc.AirbyteApiContentError(
                message="Could not decode the Airbyte API response.",
                original_exception=ex,
            ) from ex

    @classmethod
    def from_state(cls, state: dict[str, Any] | None) -> ResourceModel:
        """Build the model from a provider plan or state dictionary.

        Raises:
            AirbyteProviderInputError: If the dictionary does not match the model.
        """
        try:
            return cls.model_validate(state or {})
        except ValidationError as ex:
            raise exc.AirbyteProviderInputError(
                message="Plan or state does not match the resource schema.",
                context={"model": cls.__name__},
                original_exception=ex,
            ) from ex

    def with_identity(self, resource_id: str | None) -> ResourceModel:
        """Return a copy of the model with the identity field set."""
        return self.model_copy(update={self.id_field: resource_id or None})

    def merge_server_fields(self, server: ResourceModel) -> ResourceModel:
        """Overlay the fields reported by the server onto this model.

        Configuration values are refreshed too, except for sensitive ones, which keep the value
        from this model because the API masks them when echoing them back.
        """
        return self.merge_from(server)


ModelT = TypeVar("ModelT", bound=ResourceModel)


@dataclass(frozen=True)
class ResourceDescriptor(Generic[ModelT]):
    """Everything the generic client needs to know about one resource kind."""

    name: str
    """The resource kind, e.g. `source_stripe`. Also used as the resource type name suffix."""

    path: str
    """The collection endpoint, e.g. `/v1/sources`."""

    model: type[ModelT]
    """The pydantic model for request and response bodies."""

    update_capability: UpdateCapability
    """How updates are handled for this kind."""


class ResourceClient(Generic[ModelT]):
    """CRUD operations for one resource kind.

    Every operation is a single blocking round trip. Non-2xx responses are decoded into
    `AirbyteApiError` with the upstream message.
    """

    def __init__(
        self,
        client: ApiClient,
        descriptor: ResourceDescriptor[ModelT],
    ) -> None:
        self.client = client
        self.descriptor = descriptor

    def __repr__(self) -> str:
        return f"ResourceClient(kind={self.descriptor.name!r}, host={self.client.host!r})"

    def _collection_url(self) -> str:
        return self.client.url(self.descriptor.path)

    def _item_url(self, resource_id: str) -> str:
        return self.client.url(f"{self.descriptor.path}/{resource_id}")

    def _raise_api_error(
        self,
        response: ApiResponse,
        resource_id: str | None = None,
    ) -> None:
        message = api_util.decode_api_error(response.body)
        raise exc.AirbyteApiError(
            message=message,
            status_code=response.status_code,
            resource_type=self.descriptor.name,
            resource_id=resource_id,
        )

    def _decode(self, response: ApiResponse, resource_id: str | None = None) -> ModelT:
        if not response.ok:
            self._raise_api_error(response, resource_id)

        return self.descriptor.model.from_api_json(response.body)  # type: ignore[return-value]

    def create(self, config: ModelT) -> ModelT:
        """Create the resource and return it with its server-assigned identity."""
        response = self.client.do_request(
            "POST",
            self._collection_url(),
            config.to_api_json(),
        )
        return self._decode(response)

    def read(self, resource_id: str) -> ModelT:
        """Fetch the resource by identity."""
        response = self.client.do_request("GET", self._item_url(resource_id))
        return self._decode(response, resource_id)

    def update(self, config: ModelT) -> ModelT:
        """Update the resource according to the kind's update capability.

        Raises:
            AirbyteUpdateNotSupportedError: If the kind cannot be updated.
            AirbyteProviderInputError: If the configuration has no identity.
        """
        capability = self.descriptor.update_capability
        if capability == UpdateCapability.UNSUPPORTED:
            raise exc.AirbyteUpdateNotSupportedError(
                message="update resource is not supported",
                resource_type=self.descriptor.name,
                resource_id=config.resource_id,
            )

        resource_id = config.resource_id
        if not resource_id:
            raise exc.AirbyteProviderInputError(
                message="Cannot update a resource without an identity.",
                context={"resource_type": self.descriptor.name},
            )

        if capability == UpdateCapability.READ_ONLY_UPDATE:
            logger.warning(
                "The Airbyte API cannot update '%s' resources. "
                "Refreshing '%s' without applying the new values.",
                self.descriptor.name,
                resource_id,
            )
            return self.read(resource_id)

        response = self.client.do_request(
            "PUT",
            self._item_url(resource_id),
            config.to_api_json(),
        )
        return self._decode(response, resource_id)

    def delete(self, resource_id: str) -> None:
        """Delete the resource by identity."""
        payload = {self.descriptor.model.id_alias(): resource_id}
        response = self.client.do_request(
            "DELETE",
            self._item_url(resource_id),
            api_util.encode_payload(payload),
        )
        if not response.ok:
            self._raise_api_error(response, resource_id)

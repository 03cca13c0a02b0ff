# Copyright (c) 2024 Airbyte, Inc., all rights reserved.
"""Request, response and schema types exchanged with the host framework.

The host framework drives the provider through two service interfaces:

- `ProviderService`, implemented once per provider, which validates provider settings and hands
  credentials down to the resource services.
- `ResourceService`, implemented once per resource kind, which performs the CRUD lifecycle.

All encoded payloads (`config_contents`, `plan_contents`, `state_contents`, `schema_contents`,
`resource_data`) are JSON strings.
"""

from __future__ import annotations

import json
import types
import typing
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field, fields
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel

from airbyte_provider import exceptions as exc
from airbyte_provider.api.resources import state_name


if TYPE_CHECKING:
    from collections.abc import Mapping

    from pydantic.fields import FieldInfo


@dataclass
class ServiceRequest:
    """A single call from the host framework into a provider or resource service."""

    type_name: str = ""
    config_contents: str = ""
    resource_data: str = ""
    plan_id: str = ""
    plan_contents: str = ""
    state_id: str = ""
    state_contents: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> ServiceRequest:
        """Build a request from its wire form, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v or "" for k, v in (data or {}).items() if k in known})


@dataclass
class ServiceResponse:
    """The result of a provider or resource service call."""

    type_name: str = ""
    schema_contents: str = ""
    resource_data: str = ""
    state_id: str = ""
    state_contents: str = ""
    state_last_updated: str = ""
    resource_services: dict[str, str] = field(default_factory=dict)
    error: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the wire form of the response."""
        return asdict(self)


def error_response(ex: Exception) -> ServiceResponse:
    """Wrap an exception as an error response."""
    if isinstance(ex, exc.AirbyteProviderError):
        return ServiceResponse(error=ex.get_message())

    return ServiceResponse(error=str(ex) or type(ex).__name__)


def encode(value: Any) -> str:  # noqa: ANN401
    """Encode a payload as a JSON string."""
    return json.dumps(value, sort_keys=True, default=str)


def decode(contents: str | None) -> Any:  # noqa: ANN401
    """Decode a JSON payload. Empty contents decode to an empty dictionary.

    Raises:
        AirbyteProviderInputError: If the contents are not valid JSON.
    """
    if not contents:
        return {}

    try:
        return json.loads(contents)
    except json.JSONDecodeError as ex:
        raise exc.AirbyteProviderInputError(
            message="Could not decode the request payload as JSON.",
            original_exception=ex,
        ) from ex


# Schema attributes


@dataclass
class Attribute:
    """Base class for schema attributes."""

    attribute_type: ClassVar[str]

    description: str = ""
    required: bool = False
    optional: bool = False
    computed: bool = False
    sensitive: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.attribute_type,
            "description": self.description,
            "required": self.required,
            "optional": self.optional,
            "computed": self.computed,
            "sensitive": self.sensitive,
        }


@dataclass
class StringAttribute(Attribute):
    attribute_type: ClassVar[str] = "string"


@dataclass
class IntAttribute(Attribute):
    attribute_type: ClassVar[str] = "int"


@dataclass
class BoolAttribute(Attribute):
    attribute_type: ClassVar[str] = "bool"


@dataclass
class MapAttribute(Attribute):
    """A nested group of attributes."""

    attribute_type: ClassVar[str] = "map"

    attributes: dict[str, Attribute] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["attributes"] = {
            name: attribute.to_dict() for name, attribute in self.attributes.items()
        }
        return result


@dataclass
class Schema:
    """The attribute tree of a provider or resource."""

    description: str = ""
    attributes: dict[str, Attribute] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "attributes": {
                name: attribute.to_dict() for name, attribute in self.attributes.items()
            },
        }

    def encode(self) -> str:
        return encode(self.to_dict())


_SCALAR_ATTRIBUTES: dict[type, type[Attribute]] = {
    str: StringAttribute,
    int: IntAttribute,
    bool: BoolAttribute,
}


def _unwrap_optional(annotation: Any) -> tuple[Any, bool]:  # noqa: ANN401
    """Split `X | None` into `(X, True)`. Other annotations return `(annotation, False)`."""
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0], True

    return annotation, False


def _attribute_from_field(field_info: FieldInfo) -> Attribute:
    flags: dict[str, Any] = field_info.json_schema_extra or {}  # type: ignore[assignment]
    annotation, nullable = _unwrap_optional(field_info.annotation)
    computed = bool(flags.get("computed"))
    optional = not computed and (bool(flags.get("optional")) or nullable)
    common: dict[str, Any] = {
        "description": field_info.description or "",
        "required": not (optional or computed),
        "optional": optional,
        "computed": computed,
        "sensitive": bool(flags.get("sensitive")),
    }

    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return MapAttribute(attributes=_attributes_from_model(annotation), **common)

    attribute_class = _SCALAR_ATTRIBUTES.get(annotation)
    if attribute_class is None:
        raise exc.AirbyteProviderInternalError(
            message="Unsupported field type in resource model.",
            context={"annotation": repr(annotation)},
        )

    return attribute_class(**common)


def _attributes_from_model(model: type[BaseModel]) -> dict[str, Attribute]:
    return {
        state_name(name): _attribute_from_field(field_info)
        for name, field_info in model.model_fields.items()
    }


def schema_from_model(model: type[BaseModel], description: str) -> Schema:
    """Derive the provider schema for a resource model from its field declarations."""
    return Schema(description=description, attributes=_attributes_from_model(model))


# Service interfaces


class ProviderService(ABC):
    """The provider-level service called by the host framework."""

    @abstractmethod
    def metadata(self, req: ServiceRequest) -> ServiceResponse:
        """Return the provider type name."""
        ...

    @abstractmethod
    def schema(self) -> ServiceResponse:
        """Return the provider configuration schema."""
        ...

    @abstractmethod
    def configure(self, req: ServiceRequest) -> ServiceResponse:
        """Validate provider settings and return the data used to configure resources."""
        ...

    @abstractmethod
    def resources(self) -> ServiceResponse:
        """Return the registered resource services."""
        ...

    @abstractmethod
    def update_resource_services(self, resource_services: Mapping[str, str]) -> None:
        """Replace the registered resource services."""
        ...


class ResourceService(ABC):
    """The service for one resource kind called by the host framework."""

    @abstractmethod
    def metadata(self, req: ServiceRequest) -> ServiceResponse: ...

    @abstractmethod
    def configure(self, req: ServiceRequest) -> ServiceResponse: ...

    @abstractmethod
    def schema(self) -> ServiceResponse: ...

    @abstractmethod
    def create(self, req: ServiceRequest) -> ServiceResponse: ...

    @abstractmethod
    def read(self, req: ServiceRequest) -> ServiceResponse: ...

    @abstractmethod
    def update(self, req: ServiceRequest) -> ServiceResponse: ...

    @abstractmethod
    def delete(self, req: ServiceRequest) -> ServiceResponse: ...

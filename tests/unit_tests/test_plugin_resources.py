# Copyright (c) 2024 Airbyte, Inc., all rights reserved.
"""Unit tests for the resource services."""

from __future__ import annotations

import json
from typing import Any

import pytest
import responses

from airbyte_provider import exceptions as exc
from airbyte_provider._util.api_util import ApiClient
from airbyte_provider.api import (
    DESCRIPTORS,
    DESTINATION_POSTGRES,
    SOURCE_AMPLITUDE,
    SOURCE_HUBSPOT,
    SOURCE_PIPEDRIVE,
    SOURCE_STRIPE,
)
from airbyte_provider.plugin.resources import ResourceAdapter, get_resource_factories
from airbyte_provider.plugin.schema import ServiceRequest


@pytest.fixture
def stripe_adapter(resource_data: str) -> ResourceAdapter:
    adapter = ResourceAdapter(SOURCE_STRIPE)
    adapter.configure(ServiceRequest(resource_data=resource_data))
    return adapter


def test_metadata() -> None:
    response = ResourceAdapter(SOURCE_STRIPE).metadata(ServiceRequest(type_name="airbyte"))

    assert response.type_name == "airbyte_source_stripe"


def test_factories_cover_every_kind() -> None:
    adapters = [factory() for factory in get_resource_factories()]

    assert [adapter.descriptor.name for adapter in adapters] == list(DESCRIPTORS)


@pytest.mark.parametrize(
    "data,message",
    [
        pytest.param("", "no data provided to configure resource", id="empty"),
        pytest.param("not json", "malformed data provided to configure resource", id="not_json"),
        pytest.param(
            '{"host": "", "authorization": "x"}',
            "malformed data provided to configure resource",
            id="missing_host",
        ),
    ],
)
def test_configure_rejects_bad_data(data: str, message: str) -> None:
    with pytest.raises(exc.AirbyteProviderInputError) as ex_info:
        ResourceAdapter(SOURCE_STRIPE).configure(ServiceRequest(resource_data=data))

    assert ex_info.value.get_message() == message


@pytest.mark.parametrize("method", ["create", "read", "update", "delete"])
def test_lifecycle_requires_configure(method: str) -> None:
    adapter = ResourceAdapter(SOURCE_STRIPE)

    with pytest.raises(exc.AirbyteProviderNotConfiguredError):
        getattr(adapter, method)(ServiceRequest(state_id="abc", plan_id="abc"))


def test_schema_flags() -> None:
    schema = json.loads(ResourceAdapter(SOURCE_STRIPE).schema().schema_contents)
    attributes = schema["attributes"]
    configuration = attributes["configuration"]["attributes"]

    assert schema["description"] == "Source Stripe resource for Airbyte"
    assert attributes["source_id"]["computed"] is True
    assert attributes["source_id"]["required"] is False
    assert attributes["name"]["required"] is True
    assert attributes["configuration"]["type"] == "map"
    assert configuration["client_secret"]["sensitive"] is True
    assert configuration["start_date"]["sensitive"] is False
    assert configuration["lookback_window_days"]["type"] == "int"
    assert configuration["lookback_window_days"]["optional"] is True
    assert configuration["lookback_window_days"]["required"] is False


def test_schema_nested_and_renamed_attributes() -> None:
    postgres = json.loads(ResourceAdapter(DESTINATION_POSTGRES).schema().schema_contents)
    pipedrive = json.loads(ResourceAdapter(SOURCE_PIPEDRIVE).schema().schema_contents)

    configuration = postgres["attributes"]["configuration"]["attributes"]
    assert "schema" in configuration
    assert configuration["password"]["sensitive"] is True
    assert configuration["ssl_mode"]["attributes"]["mode"]["type"] == "string"
    assert pipedrive["attributes"]["workspace_id"]["optional"] is True


@pytest.mark.parametrize(
    "descriptor",
    [pytest.param(descriptor, id=name) for name, descriptor in DESCRIPTORS.items()],
)
def test_every_schema_encodes(descriptor) -> None:
    schema = json.loads(ResourceAdapter(descriptor).schema().schema_contents)

    id_attribute = schema["attributes"][descriptor.model.id_field]
    assert id_attribute["computed"] is True


@responses.activate
def test_create_stripe_end_to_end(
    stripe_adapter: ResourceAdapter,
    api_host: str,
    stripe_plan: dict[str, Any],
    stripe_response: dict[str, Any],
) -> None:
    responses.add(responses.POST, f"{api_host}/v1/sources", json=stripe_response, status=200)

    response = stripe_adapter.create(
        ServiceRequest(type_name="airbyte_source_stripe", plan_contents=json.dumps(stripe_plan))
    )

    state = json.loads(response.state_contents)
    assert response.state_id == "src_123"
    assert response.state_last_updated
    assert state["source_id"] == "src_123"
    assert state["name"] == stripe_plan["name"]
    assert state["workspace_id"] == stripe_plan["workspace_id"]
    for key, value in stripe_plan["configuration"].items():
        assert state["configuration"][key] == value


@responses.activate
def test_create_surfaces_api_error(
    stripe_adapter: ResourceAdapter,
    api_host: str,
    stripe_plan: dict[str, Any],
) -> None:
    responses.add(
        responses.POST,
        f"{api_host}/v1/sources",
        json={"message": "workspace not found"},
        status=404,
    )

    with pytest.raises(exc.AirbyteApiError) as ex_info:
        stripe_adapter.create(ServiceRequest(plan_contents=json.dumps(stripe_plan)))

    assert ex_info.value.get_message() == "workspace not found"


@responses.activate
def test_read_refreshes_state(
    stripe_adapter: ResourceAdapter,
    api_host: str,
    stripe_plan: dict[str, Any],
    stripe_response: dict[str, Any],
) -> None:
    stripe_response["name"] = "renamed"
    stripe_response["configuration"]["account_id"] = "acct_CHANGED"
    responses.add(
        responses.GET,
        f"{api_host}/v1/sources/src_123",
        json=stripe_response,
        status=200,
    )
    prior_state = {**stripe_plan, "source_id": "src_123"}

    response = stripe_adapter.read(
        ServiceRequest(state_id="src_123", state_contents=json.dumps(prior_state))
    )

    state = json.loads(response.state_contents)
    assert response.state_id == "src_123"
    assert state["name"] == "renamed"
    assert state["configuration"]["account_id"] == "acct_CHANGED"
    assert state["configuration"]["client_secret"] == "sk_test_123"


@responses.activate
def test_read_without_state_id(
    stripe_adapter: ResourceAdapter,
    stripe_plan: dict[str, Any],
) -> None:
    contents = json.dumps(stripe_plan)

    response = stripe_adapter.read(ServiceRequest(state_contents=contents))

    assert response.state_id == ""
    assert response.state_contents == contents
    assert len(responses.calls) == 0


@responses.activate
def test_update_amplitude(api_client: ApiClient, api_host: str) -> None:
    server_body = {
        "sourceId": "amp_1",
        "name": "amplitude-renamed",
        "workspaceId": "ws_1",
        "configuration": {"sourceType": "amplitude", "api_key": "**********"},
    }
    responses.add(responses.PUT, f"{api_host}/v1/sources/amp_1", json=server_body, status=200)
    plan = {
        "name": "amplitude-renamed",
        "workspace_id": "ws_1",
        "configuration": {
            "start_date": "2024-01-01T00:00:00Z",
            "api_key": "key",
            "secret_key": "secret",
        },
    }

    adapter = ResourceAdapter(SOURCE_AMPLITUDE, client=api_client)
    response = adapter.update(ServiceRequest(plan_id="amp_1", plan_contents=json.dumps(plan)))

    state = json.loads(response.state_contents)
    assert [call.request.method for call in responses.calls] == ["PUT"]
    assert json.loads(responses.calls[0].request.body)["sourceId"] == "amp_1"
    assert response.state_id == "amp_1"
    assert response.state_last_updated
    assert state["name"] == "amplitude-renamed"
    assert state["configuration"]["api_key"] == "key"


HUBSPOT_SERVER_BODY = {
    "sourceId": "hs_1",
    "name": "hubspot",
    "workspaceId": "ws_1",
    "configuration": {
        "sourceType": "hubspot",
        "start_date": "2020-01-01T00:00:00Z",
        "credentials": {
            "credentials_title": "Private App Credentials",
            "access_token": "**********",
        },
    },
}


def _hubspot_state(start_date: str, access_token: str) -> dict[str, Any]:
    return {
        "source_id": "hs_1",
        "name": "hubspot",
        "workspace_id": "ws_1",
        "configuration": {
            "start_date": start_date,
            "credentials": {"access_token": access_token},
        },
    }


@responses.activate
def test_update_hubspot_reports_upstream_values(api_client: ApiClient, api_host: str) -> None:
    responses.add(
        responses.GET,
        f"{api_host}/v1/sources/hs_1",
        json=HUBSPOT_SERVER_BODY,
        status=200,
    )
    adapter = ResourceAdapter(SOURCE_HUBSPOT, client=api_client)

    response = adapter.update(
        ServiceRequest(
            plan_id="hs_1",
            plan_contents=json.dumps(_hubspot_state("2024-06-01T00:00:00Z", "pat-new")),
            state_contents=json.dumps(_hubspot_state("2020-01-01T00:00:00Z", "pat-old")),
        )
    )

    state = json.loads(response.state_contents)
    assert [call.request.method for call in responses.calls] == ["GET"]
    assert response.state_id == "hs_1"
    assert state["configuration"]["start_date"] == "2020-01-01T00:00:00Z"
    assert state["configuration"]["credentials"]["access_token"] == "pat-old"


@responses.activate
def test_update_hubspot_without_prior_state(api_client: ApiClient, api_host: str) -> None:
    responses.add(
        responses.GET,
        f"{api_host}/v1/sources/hs_1",
        json=HUBSPOT_SERVER_BODY,
        status=200,
    )
    adapter = ResourceAdapter(SOURCE_HUBSPOT, client=api_client)

    response = adapter.update(
        ServiceRequest(
            plan_id="hs_1",
            plan_contents=json.dumps(_hubspot_state("2024-06-01T00:00:00Z", "pat-new")),
        )
    )

    state = json.loads(response.state_contents)
    assert len(responses.calls) == 1
    assert state["configuration"]["start_date"] == "2020-01-01T00:00:00Z"
    assert state["configuration"]["credentials"]["access_token"] != "pat-new"


def test_update_unsupported(stripe_adapter: ResourceAdapter, stripe_plan: dict[str, Any]) -> None:
    with pytest.raises(exc.AirbyteUpdateNotSupportedError):
        stripe_adapter.update(
            ServiceRequest(plan_id="src_123", plan_contents=json.dumps(stripe_plan))
        )


@responses.activate
def test_delete(stripe_adapter: ResourceAdapter, api_host: str) -> None:
    responses.add(responses.DELETE, f"{api_host}/v1/sources/src_123", status=204)

    response = stripe_adapter.delete(ServiceRequest(state_id="src_123"))

    assert response.error == ""
    assert response.state_contents == ""
    assert json.loads(responses.calls[0].request.body) == {"sourceId": "src_123"}

# Copyright (c) 2024 Airbyte, Inc., all rights reserved.
"""Unit tests for the generic resource client."""

from __future__ import annotations

import json
import logging
from typing import Any

import pytest
import responses

from airbyte_provider import exceptions as exc
from airbyte_provider._util.api_util import ApiClient
from airbyte_provider.api import (
    CONNECTION,
    DESTINATION_MYSQL,
    SOURCE_AMPLITUDE,
    SOURCE_HUBSPOT,
    SOURCE_STRIPE,
    ResourceClient,
    UpdateCapability,
)
from airbyte_provider.api.sources import SourceAmplitude, SourceHubspot, SourceStripe


@pytest.fixture
def stripe_client(api_client: ApiClient) -> ResourceClient:
    return ResourceClient(api_client, SOURCE_STRIPE)


@responses.activate
def test_create_posts_to_collection(
    stripe_client: ResourceClient,
    api_host: str,
    stripe_plan: dict[str, Any],
    stripe_response: dict[str, Any],
) -> None:
    responses.add(responses.POST, f"{api_host}/v1/sources", json=stripe_response, status=200)

    created = stripe_client.create(SourceStripe.from_state(stripe_plan))

    assert created == SourceStripe.model_validate(stripe_response)
    assert created.source_id == "src_123"
    assert json.loads(responses.calls[0].request.body) == {
        "name": "stripe",
        "workspaceId": "ws_1",
        "configuration": {
            "sourceType": "stripe",
            "start_date": "2024-01-01T00:00:00Z",
            "client_secret": "sk_test_123",
            "account_id": "acct_1",
        },
    }


@responses.activate
def test_create_error_uses_upstream_message(
    stripe_client: ResourceClient,
    api_host: str,
    stripe_plan: dict[str, Any],
) -> None:
    responses.add(
        responses.POST,
        f"{api_host}/v1/sources",
        json={
            "message": "Unrecognized field at [Source: (String)\"{...}\"; line: 1]",
            "exceptionClassName": "JsonMappingException",
        },
        status=422,
    )

    with pytest.raises(exc.AirbyteApiError) as ex_info:
        stripe_client.create(SourceStripe.from_state(stripe_plan))

    assert ex_info.value.get_message() == "Unrecognized field"
    assert ex_info.value.status_code == 422
    assert ex_info.value.resource_type == "source_stripe"


@responses.activate
def test_error_with_non_json_body(
    stripe_client: ResourceClient,
    api_host: str,
) -> None:
    responses.add(
        responses.GET,
        f"{api_host}/v1/sources/src_123",
        body="<html>Not Found</html>",
        status=404,
        content_type="text/html",
    )

    with pytest.raises(exc.AirbyteApiContentError) as ex_info:
        stripe_client.read("src_123")

    assert ex_info.value.get_message() == (
        "content type mismatch or invalid provider api host or path"
    )


@responses.activate
def test_read(
    stripe_client: ResourceClient,
    api_host: str,
    stripe_response: dict[str, Any],
) -> None:
    responses.add(
        responses.GET,
        f"{api_host}/v1/sources/src_123",
        json=stripe_response,
        status=200,
    )

    source = stripe_client.read("src_123")

    assert source == SourceStripe.model_validate(stripe_response)
    assert responses.calls[0].request.method == "GET"


@responses.activate
def test_read_with_malformed_success_body(
    stripe_client: ResourceClient,
    api_host: str,
) -> None:
    responses.add(
        responses.GET,
        f"{api_host}/v1/sources/src_123",
        body="not json",
        status=200,
    )

    with pytest.raises(exc.AirbyteApiContentError):
        stripe_client.read("src_123")


@responses.activate
def test_update_updatable_sends_put(api_client: ApiClient, api_host: str) -> None:
    body = {
        "sourceId": "amp_1",
        "name": "amplitude",
        "workspaceId": "ws_1",
        "configuration": {
            "sourceType": "amplitude",
            "start_date": "2024-01-01T00:00:00Z",
            "data_region": "EU Residency Server",
            "api_key": "key",
            "secret_key": "secret",
        },
    }
    responses.add(responses.PUT, f"{api_host}/v1/sources/amp_1", json=body, status=200)

    client = ResourceClient(api_client, SOURCE_AMPLITUDE)
    updated = client.update(SourceAmplitude.model_validate(body))

    assert SOURCE_AMPLITUDE.update_capability == UpdateCapability.UPDATABLE
    assert updated.configuration.data_region == "EU Residency Server"
    assert len(responses.calls) == 1
    assert json.loads(responses.calls[0].request.body)["sourceId"] == "amp_1"


@responses.activate
def test_update_read_only_reads_without_writing(
    api_client: ApiClient,
    api_host: str,
    caplog: pytest.LogCaptureFixture,
) -> None:
    current = {
        "sourceId": "hub_1",
        "name": "hubspot",
        "workspaceId": "ws_1",
        "configuration": {"sourceType": "hubspot", "start_date": "2024-01-01T00:00:00Z"},
    }
    responses.add(responses.GET, f"{api_host}/v1/sources/hub_1", json=current, status=200)

    client = ResourceClient(api_client, SOURCE_HUBSPOT)
    planned = SourceHubspot.model_validate({**current, "name": "renamed"})
    with caplog.at_level(logging.WARNING, logger="airbyte_provider"):
        result = client.update(planned)

    assert result.name == "hubspot"
    assert [call.request.method for call in responses.calls] == ["GET"]
    assert "cannot update 'source_hubspot'" in caplog.text


@pytest.mark.parametrize(
    "descriptor",
    [
        pytest.param(SOURCE_STRIPE, id="source_stripe"),
        pytest.param(DESTINATION_MYSQL, id="destination_mysql"),
        pytest.param(CONNECTION, id="connection"),
    ],
)
@responses.activate
def test_update_unsupported_raises_without_request(api_client: ApiClient, descriptor) -> None:
    client = ResourceClient(api_client, descriptor)
    config = descriptor.model().with_identity("abc")

    with pytest.raises(exc.AirbyteUpdateNotSupportedError) as ex_info:
        client.update(config)

    assert ex_info.value.get_message() == "update resource is not supported"
    assert len(responses.calls) == 0


def test_update_without_identity_raises(api_client: ApiClient) -> None:
    client = ResourceClient(api_client, SOURCE_AMPLITUDE)

    with pytest.raises(exc.AirbyteProviderInputError):
        client.update(SourceAmplitude())


@pytest.mark.parametrize(
    "descriptor,path,payload",
    [
        pytest.param(SOURCE_STRIPE, "/v1/sources/abc", {"sourceId": "abc"}, id="source"),
        pytest.param(
            DESTINATION_MYSQL,
            "/v1/destinations/abc",
            {"destinationId": "abc"},
            id="destination",
        ),
        pytest.param(CONNECTION, "/v1/connections/abc", {"connectionId": "abc"}, id="connection"),
    ],
)
@responses.activate
def test_delete_sends_id_payload(
    api_client: ApiClient,
    api_host: str,
    descriptor,
    path: str,
    payload: dict[str, str],
) -> None:
    responses.add(responses.DELETE, f"{api_host}{path}", status=204)

    assert ResourceClient(api_client, descriptor).delete("abc") is None
    assert json.loads(responses.calls[0].request.body) == payload


@responses.activate
def test_delete_not_found(stripe_client: ResourceClient, api_host: str) -> None:
    responses.add(
        responses.DELETE,
        f"{api_host}/v1/sources/missing",
        json={"message": "not found"},
        status=404,
    )

    with pytest.raises(exc.AirbyteApiError) as ex_info:
        stripe_client.delete("missing")

    assert ex_info.value.get_message() == "not found"
    assert ex_info.value.status_code == 404
    assert ex_info.value.resource_id == "missing"

# Copyright (c) 2024 Airbyte, Inc., all rights reserved.
"""Global pytest fixtures."""

from __future__ import annotations

import json
from typing import Any

import pytest

from airbyte_provider import constants
from airbyte_provider._util.api_util import ApiClient, get_api_client


API_HOST = "https://api.example.test"


@pytest.fixture(autouse=True)
def isolated_secrets(monkeypatch, tmp_path):
    """Keep real credentials and `.env` files out of the tests."""
    monkeypatch.delenv(constants.HOST_ENV_VAR, raising=False)
    monkeypatch.delenv(constants.AUTHORIZATION_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def shared_clients():
    """Start every test without cached API clients."""
    get_api_client.cache_clear()
    yield
    get_api_client.cache_clear()


@pytest.fixture
def api_host() -> str:
    return API_HOST


@pytest.fixture
def api_client() -> ApiClient:
    return ApiClient(API_HOST, "test-token")


@pytest.fixture
def resource_data() -> str:
    return json.dumps({"host": API_HOST, "authorization": "test-token"})


@pytest.fixture
def stripe_plan() -> dict[str, Any]:
    return {
        "name": "stripe",
        "workspace_id": "ws_1",
        "configuration": {
            "source_type": "stripe",
            "start_date": "2024-01-01T00:00:00Z",
            "client_secret": "sk_test_123",
            "account_id": "acct_1",
        },
    }


@pytest.fixture
def stripe_response() -> dict[str, Any]:
    """A create/read response, as returned by the API (secrets masked)."""
    return {
        "sourceId": "src_123",
        "name": "stripe",
        "sourceType": "stripe",
        "workspaceId": "ws_1",
        "configuration": {
            "sourceType": "stripe",
            "start_date": "2024-01-01T00:00:00Z",
            "client_secret": "**********",
            "account_id": "acct_1",
        },
    }

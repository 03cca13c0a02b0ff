# Copyright (c) 2024 Airbyte, Inc., all rights reserved.
from __future__ import annotations

import importlib.metadata

from airbyte_provider.constants import DISTRIBUTION_NAME


def get_version() -> str:
    """Return the installed version of the provider, or `0.0.0` when running from source."""
    try:
        return importlib.metadata.version(DISTRIBUTION_NAME)
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0"

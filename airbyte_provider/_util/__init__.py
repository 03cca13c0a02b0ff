# Copyright (c) 2024 Airbyte, Inc., all rights reserved.
"""Internal utility functions for the Airbyte Cloud provider."""

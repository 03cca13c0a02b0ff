# Copyright (c) 2024 Airbyte, Inc., all rights reserved.
"""All exceptions used in the Airbyte Cloud provider.

This design is modelled after structlog's exceptions, in that we bias towards auto-generated
property prints rather than sentence-like string concatenation.

E.g. Instead of this:

> `Upstream API returned status 404 when deleting source 'abc'.`

We do this:

> `Upstream API returned an error. (AirbyteApiError)`
> `------------------------------------------------------------`
> `AirbyteApiError: Upstream API returned an error.`
> `    Status Code: 404`
> `    Resource Id: 'abc'`

The benefit of this approach is that we can easily support structured logging, and we can
easily add new properties to exceptions without having to update all the places where they are
raised. We can also support any number of properties in exceptions, without having to worry
about the message becoming too long or too complex.

Every exception class has a one-line docstring which doubles as its default message.
"""

from __future__ import annotations

from dataclasses import dataclass
from textwrap import indent
from typing import Any


NEW_ISSUE_URL = "https://github.com/airbytehq/airbyte/issues/new/choose"
VERTICAL_SEPARATOR = "\n" + "-" * 60


# Base error class


@dataclass
class AirbyteProviderError(Exception):
    """General errors in the Airbyte Cloud provider."""

    guidance: str | None = None
    help_url: str | None = None
    log_text: str | list[str] | None = None
    context: dict[str, Any] | None = None
    message: str | None = None
    original_exception: Exception | None = None

    def get_message(self) -> str:
        """Return the best description for the exception.

        We resolve the following in order:
        1. The message sent to the exception constructor (if provided).
        2. The first line of the class's docstring.
        """
        if self.message:
            return self.message

        return self.__doc__.split("\n")[0] if self.__doc__ else ""

    def __str__(self) -> str:
        """Return a string representation of the exception."""
        special_properties = [
            "message",
            "guidance",
            "help_url",
            "log_text",
            "context",
            "original_exception",
        ]
        display_properties = {
            k: v
            for k, v in self.__dict__.items()
            if k not in special_properties and not k.startswith("_") and v is not None
        }
        display_properties.update(self.context or {})
        context_str = "\n    ".join(
            f"{str(k).replace('_', ' ').title()}: {v!r}" for k, v in display_properties.items()
        )
        exception_str = (
            f"{self.get_message()} ({self.__class__.__name__})"
            + VERTICAL_SEPARATOR
            + f"\n{self.__class__.__name__}: {self.get_message()}"
        )

        if self.guidance:
            exception_str += f"\n    {self.guidance}"

        if self.help_url:
            exception_str += f"\n    More info: {self.help_url}"

        if context_str:
            exception_str += "\n    " + context_str

        if self.log_text:
            if isinstance(self.log_text, list):
                self.log_text = "\n".join(self.log_text)

            exception_str += f"\n    Log output: \n    {indent(self.log_text, '    ')}"

        if self.original_exception:
            exception_str += VERTICAL_SEPARATOR + f"\nCaused by: {self.original_exception!s}"

        return exception_str

    def __repr__(self) -> str:
        """Return a string representation of the exception."""
        class_name = self.__class__.__name__
        properties_str = ", ".join(
            f"{k}={v!r}" for k, v in self.__dict__.items() if not k.startswith("_")
        )
        return f"{class_name}({properties_str})"

    def safe_logging_dict(self) -> dict[str, Any]:
        """Return a dictionary of the exception's properties which is safe for logging.

        We avoid any properties which could potentially contain PII.
        """
        result = {
            # The class name is safe to log:
            "class": self.__class__.__name__,
            # We discourage interpolated strings in 'message' so that this should never contain PII:
            "message": self.get_message(),
        }
        safe_attrs = ["status_code", "resource_type", "method"]
        for attr in safe_attrs:
            if hasattr(self, attr):
                value = getattr(self, attr)
                if value is not None:
                    result[attr] = value

        return result


# Internal Errors (these are probably bugs)


@dataclass
class AirbyteProviderInternalError(AirbyteProviderError):
    """An internal error occurred in the Airbyte Cloud provider."""

    guidance: str | None = "Please consider reporting this error to the Airbyte team."
    help_url: str | None = NEW_ISSUE_URL


# Input Errors


@dataclass
class AirbyteProviderInputError(AirbyteProviderError, ValueError):
    """The input provided to the Airbyte Cloud provider did not match expected validation rules.

    This inherits from ValueError so that it can be used as a drop-in replacement for
    ValueError in the provider API.
    """

    guidance: str | None = "Please check the provided value and try again."
    input_value: str | None = None


@dataclass
class AirbyteProviderSecretNotFoundError(AirbyteProviderError):
    """Secret not found."""

    guidance: str | None = "Please ensure that the secret is set."

    secret_name: str | None = None
    sources: list[str] | None = None


# Lifecycle Errors


@dataclass
class AirbyteProviderNotConfiguredError(AirbyteProviderError):
    """The resource service was used before being configured."""

    guidance: str | None = "Configure the provider before calling resource lifecycle methods."
    resource_type: str | None = None


@dataclass
class AirbyteUnknownResourceTypeError(AirbyteProviderError):
    """The requested resource type is not registered with the provider."""

    resource_type: str | None = None
    available_types: list[str] | None = None


# API Errors


@dataclass
class AirbyteTransportError(AirbyteProviderError):
    """The request to the Airbyte API could not be completed."""

    guidance: str | None = "Check the provider host setting and your network connectivity."
    method: str | None = None
    url: str | None = None
    status_code: int | None = None
    status_text: str | None = None


@dataclass
class AirbyteApiError(AirbyteProviderError):
    """The Airbyte API returned an error."""

    status_code: int | None = None
    resource_type: str | None = None
    resource_id: str | None = None


@dataclass
class AirbyteApiContentError(AirbyteApiError):
    """Content type mismatch or invalid provider API host or path."""

    guidance: str | None = "Check that the provider host points at the Airbyte API."


@dataclass
class AirbyteUpdateNotSupportedError(AirbyteApiError):
    """Update resource is not supported."""

    guidance: str | None = (
        "The Airbyte API does not expose an update endpoint for this resource type. "
        "Replace the resource instead."
    )

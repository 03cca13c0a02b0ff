# Copyright (c) 2024 Airbyte, Inc., all rights reserved.
"""Secrets management for the Airbyte Cloud provider.

Provider credentials can be passed explicitly in the provider configuration, or resolved from
the environment. By default, environment variables are checked first, followed by a `.env` file
in the current working directory.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from dotenv import dotenv_values, find_dotenv

from airbyte_provider import exceptions as exc


class SecretSourceEnum(str, Enum):
    """Built-in secret sources."""

    ENV = "env"
    DOTENV = "dotenv"


class SecretString(str):
    """A string that represents a secret.

    This class is used to mark a string as a secret. When a secret is printed or logged via
    `repr()`, it will be masked to prevent accidental exposure of sensitive information.
    The value itself behaves like a normal string in every other respect.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        """Override the representation of the secret string to return a masked value."""
        return "<SecretString: ****>"

    def is_empty(self) -> bool:
        """Check if the secret is an empty string."""
        return len(self) == 0


_SECRETS_SOURCES: list[SecretManager] = []


class SecretManager(ABC):
    """Abstract base class for secret managers.

    Secret managers are used to retrieve secrets from a secret store. Subclasses implement
    `get_secret`, returning `None` when the secret is not found.
    """

    name: str

    @abstractmethod
    def get_secret(self, secret_name: str) -> SecretString | None:
        """Get a named secret from the secret manager."""
        ...

    def __str__(self) -> str:
        return self.name

    def __eq__(self, value: object) -> bool:
        if isinstance(value, SecretManager):
            return self.name == value.name

        if isinstance(value, str):
            return self.name == value

        return super().__eq__(value)

    def __hash__(self) -> int:
        return hash(self.name)


class EnvVarSecretManager(SecretManager):
    """Secret manager that retrieves secrets from environment variables."""

    name = SecretSourceEnum.ENV.value

    def get_secret(self, secret_name: str) -> SecretString | None:
        """Get a named secret from the environment."""
        if secret_name not in os.environ:
            return None

        return SecretString(os.environ[secret_name])


class DotenvSecretManager(SecretManager):
    """Secret manager that retrieves secrets from a `.env` file."""

    name = SecretSourceEnum.DOTENV.value

    def get_secret(self, secret_name: str) -> SecretString | None:
        """Get a named secret from the `.env` file."""
        try:
            dotenv_vars: dict[str, str | None] = dotenv_values(find_dotenv(usecwd=True))
        except Exception:
            # Can't locate or parse a .env file
            return None

        if secret_name not in dotenv_vars or dotenv_vars[secret_name] is None:
            return None

        return SecretString(dotenv_vars[secret_name])


def _get_secret_sources() -> list[SecretManager]:
    """Initialize the default secret sources."""
    if len(_SECRETS_SOURCES) == 0:
        _SECRETS_SOURCES.extend(
            [
                EnvVarSecretManager(),
                DotenvSecretManager(),
            ]
        )

    return _SECRETS_SOURCES.copy()


def register_secret_manager(
    secret_manager: SecretManager,
    *,
    as_backup: bool = False,
) -> None:
    """Register a custom secret manager.

    Registered managers take priority over the default sources unless `as_backup` is set.
    """
    _get_secret_sources()
    if as_backup:
        _SECRETS_SOURCES.append(secret_manager)
    else:
        _SECRETS_SOURCES.insert(0, secret_manager)


def disable_secret_source(source: SecretManager | SecretSourceEnum | str) -> None:
    """Disable one of the registered secret sources, by instance or by name."""
    _get_secret_sources()
    for registered in list(_SECRETS_SOURCES):
        if registered == source or registered.name == str(getattr(source, "value", source)):
            _SECRETS_SOURCES.remove(registered)


def get_secret(
    secret_name: str,
    /,
    *,
    sources: list[SecretManager] | None = None,
    default: str | SecretString | None = None,
) -> SecretString:
    """Get a secret from the environment.

    The optional `sources` argument restricts the lookup to the given secret managers, checked
    in the provided order. If left blank, all registered sources are checked.

    Raises:
        AirbyteProviderSecretNotFoundError: If the secret is not found in any of the configured
            sources, and if no default value is provided.
    """
    secret_managers = sources if sources is not None else _get_secret_sources()

    for secret_mgr in secret_managers:
        val = secret_mgr.get_secret(secret_name)
        if val:
            return SecretString(val)

    if default:
        return SecretString(default)

    raise exc.AirbyteProviderSecretNotFoundError(
        secret_name=secret_name,
        sources=[str(s) for s in secret_managers],
    )


def try_get_secret(
    secret_name: str,
    /,
    default: str | SecretString | None = None,
    **kwargs: Any,
) -> SecretString | None:
    """Try to get a secret from the environment, failing gracefully.

    Returns the default value (or `None`) when the secret cannot be found.
    """
    try:
        return get_secret(secret_name, default=default, **kwargs)
    except exc.AirbyteProviderSecretNotFoundError:
        return None


__all__ = [
    "DotenvSecretManager",
    "EnvVarSecretManager",
    "SecretManager",
    "SecretSourceEnum",
    "SecretString",
    "disable_secret_source",
    "get_secret",
    "register_secret_manager",
    "try_get_secret",
]

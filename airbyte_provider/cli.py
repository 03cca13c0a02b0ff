# Copyright (c) 2024 Airbyte, Inc., all rights reserved.
"""CLI for the Airbyte Cloud provider.

The `airbyte-provider` executable runs the plugin server for the host framework, and also offers
commands to inspect resource schemas and drive resources directly, which is useful when testing
credentials or debugging a plan.

These are equivalent:

```bash
python -m airbyte_provider.cli --help
airbyte-provider --help
```

Example usage:

```bash
# Run the plugin server on stdio (normally started by the host framework):
airbyte-provider serve

# List the resource types and print one schema:
airbyte-provider resources
airbyte-provider schema airbyte_source_stripe

# Manage a resource directly:
airbyte-provider create airbyte_source_stripe --plan=./stripe.yaml
airbyte-provider read airbyte_source_stripe 6f1c...
airbyte-provider delete airbyte_source_stripe 6f1c...
```
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click
import yaml

from airbyte_provider import constants
from airbyte_provider.exceptions import AirbyteProviderInputError
from airbyte_provider.plugin.provider import Provider
from airbyte_provider.plugin.resources import get_resource_factories
from airbyte_provider.plugin.schema import ServiceRequest, ServiceResponse, decode, encode
from airbyte_provider.plugin.server import PROVIDER_SERVICE, PluginServer, serve
from airbyte_provider.secrets import get_secret, try_get_secret
from airbyte_provider.version import get_version


CLI_GUIDANCE = """
----------------------

Airbyte Provider CLI Guidance

Providing a plan:

When providing a plan via `--plan`, you can provide any of the following:

1. A path to a plan file, in yaml or json format.

2. An inline yaml string, e.g. `--plan='{name: my-source, workspace_id: abc}'`.

Attribute names in a plan are the resource schema's attribute names, as printed by the
`schema` command.

Providing secrets:

You can provide secrets in your plan by prefixing the secret value with `SECRET:`.
For example, --plan='{configuration: {client_secret: "SECRET:STRIPE_SECRET"}}' will look for a
secret named `STRIPE_SECRET` in environment variables and dotenv (.env) files.

The provider host and authorization are read from `--host` and `--authorization`, falling back
to the `AIRBYTE_HOST` and `AIRBYTE_AUTHORIZATION` secrets.
"""

# Add the CLI guidance to the module docstring.
globals()["__doc__"] = globals().get("__doc__", "") + CLI_GUIDANCE

PLAN_HELP = (
    "Either a path to a plan file for the resource, or an inline yaml string. If providing an "
    "inline yaml string, use single quotes to avoid shell interpolation. For example, "
    "--plan='{name: value}' or --plan='{configuration: {nested: value}}'. \n"
    "Secrets can be accessed by prefixing the secret name with 'SECRET:'. "
    """For example, --plan='{configuration: {api_key: "SECRET:MY_API_KEY"}}'."""
)


def _resolve_config(
    config: str,
) -> dict[str, Any]:
    """Resolve a plan file or inline yaml string into a dictionary."""

    def _inject_secrets(config_dict: dict[str, Any]) -> None:
        """Inject secrets into the configuration dictionary."""
        for key, value in config_dict.items():
            if isinstance(value, dict):
                _inject_secrets(value)
            elif isinstance(value, str) and value.startswith(constants.SECRET_PREFIX):
                config_dict[key] = str(
                    get_secret(value.removeprefix(constants.SECRET_PREFIX).strip())
                )

    config_dict: dict[str, Any]
    if config.startswith("{"):
        # Treat this as an inline yaml string:
        config_dict = yaml.safe_load(config)
    else:
        # Treat this as a path to a config file:
        config_path = Path(config)
        if not config_path.exists():
            raise AirbyteProviderInputError(
                message="Plan file not found.",
                input_value=str(config_path),
            )
        config_dict = yaml.safe_load(config_path.read_text(encoding="utf-8"))

    if not isinstance(config_dict, dict):
        raise AirbyteProviderInputError(
            message="Plan must be a mapping of attribute names to values.",
            input_value=config,
        )

    _inject_secrets(config_dict)
    return config_dict


def _get_server() -> PluginServer:
    return PluginServer(
        version=get_version(),
        provider=Provider(),
        resources=[factory() for factory in get_resource_factories()],
    )


def _check(response: ServiceResponse) -> ServiceResponse:
    if response.error:
        raise click.ClickException(response.error)

    return response


def _configured_server(
    type_name: str,
    host: str | None,
    authorization: str | None,
) -> PluginServer:
    """Return a server whose provider and named resource are configured."""
    server = _get_server()
    provider_config = {
        "host": host or try_get_secret(constants.HOST_ENV_VAR) or constants.DEFAULT_API_HOST,
        "authorization": authorization or try_get_secret(constants.AUTHORIZATION_ENV_VAR),
    }
    configured = _check(
        server.dispatch(
            PROVIDER_SERVICE,
            "configure",
            ServiceRequest(config_contents=encode({k: v for k, v in provider_config.items() if v})),
        )
    )
    _check(
        server.dispatch(
            type_name,
            "configure",
            ServiceRequest(type_name=type_name, resource_data=configured.resource_data),
        )
    )
    return server


def _echo_state(response: ServiceResponse) -> None:
    click.echo(
        json.dumps(
            {
                "state_id": response.state_id,
                "state": decode(response.state_contents),
                "state_last_updated": response.state_last_updated,
            },
            indent=2,
        )
    )


HOST_OPTION = click.option(
    "--host",
    type=str,
    help=(
        "The Airbyte API host. Falls back to the AIRBYTE_HOST secret, "
        f"then to {constants.DEFAULT_API_HOST}."
    ),
)
AUTHORIZATION_OPTION = click.option(
    "--authorization",
    type=str,
    help="The Airbyte API token. Falls back to the AIRBYTE_AUTHORIZATION secret.",
)


@click.command(name="serve")
@click.option(
    "--version-string",
    type=str,
    help="Override the plugin version reported to the host framework.",
)
def serve_command(version_string: str | None = None) -> None:
    """Run the plugin server on stdin and stdout."""
    serve(
        version=version_string or get_version(),
        provider_factory=Provider,
        resource_factories=get_resource_factories(),
    )


@click.command()
def resources() -> None:
    """List the registered resource type names."""
    response = _check(_get_server().dispatch(PROVIDER_SERVICE, "resources", ServiceRequest()))
    for type_name in sorted(response.resource_services):
        click.echo(type_name)


@click.command()
@click.argument("type_name", type=str)
def schema(type_name: str) -> None:
    """Print the schema for a resource type, or for the `provider`."""
    response = _check(_get_server().dispatch(type_name, "schema", ServiceRequest()))
    click.echo(json.dumps(decode(response.schema_contents), indent=2))


@click.command()
@click.argument("type_name", type=str)
@click.option("--plan", type=str, required=True, help=PLAN_HELP)
@HOST_OPTION
@AUTHORIZATION_OPTION
def create(
    type_name: str,
    plan: str,
    host: str | None = None,
    authorization: str | None = None,
) -> None:
    """Create a resource from a plan."""
    server = _configured_server(type_name, host, authorization)
    response = server.dispatch(
        type_name,
        "create",
        ServiceRequest(type_name=type_name, plan_contents=encode(_resolve_config(plan))),
    )
    _echo_state(_check(response))


@click.command()
@click.argument("type_name", type=str)
@click.argument("resource_id", type=str)
@click.option(
    "--state",
    type=str,
    help="Optional prior state, as a file path or inline yaml string. " + PLAN_HELP,
)
@HOST_OPTION
@AUTHORIZATION_OPTION
def read(
    type_name: str,
    resource_id: str,
    state: str | None = None,
    host: str | None = None,
    authorization: str | None = None,
) -> None:
    """Read a resource by ID."""
    server = _configured_server(type_name, host, authorization)
    response = server.dispatch(
        type_name,
        "read",
        ServiceRequest(
            type_name=type_name,
            state_id=resource_id,
            state_contents=encode(_resolve_config(state)) if state else "",
        ),
    )
    _echo_state(_check(response))


@click.command()
@click.argument("type_name", type=str)
@click.argument("resource_id", type=str)
@click.option("--plan", type=str, required=True, help=PLAN_HELP)
@HOST_OPTION
@AUTHORIZATION_OPTION
def update(
    type_name: str,
    resource_id: str,
    plan: str,
    host: str | None = None,
    authorization: str | None = None,
) -> None:
    """Update a resource by ID from a plan."""
    server = _configured_server(type_name, host, authorization)
    response = server.dispatch(
        type_name,
        "update",
        ServiceRequest(
            type_name=type_name,
            plan_id=resource_id,
            plan_contents=encode(_resolve_config(plan)),
        ),
    )
    _echo_state(_check(response))


@click.command()
@click.argument("type_name", type=str)
@click.argument("resource_id", type=str)
@HOST_OPTION
@AUTHORIZATION_OPTION
def delete(
    type_name: str,
    resource_id: str,
    host: str | None = None,
    authorization: str | None = None,
) -> None:
    """Delete a resource by ID."""
    server = _configured_server(type_name, host, authorization)
    _check(
        server.dispatch(
            type_name,
            "delete",
            ServiceRequest(type_name=type_name, state_id=resource_id),
        )
    )
    click.echo(f"Deleted {type_name} '{resource_id}'.")


@click.group()
def cli() -> None:
    """@private Airbyte Cloud provider CLI."""
    pass


cli.add_command(serve_command)
cli.add_command(resources)
cli.add_command(schema)
cli.add_command(create)
cli.add_command(read)
cli.add_command(update)
cli.add_command(delete)

if __name__ == "__main__":
    cli()

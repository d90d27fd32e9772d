"""Command-line interface for gql-explorer."""

import asyncio
import json
import logging

import click
from pydantic import ValidationError

from . import __version__
from .config import PRESET_ENDPOINTS, ExplorerConfig, resolve_endpoint
from .core.auth import auth_from_options
from .core.catalog import OperationKind
from .core.errors import ExplorerError
from .core.executor import GraphQLExecutor
from .core.introspection import INTROSPECTION_QUERY
from .core.session import ExplorerSession
from .core.typeref import render_type_string


def parse_pairs(values: tuple[str, ...], option: str) -> list[tuple[str, str]]:
    """Split NAME=VALUE option values, keeping everything after the first '='."""
    pairs = []
    for value in values:
        name, sep, rest = value.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected NAME=VALUE, got {value!r}", param_hint=option)
        pairs.append((name.strip(), rest))
    return pairs


def connection_options(func):
    """Endpoint connection options shared by the schema-reading commands."""
    options = [
        click.argument("endpoint"),
        click.option("--bearer", help="Bearer token for the Authorization header."),
        click.option("--api-key", help="API key (sent as x-api-key, or filled into a preset URL)."),
        click.option("--basic", help="Basic auth credentials as USER:PASSWORD."),
        click.option("--header", "-H", "headers", multiple=True, help="Extra header as NAME=VALUE."),
        click.option("--timeout", type=float, help="Request timeout in seconds."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_config(endpoint, api_key, headers, timeout, **overrides) -> ExplorerConfig:
    try:
        return ExplorerConfig.from_env(
            endpoint=resolve_endpoint(endpoint),
            api_key=api_key,
            headers=dict(parse_pairs(headers, "--header")) or None,
            timeout=timeout,
            **overrides,
        )
    except ValidationError as e:
        raise click.UsageError(str(e)) from e


async def open_session(config: ExplorerConfig, bearer, basic) -> ExplorerSession:
    """Create an executor for the configured endpoint and load its schema."""
    api_key = config.api_key
    if "{api_key}" in config.endpoint:
        # Filled into the URL instead of a header
        api_key = None
    executor = GraphQLExecutor(
        config.endpoint_url(),
        auth=auth_from_options(bearer=bearer, api_key=api_key, basic=basic),
        headers=config.headers,
        timeout=config.timeout,
    )
    session = ExplorerSession(executor, config)
    try:
        await session.load_schema()
    except BaseException:
        await executor.close()
        raise
    return session


def run(coro):
    """Run a coroutine, turning explorer errors into clean CLI failures."""
    try:
        return asyncio.run(coro)
    except ExplorerError as e:
        raise click.ClickException(str(e)) from e
    except ValueError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """Explore a GraphQL endpoint and build queries without writing GraphQL.

    ENDPOINT is a URL or the label of a preset (see `gql-explorer presets`).
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
def presets():
    """List preset endpoints."""
    for preset in PRESET_ENDPOINTS:
        click.echo(f"{preset.label}: {preset.url}")


@main.command("introspection-query")
def introspection_query():
    """Print the introspection query sent to endpoints."""
    click.echo(INTROSPECTION_QUERY)


@main.command()
@connection_options
@click.option("--mutations", is_flag=True, help="List mutations instead of queries.")
def operations(endpoint, bearer, api_key, basic, headers, timeout, mutations):
    """List root operations with their arguments and return types.

    Examples:

        gql-explorer operations "PulseChain Scan"

        gql-explorer operations https://example.com/graphql --mutations
    """
    kind = OperationKind.MUTATION if mutations else OperationKind.QUERY
    config = build_config(endpoint, api_key, headers, timeout)

    async def _list():
        session = await open_session(config, bearer, basic)
        try:
            return session.list_operations(kind)
        finally:
            await session.executor.close()

    ops = run(_list())
    if not ops:
        click.echo(f"No {kind.value} operations.")
    for op in ops:
        args = ", ".join(f"{a.name}: {render_type_string(a.type)}" for a in op.args)
        signature = f"({args})" if args else ""
        click.echo(f"{op.name}{signature}: {render_type_string(op.type)}")
        if op.description:
            click.echo(f"    {op.description}")


@main.command()
@connection_options
@click.argument("operation")
@click.option("--mutation", is_flag=True, help="OPERATION is a mutation.")
def fields(endpoint, bearer, api_key, basic, headers, timeout, operation, mutation):
    """List the selectable fields of OPERATION's return type.

    Connection fields also list the node fields that can be chosen with
    `query --sub FIELD=SUB,...`.
    """
    kind = OperationKind.MUTATION if mutation else OperationKind.QUERY
    config = build_config(endpoint, api_key, headers, timeout)

    async def _fields():
        session = await open_session(config, bearer, basic)
        try:
            if session.catalog.operation(kind, operation) is None:
                raise ValueError(f"Unknown {kind.value} operation: {operation}")
            listing = []
            for field_def in session.get_selectable_fields(kind, operation):
                field_kind = session.classify(field_def)
                subfields = [f.name for f in session.get_connection_subfields(field_def)]
                listing.append((field_def, field_kind, subfields))
            return listing
        finally:
            await session.executor.close()

    for field_def, field_kind, subfields in run(_fields()):
        args = ", ".join(f"{a.name}: {render_type_string(a.type)}" for a in field_def.args)
        signature = f"({args})" if args else ""
        click.echo(
            f"{field_def.name}{signature}: {render_type_string(field_def.type)} [{field_kind.value}]"
        )
        if subfields:
            click.echo(f"    node fields: {', '.join(subfields)}")


@main.command()
@connection_options
@click.argument("operation")
@click.option("--mutation", is_flag=True, help="OPERATION is a mutation.")
@click.option("--field", "-f", "selected", multiple=True, help="Field to select (repeatable, order kept).")
@click.option("--arg", "-a", "args", multiple=True, help="Operation argument as NAME=VALUE.")
@click.option("--sub", "-s", "subs", multiple=True, help="Connection node fields as FIELD=SUB,SUB.")
@click.option("--field-arg", "-A", "field_args", multiple=True, help="Field argument as FIELD.ARG=VALUE.")
@click.option("--defaults", is_flag=True, help="Start with the return type's default leaf fields.")
@click.option("--variables", "use_variables", is_flag=True, help="Pass arguments as $variables.")
@click.option("--strict-connections", is_flag=True, help="Treat `nodes` like `edges`.")
@click.option("--pretty", is_flag=True, help="Pretty-print the document.")
@click.option("--execute", "-x", "do_execute", is_flag=True, help="Execute the query and print the result.")
def query(
    endpoint, bearer, api_key, basic, headers, timeout, operation, mutation, selected,
    args, subs, field_args, defaults, use_variables, strict_connections, pretty, do_execute,
):
    """Build (and optionally execute) a document for OPERATION.

    Examples:

        gql-explorer query "PulseChain Scan" blocks -f hash -f number -a limit=5

        gql-explorer query URL address -a hash=0xabc -f transactions -s transactions=hash,value -A transactions.first=10 -x
    """
    kind = OperationKind.MUTATION if mutation else OperationKind.QUERY
    overrides = {"strict_connections": True} if strict_connections else {}
    if use_variables:
        overrides["argument_style"] = "variables"
    config = build_config(endpoint, api_key, headers, timeout, **overrides)

    arg_pairs = parse_pairs(args, "--arg")
    sub_pairs = parse_pairs(subs, "--sub")
    field_arg_pairs = []
    for target, value in parse_pairs(field_args, "--field-arg"):
        field_name, dot, arg_name = target.partition(".")
        if not dot or not arg_name:
            raise click.BadParameter(f"expected FIELD.ARG=VALUE, got {target!r}", param_hint="--field-arg")
        field_arg_pairs.append((field_name, arg_name, value))

    async def _query():
        session = await open_session(config, bearer, basic)
        try:
            session.select_operation(kind, operation, preselect_default_fields=defaults)
            for name in selected:
                if not session.selection.is_selected(name):
                    session.toggle_field(name)
            # Sub-fields and field arguments imply the field is checked
            for name, value in sub_pairs:
                if not session.selection.is_selected(name):
                    session.toggle_field(name)
                for subfield in filter(None, (s.strip() for s in value.split(","))):
                    session.set_connection_subfield(name, subfield, selected=True)
            for name, arg_name, value in field_arg_pairs:
                if not session.selection.is_selected(name):
                    session.toggle_field(name)
                session.set_subfield_argument(name, arg_name, value)
            for name, value in arg_pairs:
                session.set_argument(name, value)

            document = session.build_document()
            result = await session.execute() if do_execute else None
            return document, result
        finally:
            await session.executor.close()

    document, result = run(_query())
    click.echo(document.formatted() if pretty else document.query)
    if document.variables:
        click.echo(json.dumps({"variables": document.variables}, indent=2))
    if result is not None:
        click.echo(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()

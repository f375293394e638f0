from __future__ import annotations

import json
import logging
from typing import Any, Optional

import click

from . import __version__
from .client import SalesforceClient
from .config import Credentials, normalize_version, version_from_env
from .dispatch import Response
from .env_loader import load_env_files
from .exceptions import AuthenticationError, MissingCredentialsError
from .logging_config import configure_logging

_logger = logging.getLogger(__name__)

# Load .env very early, so everything else sees env vars
load_env_files()

_CREDENTIALS_HELP = (
    "Set these environment variables (or create a .env file) for password-grant auth:\n"
    "  SF_USERNAME=...              # Salesforce username\n"
    "  SF_PASSWORD=...              # Salesforce password\n"
    "  SF_SECURITY_TOKEN=...        # optional when logging in from a trusted IP range\n"
    "  SF_CONSUMER_KEY=...          # Connected App Consumer Key\n"
    "  SF_CONSUMER_SECRET=...       # Connected App Consumer Secret\n"
    "  SF_SANDBOX=true              # optional; use test.salesforce.com\n"
    "  SF_API_VERSION=60.0          # optional; defaults to 31.0"
)

pretty_option = click.option("--pretty", is_flag=True, help="Pretty-print JSON.")


def _json_arg(ctx: click.Context, param: click.Parameter, value: str) -> Any:
    try:
        return json.loads(value)
    except ValueError as e:
        raise click.BadParameter(f"not valid JSON: {e}") from None


def _connect(ctx: click.Context) -> SalesforceClient:
    """Authenticate from the environment and return a client."""
    api_version = ctx.obj.get("api_version") or version_from_env()
    try:
        return SalesforceClient.login(Credentials.from_env(), api_version=api_version)
    except MissingCredentialsError as e:
        needed = ", ".join(e.missing)
        raise click.ClickException(
            f"Missing Salesforce credentials: {needed}\n\n{_CREDENTIALS_HELP}"
        ) from e
    except AuthenticationError as e:
        raise click.ClickException(f"Login failed: {e}") from e


def _preview_token(token: str) -> str:
    """Show at most a quarter of the token at each end; short tokens are fully hidden."""
    if len(token) <= 16:
        return "*" * len(token)
    n = min(10, len(token) // 4)
    return f"{token[:n]}...{token[-n:]}"


def _emit(ctx: click.Context, resp: Response, pretty: bool) -> None:
    """Print the response body; non-2xx status goes to stderr and exit code 1."""
    if resp.body is not None:
        click.echo(json.dumps(resp.body, indent=2 if pretty else None))
    elif resp.text:
        click.echo(resp.text)
    if not resp.ok:
        click.echo(f"HTTP {resp.status_code}", err=True)
        ctx.exit(1)


@click.group(
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
)
@click.version_option(__version__, "--version", prog_name="sfapi")
@click.option(
    "-v",
    "--verbose",
    "loglevel",
    flag_value=logging.INFO,
    default=None,
    help="Enable INFO logs.",
)
@click.option(
    "-vv",
    "--very-verbose",
    "loglevel",
    flag_value=logging.DEBUG,
    help="Enable DEBUG logs.",
)
@click.option(
    "--api-version",
    default=None,
    help="REST API version for this invocation, e.g. 60.0 (default: SF_API_VERSION or 31.0).",
)
@click.pass_context
def cli(ctx: click.Context, loglevel: Optional[int], api_version: Optional[str]) -> None:
    """Salesforce REST API CLI. Use subcommands like 'login' or 'query'."""
    configure_logging(loglevel)
    _logger.debug("CLI start, version=%s", __version__)
    ctx.ensure_object(dict)
    ctx.obj["api_version"] = normalize_version(api_version) if api_version else None
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command("login")
@click.pass_context
def cmd_login(ctx: click.Context) -> None:
    """Authenticate and show the session (token is truncated)."""
    client = _connect(ctx)
    s = client.session
    click.echo(f"Instance URL: {s.instance_url}")
    click.echo(f"Token type: {s.token_type}")
    click.echo(f"Issued at: {s.issued_at}")
    click.echo(f"API version: {client.api_version}")
    click.echo(f"Token preview: {_preview_token(s.access_token)}")


@cli.command("versions")
@pretty_option
@click.pass_context
def cmd_versions(ctx: click.Context, pretty: bool) -> None:
    """List API versions available on the instance."""
    _emit(ctx, _connect(ctx).versions(), pretty)


@cli.command("limits")
@pretty_option
@click.pass_context
def cmd_limits(ctx: click.Context, pretty: bool) -> None:
    """Show org API usage limits."""
    _emit(ctx, _connect(ctx).org_api_limits(), pretty)


@cli.command("resources")
@pretty_option
@click.pass_context
def cmd_resources(ctx: click.Context, pretty: bool) -> None:
    """List REST resources for the API version."""
    _emit(ctx, _connect(ctx).resources(), pretty)


@cli.command("objects")
@pretty_option
@click.pass_context
def cmd_objects(ctx: click.Context, pretty: bool) -> None:
    """List sObjects available to the user."""
    _emit(ctx, _connect(ctx).list_objects(), pretty)


@cli.command("describe")
@click.argument("object_type")
@click.option("--meta", is_flag=True, help="Basic metadata only, not the full describe.")
@pretty_option
@click.pass_context
def cmd_describe(ctx: click.Context, object_type: str, meta: bool, pretty: bool) -> None:
    """Describe an sObject type."""
    client = _connect(ctx)
    resp = client.get_object_metadata(object_type) if meta else client.describe_object(object_type)
    _emit(ctx, resp, pretty)


@cli.command("get")
@click.argument("object_type")
@click.argument("record_id")
@click.option("--fields", required=True, help="Comma-separated field names, e.g. Name,Email.")
@pretty_option
@click.pass_context
def cmd_get(
    ctx: click.Context, object_type: str, record_id: str, fields: str, pretty: bool
) -> None:
    """Fetch selected fields of one record."""
    _emit(ctx, _connect(ctx).get_record_fields(object_type, record_id, fields), pretty)


@cli.command("get-by-extid")
@click.argument("object_type")
@click.argument("field")
@click.argument("value")
@pretty_option
@click.pass_context
def cmd_get_by_extid(
    ctx: click.Context, object_type: str, field: str, value: str, pretty: bool
) -> None:
    """Fetch a record by external ID."""
    _emit(ctx, _connect(ctx).get_record_by_external_id(object_type, field, value), pretty)


@cli.command("query")
@click.argument("soql")
@pretty_option
@click.pass_context
def cmd_query(ctx: click.Context, soql: str, pretty: bool) -> None:
    """Run a SOQL query."""
    _emit(ctx, _connect(ctx).query(soql), pretty)


@cli.command("search")
@click.argument("sosl")
@pretty_option
@click.pass_context
def cmd_search(ctx: click.Context, sosl: str, pretty: bool) -> None:
    """Run a SOSL search, e.g. 'FIND {Acme}'."""
    _emit(ctx, _connect(ctx).search(sosl), pretty)


@cli.command("create")
@click.argument("object_type")
@click.argument("attrs", callback=_json_arg)
@pretty_option
@click.pass_context
def cmd_create(ctx: click.Context, object_type: str, attrs: Any, pretty: bool) -> None:
    """Create a record from a JSON object of field values."""
    _emit(ctx, _connect(ctx).create_record(object_type, attrs), pretty)


@cli.command("update")
@click.argument("object_type")
@click.argument("record_id")
@click.argument("attrs", callback=_json_arg)
@pretty_option
@click.pass_context
def cmd_update(
    ctx: click.Context, object_type: str, record_id: str, attrs: Any, pretty: bool
) -> None:
    """Update a record with a JSON object of field values."""
    _emit(ctx, _connect(ctx).update_record(object_type, record_id, attrs), pretty)


@cli.command("delete")
@click.argument("object_type")
@click.argument("record_id")
@click.pass_context
def cmd_delete(ctx: click.Context, object_type: str, record_id: str) -> None:
    """Delete a record."""
    _emit(ctx, _connect(ctx).delete_record(object_type, record_id), False)


@cli.command("upsert")
@click.argument("object_type")
@click.argument("field")
@click.argument("value")
@click.argument("attrs", callback=_json_arg)
@pretty_option
@click.pass_context
def cmd_upsert(
    ctx: click.Context, object_type: str, field: str, value: str, attrs: Any, pretty: bool
) -> None:
    """Create or update a record keyed by an external ID field."""
    resp = _connect(ctx).upsert_record_by_external_id(object_type, field, value, attrs)
    _emit(ctx, resp, pretty)

"""Honeycomb CLI: inspect a team through the v2 API."""

import json
import logging
import sys
from dataclasses import replace

import click

from honeycombio import __version__
from honeycombio.errors import ConfigError, DetailedError
from honeycombio.v2 import Client, Config
from honeycombio.v2.config import resolve_config


def _setup_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=level,
        stream=sys.stderr,
    )


def _echo_models(models) -> None:
    click.echo(json.dumps([m.model_dump(mode="json", exclude_none=True) for m in models], indent=2))


# ======================================================================
# Root group
# ======================================================================

@click.group()
@click.version_option(version=__version__, prog_name="honeycombio")
@click.option("--api-url", envvar="HONEYCOMB_API_ENDPOINT", default=None, help="API base URL.")
@click.option("--debug", is_flag=True, help="Log every request to stderr.")
@click.pass_context
def cli(ctx, api_url, debug):
    """Honeycomb management API from the command line.

    The key pair is read from HONEYCOMB_KEY_ID and HONEYCOMB_KEY_SECRET.
    """
    _setup_logging(debug)
    base = ctx.obj if isinstance(ctx.obj, Config) else Config()
    ctx.obj = replace(base, base_url=api_url or base.base_url, debug=debug or base.debug)


def _client(ctx) -> Client:
    try:
        return Client(ctx.obj)
    except ConfigError as e:
        raise click.UsageError(str(e))
    except DetailedError as e:
        click.echo(f"Error: authentication failed ({e.status}): {e}", err=True)
        sys.exit(1)


def _run(fn):
    try:
        return fn()
    except DetailedError as e:
        click.echo(f"Error ({e.status}): {e}", err=True)
        sys.exit(1)


# ======================================================================
# honeycombio whoami
# ======================================================================

@cli.command()
@click.pass_context
def whoami(ctx):
    """Show the key's identity and team."""
    with _client(ctx) as client:
        info = client.auth_info_metadata
        click.echo(json.dumps(info.model_dump(mode="json", exclude_none=True), indent=2))


@cli.command("config")
@click.pass_context
def show_config(ctx):
    """Show the resolved configuration, key secret masked."""
    try:
        resolved = resolve_config(ctx.obj)
    except ConfigError as e:
        raise click.UsageError(str(e))
    click.echo(json.dumps(resolved.to_dict(), indent=2))


# ======================================================================
# honeycombio environments
# ======================================================================

@cli.group()
def environments():
    """Team environments."""
    pass


@environments.command("list")
@click.option("--page-size", default=0, type=int, help="Results per page (default 20, max 100).")
@click.pass_context
def environments_list(ctx, page_size):
    """List every environment of the team."""
    with _client(ctx) as client:
        _echo_models(_run(lambda: list(client.environments.list(page_size=page_size))))


# ======================================================================
# honeycombio api-keys
# ======================================================================

@cli.group("api-keys")
def api_keys():
    """Team API keys."""
    pass


@api_keys.command("list")
@click.option("--page-size", default=0, type=int, help="Results per page (default 20, max 100).")
@click.pass_context
def api_keys_list(ctx, page_size):
    """List every API key of the team."""
    with _client(ctx) as client:
        _echo_models(_run(lambda: list(client.api_keys.list(page_size=page_size))))


def main():
    cli()


if __name__ == "__main__":
    main()

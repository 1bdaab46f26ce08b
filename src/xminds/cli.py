"""Command line interface for the xminds client."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

import click
from pydantic import ValidationError
from rich.console import Console

from . import __version__
from .api_clients import ApiError, TransportError, XMindsClient
from .config import ClientConfig, ConfigManager, ConfigurationError

console = Console()
error_console = Console(stderr=True)


def run_client(
    config: ClientConfig, action: Callable[[XMindsClient], Awaitable[Any]]
) -> Any:
    """Run ``action`` against a client built from ``config`` and close it."""

    async def _run() -> Any:
        async with XMindsClient.from_config(config) as client:
            return await action(client)

    return asyncio.run(_run())


def _call_and_print(ctx: click.Context, action: Callable[[XMindsClient], Awaitable[Any]]) -> None:
    try:
        result = run_client(ctx.obj["config"], action)
    except ApiError as e:
        error_console.print(f"❌ {e.kind.value}: {e.message}", style="red")
        sys.exit(1)
    except TransportError as e:
        error_console.print(f"❌ Network error: {e}", style="red")
        sys.exit(1)
    console.print_json(data=result)


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to the JSON configuration file",
)
@click.option("--host", default=None, help="API server root URL")
@click.option("--refresh-token", default=None, help="Refresh token used to authenticate")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.version_option(__version__, prog_name="xminds")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[Path],
    host: Optional[str],
    refresh_token: Optional[str],
    verbose: bool,
) -> None:
    """Query the Crossing Minds recommendation API."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = ConfigManager(config_path).load()
    except ConfigurationError as e:
        error_console.print(f"❌ {e}", style="red", markup=False)
        sys.exit(1)

    overrides = {}
    if host:
        overrides["host"] = host
    if refresh_token:
        overrides["refresh_token"] = refresh_token
    if overrides:
        try:
            config = ClientConfig(**{**config.model_dump(), **overrides})
        except ValidationError as e:
            error_console.print(f"❌ Invalid option: {e}", style="red", markup=False)
            sys.exit(1)

    if not config.refresh_token:
        error_console.print(
            "⚠️  No refresh token configured, authenticated calls will fail", style="yellow"
        )

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show the status of the current database."""
    _call_and_print(ctx, lambda client: client.get_current_database_status())


@cli.command()
@click.option("--amt", default=64, show_default=True, help="Databases per page")
@click.option("--page", default=1, show_default=True, help="Page to list")
@click.pass_context
def databases(ctx: click.Context, amt: int, page: int) -> None:
    """List the databases of the organization."""
    _call_and_print(ctx, lambda client: client.list_all_databases(amt=amt, page=page))


@cli.command()
@click.pass_context
def scenarios(ctx: click.Context) -> None:
    """List every scenario of the current database."""
    _call_and_print(ctx, lambda client: client.list_all_scenarios())


@cli.command("recommend-user")
@click.argument("user_id")
@click.option("--amt", default=10, show_default=True, help="Number of items")
@click.option("--scenario", default=None, help="Scenario name")
@click.pass_context
def recommend_user(ctx: click.Context, user_id: str, amt: int, scenario: Optional[str]) -> None:
    """Recommend items to USER_ID."""
    _call_and_print(
        ctx,
        lambda client: client.get_recommendations_user_to_items(
            user_id, amt=amt, scenario=scenario
        ),
    )


@cli.command("recommend-item")
@click.argument("item_id")
@click.option("--amt", default=10, show_default=True, help="Number of items")
@click.option("--scenario", default=None, help="Scenario name")
@click.pass_context
def recommend_item(ctx: click.Context, item_id: str, amt: int, scenario: Optional[str]) -> None:
    """Recommend items similar to ITEM_ID."""
    _call_and_print(
        ctx,
        lambda client: client.get_recommendations_item_to_items(
            item_id, amt=amt, scenario=scenario
        ),
    )


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()

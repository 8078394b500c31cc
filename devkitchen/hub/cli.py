"""
Hub admin CLI.

Usage:
    devkitchen-hub user-cache info
    devkitchen-hub user-cache clear --user-id 7
    devkitchen-hub user-cache clear
    devkitchen-hub user-cache test
"""
from __future__ import annotations

import asyncio
import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from devkitchen.hub.core.errors import HubError
from devkitchen.hub import main as hub_main
from devkitchen.hub.users import get_cache_info

logger = logging.getLogger(__name__)

console = Console()

app = typer.Typer(
    name="devkitchen-hub",
    help="Hub administration commands",
    no_args_is_help=True,
)

user_cache_app = typer.Typer(
    name="user-cache",
    help="Manage user cache operations",
    no_args_is_help=True,
)
app.add_typer(user_cache_app, name="user-cache")


@user_cache_app.command("info")
def info() -> None:
    """Show cache configuration and status."""
    asyncio.run(_info_async())


async def _info_async() -> None:
    runtime = await hub_main.build_runtime()
    cache_info = await get_cache_info(runtime.cache)
    debug = await runtime.user_service.debug_info()

    table = Table(title="User Cache Information")
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("Cache Backend", runtime.settings.cache_backend)
    table.add_row("Cache Store", str(cache_info["cache_store"]))
    table.add_row("Cache Available", "yes" if cache_info["is_available"] else "no")
    table.add_row("Cache Prefix", runtime.settings.user_cache_prefix)
    table.add_row("Cache TTL", f"{runtime.settings.user_cache_ttl}s")
    table.add_row("Repository Class", debug["repository_class"])
    console.print(table)


@user_cache_app.command("clear")
def clear(
    user_id: Annotated[
        int | None,
        typer.Option("--user-id", help="Only clear the cache of this user"),
    ] = None,
) -> None:
    """Clear one user's cache entries, or all user caches."""
    try:
        asyncio.run(_clear_async(user_id))
    except HubError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)


async def _clear_async(user_id: int | None) -> None:
    service = (await hub_main.build_runtime()).user_service

    if user_id is not None:
        console.print(f"Clearing cache for user ID: {user_id}")
        await service.invalidate_user_cache(user_id)
        console.print("[green]User cache cleared successfully[/green]")
    else:
        console.print("Clearing all user caches")
        removed = await service.clear_all_user_cache()
        console.print(
            f"[green]All user caches cleared successfully[/green] ({removed} entries)"
        )


@user_cache_app.command("test")
def run_checks() -> None:
    """Check that the runtime and cache can be built and reached."""
    console.print("Testing cache functionality")

    try:
        asyncio.run(_checks_async())
    except HubError as exc:
        console.print(f"[red]Test failed:[/red] {exc}")
        console.print("Please check your cache configuration and try again.")
        raise typer.Exit(1)

    console.print("[green]All checks passed[/green]")


async def _checks_async() -> None:
    runtime = await hub_main.build_runtime()
    console.print(
        f"Repository created: {type(runtime.user_service.repository).__name__}"
    )
    cache_info = await get_cache_info(runtime.cache)
    console.print(f"Cache available: {'yes' if cache_info['is_available'] else 'no'}")


if __name__ == "__main__":
    app()

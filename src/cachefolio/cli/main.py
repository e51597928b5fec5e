"""Main CLI entry point for cachefolio.

Provides command-line access to a file-backed cache directory.
"""

import logging
import sys
from datetime import datetime

import click
import orjson
from rich.console import Console
from rich.table import Table

from cachefolio.config import CacheConfig
from cachefolio.exceptions import CacheError
from cachefolio.handlers import FileHandler

# Global console for Rich output
console = Console()


def open_cache(ctx) -> FileHandler:
    """Build a file handler from environment settings and CLI flags.

    Priority for each option:
    1. Explicit --path/--prefix flag
    2. CACHEFOLIO_* environment variables
    3. Handler defaults

    Raises:
        click.ClickException: If no cache directory is configured
    """
    config = CacheConfig.from_env()
    options = dict(config.options)
    options.update({k: v for k, v in ctx.obj.items() if v is not None})

    if not options.get("path"):
        raise click.ClickException(
            "No cache directory: pass --path/-C or set CACHEFOLIO_PATH"
        )
    return FileHandler(options)


def parse_value(text: str):
    """Parse a CLI value as JSON, falling back to the raw string."""
    try:
        return orjson.loads(text)
    except orjson.JSONDecodeError:
        return text


def format_timestamp(timestamp) -> str:
    if timestamp is None:
        return ""
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M:%S")


@click.group()
@click.option(
    "--path",
    "-C",
    type=click.Path(file_okay=False),
    help="Cache directory (default: CACHEFOLIO_PATH env var)",
)
@click.option("--prefix", help="Key prefix (default: cache_)")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, path, prefix, verbose):
    """cachefolio CLI - Inspect and modify a file cache directory."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    ctx.ensure_object(dict)
    ctx.obj["path"] = path
    ctx.obj["prefix"] = prefix


@cli.command("get")
@click.argument("key")
@click.option("--default", "-d", help="Value printed when the key is missing")
@click.pass_context
def get_command(ctx, key, default):
    """Print the value stored under KEY as JSON.

    Example:
        cachefolio -C /tmp/cache get user_42
    """
    try:
        cache = open_cache(ctx)
        value = cache.get(key, default)
        if isinstance(value, str):
            click.echo(value)
        else:
            click.echo(orjson.dumps(value).decode())
    except CacheError as e:
        console.print(f"[red]✗[/red] Error: {e}", style="red")
        sys.exit(1)


@cli.command("set")
@click.argument("key")
@click.argument("value")
@click.option("--ttl", "-t", type=int, help="Time to live in seconds")
@click.pass_context
def set_command(ctx, key, value, ttl):
    """Store VALUE under KEY. VALUE is parsed as JSON when possible.

    Example:
        cachefolio -C /tmp/cache set counter 10 --ttl 3600
    """
    try:
        cache = open_cache(ctx)
        if not cache.set(key, parse_value(value), ttl):
            console.print(f"[red]✗[/red] Could not store '{key}'")
            sys.exit(1)
        console.print(f"[green]✓[/green] Stored '{key}'")
    except CacheError as e:
        console.print(f"[red]✗[/red] Error: {e}", style="red")
        sys.exit(1)


@cli.command("delete")
@click.argument("key")
@click.pass_context
def delete_command(ctx, key):
    """Delete KEY from the cache."""
    try:
        cache = open_cache(ctx)
        if not cache.delete(key):
            console.print(f"[red]✗[/red] Could not delete '{key}'")
            sys.exit(1)
        console.print(f"[green]✓[/green] Deleted '{key}'")
    except CacheError as e:
        console.print(f"[red]✗[/red] Error: {e}", style="red")
        sys.exit(1)


@cli.command("has")
@click.argument("key")
@click.pass_context
def has_command(ctx, key):
    """Exit with status 0 if KEY is cached, 1 otherwise."""
    try:
        cache = open_cache(ctx)
        found = cache.has(key)
    except CacheError as e:
        console.print(f"[red]✗[/red] Error: {e}", style="red")
        sys.exit(1)

    if found:
        console.print(f"[green]✓[/green] '{key}' is cached")
    else:
        console.print(f"[yellow]'{key}' is not cached[/yellow]")
        sys.exit(1)


@cli.command("incr")
@click.argument("key")
@click.option("--by", "offset", type=int, default=1, show_default=True)
@click.pass_context
def incr_command(ctx, key, offset):
    """Increment a numeric value and print the result."""
    try:
        cache = open_cache(ctx)
        click.echo(cache.increment(key, offset))
    except CacheError as e:
        console.print(f"[red]✗[/red] Error: {e}", style="red")
        sys.exit(1)


@cli.command("decr")
@click.argument("key")
@click.option("--by", "offset", type=int, default=1, show_default=True)
@click.pass_context
def decr_command(ctx, key, offset):
    """Decrement a numeric value and print the result."""
    try:
        cache = open_cache(ctx)
        click.echo(cache.decrement(key, offset))
    except CacheError as e:
        console.print(f"[red]✗[/red] Error: {e}", style="red")
        sys.exit(1)


@cli.command("clear")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
def clear_command(ctx, yes):
    """Delete every entry under the prefix."""
    try:
        cache = open_cache(ctx)
        prefix = cache.get_option("prefix", "")
        if not yes:
            click.confirm(
                f"Delete all entries starting with '{prefix}' in {cache.get_option('path')}?",
                abort=True,
            )
        cache.clear()
        console.print("[green]✓[/green] Cache cleared")
    except CacheError as e:
        console.print(f"[red]✗[/red] Error: {e}", style="red")
        sys.exit(1)


@cli.command("ls")
@click.pass_context
def ls_command(ctx):
    """List cached entries with their size and expiry."""
    try:
        cache = open_cache(ctx)
        keys = cache.keys()
    except CacheError as e:
        console.print(f"[red]✗[/red] Error: {e}", style="red")
        sys.exit(1)

    if not keys:
        console.print("[yellow]No cache entries found[/yellow]")
        return

    table = Table(title=f"Cache entries ({len(keys)})")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Size", justify="right", style="green")
    table.add_column("Stored", style="blue")
    table.add_column("TTL", justify="right")
    table.add_column("Remaining", justify="right", style="magenta")

    for key in keys:
        status = cache.get_status(key)
        if status is None:
            table.add_row(key, "", "", "", "[red]corrupt[/red]")
            continue

        if status["expired"]:
            remaining = "[red]expired[/red]"
        elif status["ttl_remaining"] is None:
            remaining = "never"
        else:
            remaining = f"{status['ttl_remaining']}s"

        table.add_row(
            key,
            f"{status['size_bytes']} B",
            format_timestamp(status["stored_at"]),
            "" if status["ttl"] is None else str(status["ttl"]),
            remaining,
        )

    console.print(table)


if __name__ == "__main__":
    cli()

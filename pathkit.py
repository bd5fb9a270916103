#!/usr/bin/env python3
"""
PathKit - filesystem helpers

Command-line front end over PathService.
"""

import sys

import click
from rich.console import Console
from rich.table import Table

from core import FilesystemError, StructuredLogger, load_settings
from core.config import DEFAULT_CONFIG_PATH
from modules.filesystem import PathService, DEFAULT_DIRECTORY_MODE, DEFAULT_FILE_MODE


console = Console()
err_console = Console(stderr=True)


def get_path_service(ctx: click.Context) -> PathService:
    """Get the PathService configured for this invocation."""
    return ctx.obj["service"]


def fail(error: FilesystemError) -> None:
    """Report a library error and exit with status 1."""
    err_console.print(f"[red]Error:[/red] {error}")
    sys.exit(1)


def parse_mode(value: str) -> int:
    """Parse an octal permission string such as "644" or "0o755"."""
    try:
        return int(value, 8)
    except ValueError:
        raise click.BadParameter(f"not an octal mode: {value}")


@click.group()
@click.version_option(version="0.1.0", prog_name="PathKit")
@click.option("--config", "config_path", default=DEFAULT_CONFIG_PATH, show_default=True,
              help="YAML settings file.")
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (repeatable).")
@click.pass_context
def pathkit(ctx: click.Context, config_path: str, verbose: int):
    """
    PathKit - consistent, logged filesystem operations.

    Paths may start with ~ for the current user's home directory.
    """
    settings = load_settings(config_path)
    if verbose:
        settings.verbosity = verbose
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["service"] = settings.build_service()


@pathkit.command()
@click.argument("path")
@click.pass_context
def expand(ctx: click.Context, path: str):
    """Print PATH with ~ expanded."""
    try:
        console.print(get_path_service(ctx).expand_home(path), soft_wrap=True, highlight=False)
    except FilesystemError as e:
        fail(e)


@pathkit.command()
@click.argument("path")
@click.pass_context
def exists(ctx: click.Context, path: str):
    """Exit 0 if PATH exists, 1 otherwise."""
    found = get_path_service(ctx).exists(path)
    console.print("yes" if found else "no")
    sys.exit(0 if found else 1)


@pathkit.command()
@click.argument("paths", nargs=-1, required=True)
@click.pass_context
def info(ctx: click.Context, paths):
    """Show what kind of entry each PATH is."""
    service = get_path_service(ctx)

    table = Table(title="Path Info")
    table.add_column("Path")
    table.add_column("Exists")
    table.add_column("Directory")
    table.add_column("File")
    table.add_column("Empty")
    table.add_column("Extension", style="dim")

    def mark(value: bool) -> str:
        return "[green]✔[/green]" if value else "[dim]—[/dim]"

    for path in paths:
        try:
            empty = service.is_empty_directory(path)
        except FilesystemError as e:
            fail(e)
        table.add_row(
            path,
            mark(service.exists(path)),
            mark(service.is_directory(path)),
            mark(service.is_file(path)),
            mark(empty),
            service.get_file_extension(path)
        )

    console.print(table)


@pathkit.command("ls")
@click.argument("path", default=".")
@click.option("--slash/--no-slash", default=True, help="Mark directories with a trailing slash.")
@click.pass_context
def list_directory(ctx: click.Context, path: str, slash: bool):
    """List the entries of a directory."""
    service = get_path_service(ctx)
    try:
        names = service.get_directory_contents(path)
    except FilesystemError as e:
        fail(e)

    if not names:
        console.print("[dim]Directory is empty.[/dim]")
        return

    base = service.force_trailing_slash(path)
    for name in names:
        if slash and service.is_directory(base + name):
            name = service.force_trailing_slash(name)
        console.print(name, soft_wrap=True, highlight=False)


@pathkit.command("mkdir")
@click.argument("path")
@click.option("--mode", default=oct(DEFAULT_DIRECTORY_MODE), show_default=True,
              help="Octal permission bits for new directories.")
@click.pass_context
def make_directory(ctx: click.Context, path: str, mode: str):
    """Create a directory and any missing parents."""
    try:
        get_path_service(ctx).create_directory(path, parse_mode(mode))
    except FilesystemError as e:
        fail(e)
    console.print(f"[green]Directory ready:[/green] {path}")


@pathkit.command("rmdir")
@click.argument("path")
@click.option("-r", "--recursive", is_flag=True, help="Remove the directory and everything in it.")
@click.pass_context
def remove_directory(ctx: click.Context, path: str, recursive: bool):
    """Remove a directory."""
    try:
        get_path_service(ctx).remove_directory(path, recursive=recursive)
    except FilesystemError as e:
        fail(e)
    console.print(f"[green]Removed:[/green] {path}")


@pathkit.command()
@click.argument("path")
@click.pass_context
def cat(ctx: click.Context, path: str):
    """Print the contents of a text file."""
    try:
        contents = get_path_service(ctx).load_file_string(path)
    except FilesystemError as e:
        fail(e)
    click.echo(contents, nl=False)


@pathkit.command()
@click.argument("path")
@click.argument("content", required=False)
@click.option("--mode", default=oct(DEFAULT_FILE_MODE), show_default=True,
              help="Octal permission bits if the file is created.")
@click.pass_context
def write(ctx: click.Context, path: str, content, mode: str):
    """Write CONTENT (or stdin) to a file, replacing what was there."""
    data = content.encode("utf-8") if content is not None else click.get_binary_stream("stdin").read()
    try:
        get_path_service(ctx).write_file(path, data, parse_mode(mode))
    except FilesystemError as e:
        fail(e)
    console.print(f"[green]Wrote {len(data)} bytes:[/green] {path}")


@pathkit.command()
@click.argument("paths", nargs=-1, required=True)
@click.pass_context
def checksum(ctx: click.Context, paths):
    """Print SHA-256 checksums in sha256sum format."""
    service = get_path_service(ctx)
    for path in paths:
        try:
            digest = service.get_file_sha256_checksum(path)
        except FilesystemError as e:
            fail(e)
        click.echo(f"{digest}  {path}")


@pathkit.command()
@click.argument("path")
@click.pass_context
def ext(ctx: click.Context, path: str):
    """Print the extension of PATH without the dot."""
    click.echo(get_path_service(ctx).get_file_extension(path))


@pathkit.command()
@click.option("--limit", default=20, show_default=True, help="Number of entries to show.")
@click.pass_context
def log(ctx: click.Context, limit: int):
    """View recent entries of the JSONL log file."""
    settings = ctx.obj["settings"]
    if not settings.log_path:
        console.print("[dim]No log_path configured.[/dim]")
        return

    entries = StructuredLogger(log_path=settings.log_path, echo=False).get_recent(limit=limit)

    if not entries:
        console.print("[dim]No log entries found.[/dim]")
        return

    table = Table(title="Recent Log")
    table.add_column("Time", style="dim")
    table.add_column("Level")
    table.add_column("Message")
    table.add_column("Fields", style="dim")

    for entry in entries:
        time_str = entry.timestamp.split("T")[1].split(".")[0] if "T" in entry.timestamp else entry.timestamp

        level_str = entry.level
        if entry.level == "ERROR":
            level_str = f"[red]{entry.level}[/red]"
        elif entry.level == "WARNING":
            level_str = f"[yellow]{entry.level}[/yellow]"

        fields = " ".join(f"{k}={v}" for k, v in entry.fields.items())
        table.add_row(time_str, level_str, entry.message, fields)

    console.print(table)


if __name__ == "__main__":
    pathkit()

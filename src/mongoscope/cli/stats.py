"""Stats CLI commands for mongoscope.

Adds ``litestar mongo`` for inspecting a deployment from a terminal with the
same services the HTTP endpoints use.
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, NoReturn

import rich_click as click
from litestar.plugins import CLIPluginProtocol
from pymongo import MongoClient
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mongoscope.auth.registry import ConnectionRegistry
from mongoscope.core.config import MongoscopeSettings
from mongoscope.exceptions import MongoscopeError
from mongoscope.services.collection import CollectionService
from mongoscope.services.database import DatabaseService
from mongoscope.services.server import ServerService

if TYPE_CHECKING:
    from collections.abc import Generator

console = Console()

CLI_USER = "cli"
MAX_VALUE_WIDTH = 80


@contextmanager
def cli_connections(uri: str | None) -> Generator[ConnectionRegistry, None, None]:
    """Open a client for the CLI user and close it on exit."""
    settings = MongoscopeSettings()
    connections = ConnectionRegistry()
    connections.attach(
        CLI_USER,
        MongoClient(uri or settings.mongo_uri, serverSelectionTimeoutMS=settings.server_selection_timeout_ms),
    )
    try:
        yield connections
    finally:
        connections.close_all()


def _render_value(value: Any) -> str:
    text = value if isinstance(value, str) else json.dumps(value, default=str)
    if len(text) > MAX_VALUE_WIDTH:
        return text[: MAX_VALUE_WIDTH - 3] + "..."
    return text


def print_entries(title: str, entries: list[dict[str, Any]]) -> None:
    """Print flattened stat entries as a table."""
    table = Table(title=f"{title} ({len(entries)} fields)")
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Type", style="dim")

    for entry in entries:
        table.add_row(escape(entry["Key"]), escape(_render_value(entry["Value"])), entry["Type"])

    console.print(table)


def _fail(exc: MongoscopeError) -> NoReturn:
    console.print(f"[red]{exc.code.value}:[/red] {escape(exc.message)}")
    raise SystemExit(1) from exc


uri_option = click.option("--uri", "-u", default=None, help="MongoDB connection string (defaults to $MONGO_URI)")


@click.group(name="mongo", help="Show MongoDB server, database and collection statistics.")
def mongo_group() -> None:
    """Show MongoDB server, database and collection statistics."""


@mongo_group.command(name="server", help="Show serverStatus of the server.")
@uri_option
def server_stats(uri: str | None) -> None:
    """Show the serverStatus document."""
    with cli_connections(uri) as connections:
        try:
            entries = ServerService(CLI_USER, connections).get_server_entries()
        except MongoscopeError as e:
            _fail(e)

    print_entries("Server status", entries)


@mongo_group.command(name="db", help="Show dbStats of a database.")
@click.argument("db_name")
@uri_option
def db_stats(db_name: str, uri: str | None) -> None:
    """Show the dbStats of DB_NAME."""
    with cli_connections(uri) as connections:
        try:
            entries = DatabaseService(CLI_USER, connections).get_db_stats(db_name)
        except MongoscopeError as e:
            _fail(e)

    print_entries(f"Database {db_name}", entries)


@mongo_group.command(name="coll", help="Show collStats of a collection.")
@click.argument("db_name")
@click.argument("collection_name")
@uri_option
def coll_stats(db_name: str, collection_name: str, uri: str | None) -> None:
    """Show the collStats of COLLECTION_NAME in DB_NAME."""
    with cli_connections(uri) as connections:
        try:
            entries = CollectionService(CLI_USER, connections).get_coll_stats(db_name, collection_name)
        except MongoscopeError as e:
            _fail(e)

    print_entries(f"Collection {db_name}.{collection_name}", entries)


class MongoscopeCLIPlugin(CLIPluginProtocol):
    """CLI plugin that adds the ``mongo`` command group.

    Subcommands:
    - server: serverStatus of the server
    - db: dbStats of a database
    - coll: collStats of a collection
    """

    def on_cli_init(self, cli: click.Group) -> None:
        """Register the mongo command group."""
        cli.add_command(mongo_group)

"""CLI: couchcandy dbs list|info|create|delete"""

import click
from rich.console import Console
from rich.table import Table

from couchcandy.errors import CouchCandyError

console = Console()


def _get_client():
    from couchcandy.cli.main import _get_client
    return _get_client()


def _fail(err):
    from couchcandy.cli.main import _fail
    _fail(err)


@click.group()
def dbs():
    """Database management."""


@dbs.command("list")
def dbs_list():
    """List all databases."""
    with _get_client() as client:
        try:
            names = client.get_all_databases()
        except CouchCandyError as e:
            _fail(e)
    for name in names:
        click.echo(name)


@dbs.command("info")
@click.option("--json-output", "--json", is_flag=True)
def dbs_info(json_output):
    """Show information about the current database."""
    with _get_client() as client:
        try:
            info = client.get_database_info().raise_for_error()
        except CouchCandyError as e:
            _fail(e)
    if json_output:
        click.echo(info.model_dump_json(indent=2, exclude_none=True))
        return
    table = Table(title=info.db_name)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for field, value in info.model_dump(exclude_none=True).items():
        table.add_row(field, str(value))
    console.print(table)


@dbs.command("create")
@click.argument("name")
def dbs_create(name):
    """Create a database."""
    with _get_client() as client:
        try:
            with console.status("Creating database..."):
                client.put_database(name).raise_for_error()
        except CouchCandyError as e:
            _fail(e)
    console.print(f"[green]Database {name} created.[/green]")


@dbs.command("delete")
@click.argument("name")
@click.confirmation_option(prompt="Delete this database and all its documents?")
def dbs_delete(name):
    """Delete a database."""
    with _get_client() as client:
        try:
            with console.status("Deleting..."):
                client.delete_database(name).raise_for_error()
        except CouchCandyError as e:
            _fail(e)
    console.print(f"[green]Database {name} deleted.[/green]")

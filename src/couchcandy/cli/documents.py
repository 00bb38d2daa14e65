"""CLI: couchcandy docs get|list|delete|changes, couchcandy design list|view"""

import click
from rich.console import Console
from rich.table import Table

from couchcandy.errors import CouchCandyError
from couchcandy.options import NotificationStyle, Options

console = Console()


def _get_client():
    from couchcandy.cli.main import _get_client
    return _get_client()


def _echo_json(data):
    from couchcandy.cli.main import _echo_json
    _echo_json(data)


def _fail(err):
    from couchcandy.cli.main import _fail
    _fail(err)


@click.group()
def docs():
    """Document commands."""


@docs.command("get")
@click.argument("doc_id")
@click.option("--rev", default="", help="Fetch a specific revision")
@click.option("--revs", is_flag=True, help="Include the revision history")
def docs_get(doc_id, rev, revs):
    """Print a document as JSON."""
    with _get_client() as client:
        try:
            document = client.get_document(doc_id, options=Options(revision=rev, revisions=revs))
        except CouchCandyError as e:
            _fail(e)
    _echo_json(document)


@docs.command("list")
@click.option("--limit", default=10, type=int)
@click.option("--skip", default=0, type=int)
@click.option("--descending", is_flag=True)
@click.option("--json-output", "--json", is_flag=True)
def docs_list(limit, skip, descending, json_output):
    """List documents in the current database."""
    with _get_client() as client:
        try:
            result = client.get_all_documents(Options(limit=limit, skip=skip, descending=descending))
            result.raise_for_error()
        except CouchCandyError as e:
            _fail(e)
    if json_output:
        click.echo(result.model_dump_json(indent=2, exclude_none=True))
        return
    table = Table(title=f"Documents ({result.total_rows} total)")
    table.add_column("ID", style="bold")
    table.add_column("Rev")
    for row in result.rows:
        table.add_row(row.id or "", row.value.rev if row.value else "")
    console.print(table)


@docs.command("delete")
@click.argument("doc_id")
@click.argument("rev")
def docs_delete(doc_id, rev):
    """Delete a document revision."""
    with _get_client() as client:
        try:
            response = client.delete_document(doc_id, rev).raise_for_error()
        except CouchCandyError as e:
            _fail(e)
    console.print(f"[green]Document {doc_id} deleted (rev {response.rev}).[/green]")


@docs.command("changes")
@click.option("--style", type=click.Choice([s.value for s in NotificationStyle]), default="main_only")
@click.option("--since", default=None)
def docs_changes(style, since):
    """Show the changes feed of the current database."""
    with _get_client() as client:
        try:
            changes = client.get_changes(Options(notification_style=NotificationStyle(style)), since=since)
            changes.raise_for_error()
        except CouchCandyError as e:
            _fail(e)
    table = Table(title=f"Changes (last_seq {changes.last_seq})")
    table.add_column("Seq")
    table.add_column("ID", style="bold")
    table.add_column("Revs")
    for result in changes.results:
        table.add_row(str(result.seq), result.id, ", ".join(c.rev for c in result.changes))
    console.print(table)


@click.group()
def design():
    """Design documents and views."""


@design.command("list")
def design_list():
    """List design documents by kind."""
    with _get_client() as client:
        try:
            design_docs = client.get_design_documents()
        except CouchCandyError as e:
            _fail(e)
    table = Table(title="Design documents")
    table.add_column("ID", style="bold")
    table.add_column("Kind")
    table.add_column("Views")
    for doc in design_docs.map_reduce:
        table.add_row(doc.id or "", "map/reduce", ", ".join(doc.views))
    for doc in design_docs.indexes:
        table.add_row(doc.id or "", "index", ", ".join(doc.views))
    console.print(table)
    if design_docs.skipped:
        console.print(f"[yellow]{design_docs.skipped} design document(s) with an unknown language skipped.[/yellow]")


@design.command("view")
@click.argument("design_doc")
@click.argument("view")
@click.option("--key", default="", help="JSON key, e.g. '\"serge\"'")
@click.option("--limit", default=0, type=int)
@click.option("--reduce/--no-reduce", default=False)
@click.option("--group-level", default=0, type=int)
@click.option("--include-docs", is_flag=True)
def design_view(design_doc, view, key, limit, reduce, group_level, include_docs):
    """Query a view and print its rows as JSON."""
    options = Options(key=key, limit=limit, reduce=reduce, group_level=group_level, include_docs=include_docs)
    with _get_client() as client:
        try:
            result = client.call_view(design_doc, view, options).raise_for_error()
        except CouchCandyError as e:
            _fail(e)
    _echo_json([row.model_dump(exclude_none=True) for row in result.rows])

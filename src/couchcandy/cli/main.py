"""
couchcandy CLI, the `couchcandy` command.

Commands:
  couchcandy dbs <cmd>        list | info | create | delete
  couchcandy docs <cmd>       get | list | delete | changes
  couchcandy design <cmd>     list | view

Connection settings come from options or the dbhost, dbport, dbname,
dbusername and dbpassword environment variables.
"""

import json
import logging

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install couchcandy[cli]")

from couchcandy.client import CouchCandy
from couchcandy.errors import CouchCandyError
from couchcandy.session import DEFAULT_PORT, Session

console = Console()


def _get_client() -> CouchCandy:
    ctx = click.get_current_context()
    return CouchCandy(ctx.find_root().obj)


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2))


def _fail(err: CouchCandyError) -> None:
    console.print(f"[red]{err.code}: {err}[/red]")
    raise SystemExit(1)


@click.group()
@click.version_option("0.1.0")
@click.option("--host", envvar="dbhost", default="http://127.0.0.1", show_default=True)
@click.option("--port", envvar="dbport", default=DEFAULT_PORT, type=int, show_default=True)
@click.option("--db", "database", envvar="dbname", default="")
@click.option("--username", envvar="dbusername", default="")
@click.option("--password", envvar="dbpassword", default="")
@click.option("-v", "--verbose", is_flag=True, help="Log HTTP requests")
@click.pass_context
def main(ctx, host, port, database, username, password, verbose):
    """Talk to a CouchDB server."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    ctx.obj = Session(host=host, port=port, database=database, username=username, password=password)


from couchcandy.cli.databases import dbs
from couchcandy.cli.documents import docs, design

main.add_command(dbs)
main.add_command(docs)
main.add_command(design)


if __name__ == "__main__":
    main()

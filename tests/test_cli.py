"""CLI commands with the client swapped for a canned transport."""

import json

import pytest
from click.testing import CliRunner

from couchcandy import CouchCandy, Session
from couchcandy.cli import main as cli_main


@pytest.fixture
def runner(monkeypatch, transport):
    session = Session(host="http://127.0.0.1", database="candy")
    monkeypatch.setattr(cli_main, "_get_client", lambda: CouchCandy(session, transport))
    return CliRunner()


def test_dbs_list(runner, transport):
    transport.responses["GET"] = b'["_users","candy"]'
    result = runner.invoke(cli_main.main, ["dbs", "list"])
    assert result.exit_code == 0
    assert result.output.split() == ["_users", "candy"]


def test_docs_list_json(runner, transport):
    transport.responses["GET"] = b'{"total_rows":1,"offset":0,"rows":[{"id":"a","key":"a","value":{"rev":"1-a"}}]}'
    result = runner.invoke(cli_main.main, ["docs", "list", "--limit", "5", "--json"])
    assert result.exit_code == 0
    assert json.loads(result.output)["rows"][0]["id"] == "a"
    assert "limit=5" in transport.last_url


def test_docs_get(runner, transport):
    transport.responses["GET"] = b'{"_id":"a","_rev":"1-a"}'
    result = runner.invoke(cli_main.main, ["docs", "get", "a"])
    assert result.exit_code == 0
    assert json.loads(result.output) == {"_id": "a", "_rev": "1-a"}


def test_server_error_exits_nonzero(runner, transport):
    transport.responses["PUT"] = b'{"error":"file_exists","reason":"The database could not be created."}'
    result = runner.invoke(cli_main.main, ["dbs", "create", "candy"])
    assert result.exit_code == 1
    assert "file_exists" in result.output

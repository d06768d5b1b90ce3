import argparse
import json

import pytest

from cypherkit import cli
from cypherkit.neo4j import Single


class FakeClient:
    calls = []

    def __init__(self, config=None):
        self.config = config

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None

    async def execute(self, query, **kwargs):
        FakeClient.calls.append((query, kwargs))
        return Single([{"name": "Ana"}])

    async def verify_connectivity(self):
        return False


def test_parse_param_reads_json_values() -> None:
    assert cli._parse_param("age=30") == ("age", 30)
    assert cli._parse_param('tags=["a", "b"]') == ("tags", ["a", "b"])
    assert cli._parse_param("name=Ana") == ("name", "Ana")

    with pytest.raises(argparse.ArgumentTypeError):
        cli._parse_param("no-separator")


def test_build_parser_run_command() -> None:
    args = cli.build_parser().parse_args(
        ["run", "RETURN $age", "--param", "age=30", "--return-type", "RAW", "--date-type", "native"]
    )

    assert args.cypher == "RETURN $age"
    assert args.param == [("age", 30)]
    assert args.return_type == "raw"
    assert args.date_type == "native"


def test_run_prints_results(monkeypatch, capsys) -> None:
    FakeClient.calls = []
    monkeypatch.setattr(cli, "Neo4jClient", FakeClient)

    with pytest.raises(SystemExit) as exit_info:
        cli.main(["run", "MATCH (n) RETURN n.name", "--param", "limit=5"])

    assert exit_info.value.code == 0
    output = json.loads(capsys.readouterr().out)
    assert output == {"count": 1, "results": [{"name": "Ana"}]}

    query, kwargs = FakeClient.calls[0]
    assert query.cypher == "MATCH (n) RETURN n.name"
    assert query.params == {"limit": 5}
    assert kwargs == {"return_type": "parser", "date_type": None}


def test_ping_exit_code(monkeypatch, capsys) -> None:
    monkeypatch.setattr(cli, "Neo4jClient", FakeClient)

    with pytest.raises(SystemExit) as exit_info:
        cli.main(["ping"])

    assert exit_info.value.code == 1
    assert json.loads(capsys.readouterr().out)["connected"] is False

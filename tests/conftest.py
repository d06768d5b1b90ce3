from __future__ import annotations

from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from neo4j import EagerResult, Record

from cypherkit import Config
from cypherkit.neo4j import client as client_module


def make_eager(rows: List[Dict[str, Any]]) -> EagerResult:
    records = [Record(row) for row in rows]
    keys = list(rows[0].keys()) if rows else []
    return EagerResult(records, None, keys)


class FakeRunner:
    """Stands in for AsyncSession / AsyncTransaction ``run``."""

    def __init__(self, responses: Dict[str, Any]) -> None:
        self.responses = responses
        self.calls: List[tuple] = []

    async def run(self, cypher: str, params: Optional[Dict[str, Any]] = None) -> MagicMock:
        self.calls.append((cypher, params))
        response = self.responses.get(cypher, [])
        if isinstance(response, Exception):
            raise response
        if callable(response):
            response = await response()

        result = MagicMock()
        result.to_eager_result = AsyncMock(return_value=make_eager(response))
        return result


class FakeTransaction(FakeRunner):
    def __init__(self, responses: Dict[str, Any]) -> None:
        super().__init__(responses)
        self.is_closed = False
        self.commit = AsyncMock(side_effect=self._close)
        self.rollback = AsyncMock(side_effect=self._close)

    async def _close(self) -> None:
        self.is_closed = True

    def closed(self) -> bool:
        return self.is_closed


class FakeSession(FakeRunner):
    def __init__(self, responses: Dict[str, Any]) -> None:
        super().__init__(responses)
        self.tx = FakeTransaction(responses)
        self.managed_tx = FakeTransaction(responses)
        self.close = AsyncMock()
        self.begin_transaction = AsyncMock(return_value=self.tx)
        self.execute_read = AsyncMock(side_effect=self._execute_managed)
        self.execute_write = AsyncMock(side_effect=self._execute_managed)

    async def _execute_managed(self, work, *args, **kwargs):
        return await work(self.managed_tx, *args, **kwargs)


@pytest.fixture
def responses() -> Dict[str, Any]:
    return {
        "MATCH (p:Person) RETURN p.name, p.age": [
            {"p.name": "Ana", "p.age": 30},
            {"p.name": "Bia", "p.age": 41},
        ],
        "MATCH (c:City) RETURN c.name": [{"c.name": "SP"}],
        "RETURN 1 AS one": [{"one": 1}],
    }


@pytest.fixture
def session(responses) -> FakeSession:
    return FakeSession(responses)


@pytest.fixture
def driver(session) -> MagicMock:
    driver = MagicMock()
    driver.session.return_value = session
    driver.close = AsyncMock()
    driver.verify_connectivity = AsyncMock()
    return driver


@pytest.fixture
def graph_database(monkeypatch, driver) -> MagicMock:
    graph_database = MagicMock()
    graph_database.driver.return_value = driver
    monkeypatch.setattr(client_module, "AsyncGraphDatabase", graph_database)
    return graph_database


@pytest.fixture
def config() -> Config:
    return Config(_env_file=None, url="bolt://test:7687", username="test_user", password="test_password")


@pytest.fixture
def client(graph_database, config) -> client_module.Neo4jClient:
    return client_module.Neo4jClient(config=config)

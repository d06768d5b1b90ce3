"""Neo4j connection, session and query execution management."""

from __future__ import annotations

import asyncio
import dataclasses
import inspect
import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, Mapping, Optional, Union

from neo4j import AsyncDriver, AsyncGraphDatabase, AsyncSession

from ..config import Config
from ..logs import log_query
from .query import to_query_specs
from .results import Empty, QueryOptions, QueryResult, Result, ReturnType, from_values

logger = logging.getLogger(__name__)

NotifyError = Callable[[BaseException, Any], None]
Execute = Callable[..., Awaitable[QueryResult]]
TransactionBlock = Callable[[Execute, Any], Any]


def _ignore_error(error: BaseException, query: Any) -> None:
    return None


def _query_count(query: Any) -> int:
    if query is None:
        return 0
    return len(query) if isinstance(query, list) else 1


class Neo4jClient:
    """Async Neo4j client with scoped sessions and parsed query results.

    Usage:
        async with Neo4jClient(Config(url="bolt://localhost:7687")) as client:
            rows = unwrap(await client.execute("MATCH (n:Person) RETURN n"))

            async def block(execute, tx):
                await execute({"cypher": "CREATE (:Person {name: $name})", "params": {"name": "Ana"}})
                return await execute("MATCH (p:Person) RETURN p.name")

            names = await client.transaction(block)
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        *,
        notify_error: Optional[NotifyError] = None,
        driver_config: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Initialize the client; no connection is made until first use."""
        self.config = config or Config()
        self.notify_error = notify_error
        self.driver_config: Dict[str, Any] = dict(driver_config or {})
        self._driver: Optional[AsyncDriver] = None

    @property
    def notify_error(self) -> NotifyError:
        """Callback receiving ``(error, query)`` before a failure is re-raised."""
        return self._notify_error

    @notify_error.setter
    def notify_error(self, value: Optional[NotifyError]) -> None:
        self._notify_error = value if callable(value) else _ignore_error

    def update_options(self, **changes: Any) -> None:
        """Update configuration fields in place; None values are ignored."""
        changes = {key: value for key, value in changes.items() if value is not None}

        if "notify_error" in changes:
            self.notify_error = changes.pop("notify_error")
        if "driver_config" in changes:
            self.driver_config = dict(changes.pop("driver_config"))

        if changes:
            self.config = self.config.model_copy(update=changes)

    def create_driver(self) -> AsyncDriver:
        """Create a new driver from the current configuration."""
        options: Dict[str, Any] = {
            "max_connection_lifetime": self.config.max_connection_lifetime,
            "max_connection_pool_size": self.config.max_connection_pool_size,
        }
        options.update(self.driver_config)

        return AsyncGraphDatabase.driver(
            self.config.url,
            auth=(self.config.username, self.config.password),
            **options,
        )

    @property
    def driver(self) -> AsyncDriver:
        """Shared driver, created lazily."""
        if self._driver is None:
            self._driver = self.create_driver()
        return self._driver

    async def close(self) -> None:
        """Close the shared driver connection."""
        if self._driver is not None:
            await self._driver.close()
            self._driver = None

    async def verify_connectivity(self) -> bool:
        """Verify connection to Neo4j database."""
        try:
            await self.driver.verify_connectivity()
            return True
        except Exception as e:
            logger.error("Neo4j connectivity check failed: %s", e, exc_info=True)
            return False

    @asynccontextmanager
    async def session(self, **kwargs: Any) -> AsyncIterator[AsyncSession]:
        """Context manager for a Neo4j session.

        With ``auto_close_driver`` set, a dedicated driver is created for the
        session and closed together with it.
        """
        auto_close = self.config.auto_close_driver
        driver = self.create_driver() if auto_close else self.driver
        session = driver.session(database=self.config.database, **kwargs)
        try:
            yield session
        finally:
            try:
                await session.close()
            finally:
                if auto_close:
                    await driver.close()

    def _options(self, options: Union[QueryOptions, Mapping[str, Any], None], overrides: Mapping[str, Any]) -> QueryOptions:
        overrides = {key: value for key, value in overrides.items() if value is not None}
        if isinstance(options, QueryOptions):
            return dataclasses.replace(options, **overrides) if overrides else options

        values: Dict[str, Any] = {"date_type": self.config.date_type}
        if options is not None:
            if not isinstance(options, Mapping):
                raise ValueError(f"options must be QueryOptions or a mapping, got {type(options).__name__}")
            values.update(options)
        values.update(overrides)
        return QueryOptions(**values)

    async def _run(self, runner: Any, query: Any, options: QueryOptions, lock: asyncio.Lock) -> QueryResult:
        """Run one query or a batch on a session or transaction.

        Batch members are gathered jointly; the lock serializes their use of
        the shared runner. When one member fails the others are cancelled
        before the error propagates, so none outlives its session.
        """
        specs = to_query_specs(query)
        if not specs:
            return Empty()

        raw = self.config.raw or options.return_type is ReturnType.RAW

        async def run_one(spec):
            cypher, params = spec.normalized()
            if options.debug:
                logger.debug("Running Cypher: %s | params: %r", cypher, params)

            async with lock:
                result = await runner.run(cypher, params)
                eager = await result.to_eager_result()

            if raw:
                return eager
            if options.return_type is ReturnType.PARSER_RAW:
                return Result(eager, options)
            return Result(eager, options).value

        tasks = [asyncio.ensure_future(run_one(spec)) for spec in specs]
        try:
            values = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return from_values(values)

    async def execute(
        self,
        query: Any,
        options: Union[QueryOptions, Mapping[str, Any], None] = None,
        **kwargs: Any,
    ) -> QueryResult:
        """Run a query or a batch of queries in one session.

        Args:
            query: Cypher string, ``QuerySpec``, ``(cypher, params)`` tuple,
                ``{"cypher": ..., "params": ...}`` mapping, or a list of these.
            options: ``QueryOptions`` or a mapping of its fields.
            **kwargs: Individual ``QueryOptions`` fields overriding ``options``.

        Returns:
            ``Empty``, ``Single`` or ``Many`` depending on the batch size.
        """
        opts = self._options(options, kwargs)
        count = _query_count(query)
        log_query("execute", "called", return_type=opts.return_type.name, query_count=count)
        started = time.perf_counter()

        try:
            async with self.session() as session:
                result = await self._run(session, query, opts, asyncio.Lock())
        except Exception as e:
            logger.error(f"Query execution failed: {e}", exc_info=True)
            self.notify_error(e, query)
            raise

        log_query(
            "execute",
            "completed",
            return_type=opts.return_type.name,
            query_count=count,
            duration=time.perf_counter() - started,
        )
        return result

    async def _run_block(self, tx: Any, block: TransactionBlock, options: QueryOptions, *, managed: bool = False) -> Any:
        lock = asyncio.Lock()
        last_query: Any = None

        async def execute(query: Any, call_options: Any = None, **kwargs: Any) -> QueryResult:
            nonlocal last_query
            last_query = query
            opts = self._options(options if call_options is None else call_options, kwargs)
            return await self._run(tx, query, opts, lock)

        try:
            result = block(execute, tx)
            if inspect.isawaitable(result):
                result = await result

            if not managed and not tx.closed():
                await tx.commit()
            return result
        except Exception as e:
            logger.error(f"Transaction failed: {e}", exc_info=True)
            self.notify_error(e, last_query)

            if not managed and not tx.closed():
                try:
                    await tx.rollback()
                except Exception:
                    logger.warning("Rollback failed", exc_info=True)
            raise

    @staticmethod
    def _as_block(block_or_query: Any) -> TransactionBlock:
        if callable(block_or_query):
            return block_or_query

        async def run_query(execute: Execute, tx: Any) -> QueryResult:
            return await execute(block_or_query)

        return run_query

    async def transaction(
        self,
        block_or_query: Any,
        options: Union[QueryOptions, Mapping[str, Any], None] = None,
        **kwargs: Any,
    ) -> Any:
        """Run a block (or a query/batch) in one explicit transaction.

        The block is called as ``block(execute, tx)`` where ``execute`` has the
        same signature as ``Neo4jClient.execute`` but runs inside the
        transaction. The transaction commits when the block returns and rolls
        back when it raises; the error is re-raised after the rollback.
        """
        opts = self._options(options, kwargs)
        block = self._as_block(block_or_query)
        log_query("transaction", "called", return_type=opts.return_type.name)
        started = time.perf_counter()

        async with self.session() as session:
            tx = await session.begin_transaction()
            result = await self._run_block(tx, block, opts)

        log_query("transaction", "completed", return_type=opts.return_type.name, duration=time.perf_counter() - started)
        return result

    async def _managed_transaction(self, access: str, block_or_query: Any, opts: QueryOptions) -> Any:
        block = self._as_block(block_or_query)

        async def work(tx: Any) -> Any:
            return await self._run_block(tx, block, opts, managed=True)

        log_query(f"{access}_transaction", "called", return_type=opts.return_type.name)
        started = time.perf_counter()

        async with self.session() as session:
            if access == "read":
                result = await session.execute_read(work)
            else:
                result = await session.execute_write(work)

        log_query(f"{access}_transaction", "completed", return_type=opts.return_type.name, duration=time.perf_counter() - started)
        return result

    async def read_transaction(
        self,
        block_or_query: Any,
        options: Union[QueryOptions, Mapping[str, Any], None] = None,
        **kwargs: Any,
    ) -> Any:
        """Like ``transaction`` but as a driver-managed read transaction."""
        return await self._managed_transaction("read", block_or_query, self._options(options, kwargs))

    async def write_transaction(
        self,
        block_or_query: Any,
        options: Union[QueryOptions, Mapping[str, Any], None] = None,
        **kwargs: Any,
    ) -> Any:
        """Like ``transaction`` but as a driver-managed write transaction."""
        return await self._managed_transaction("write", block_or_query, self._options(options, kwargs))

    async def __aenter__(self) -> "Neo4jClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

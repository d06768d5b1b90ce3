"""
Neo4j client, session/transaction management and query dispatch.

This package should contain ONLY orchestration around the driver:
- Driver and session lifecycle
- Query specifications and batch execution
- Result containers and chain helpers

Value conversion lives in the `values` package.
"""

from . import results
from .client import Neo4jClient
from .query import QuerySpec, to_query_spec, to_query_specs
from .results import Empty, Many, QueryOptions, QueryResult, Result, ReturnType, Single, first, then_map, unwrap

__all__ = [
    "Empty",
    "Many",
    "Neo4jClient",
    "QueryOptions",
    "QueryResult",
    "QuerySpec",
    "Result",
    "ReturnType",
    "Single",
    "first",
    "results",
    "then_map",
    "to_query_spec",
    "to_query_specs",
    "unwrap",
]

"""Convenience layer over the Neo4j Python driver.

Normalizes query parameters, runs single queries or batches against a
session or transaction, and converts records into plain dicts.
"""

from .config import Config
from .errors import CypherkitError, QuerySpecError
from .neo4j import (
    Empty,
    Many,
    Neo4jClient,
    QueryOptions,
    QuerySpec,
    Result,
    ReturnType,
    Single,
    first,
    results,
    then_map,
    unwrap,
)
from .values import DateType, TemporalType, TemporalValue, normalize_params, parse_date, parse_response

__version__ = "0.1.0"

__all__ = [
    "Config",
    "CypherkitError",
    "DateType",
    "Empty",
    "Many",
    "Neo4jClient",
    "QueryOptions",
    "QuerySpec",
    "QuerySpecError",
    "Result",
    "ReturnType",
    "Single",
    "TemporalType",
    "TemporalValue",
    "first",
    "normalize_params",
    "parse_date",
    "parse_response",
    "results",
    "then_map",
    "unwrap",
]

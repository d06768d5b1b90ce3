"""
Value conversion between Neo4j and Python.

This package contains ONLY value-level logic:
- Temporal/integer codec
- Parameter normalization (Python -> wire)
- Response parsing (wire -> Python)

Sessions, transactions and query dispatch belong in the `neo4j` package.
"""

from .cypher import (
    clear_string_for_regex,
    obj_to_params,
    obj_to_string,
    parse_date_cypher,
    to_float_or_none,
    to_int_or_none,
)
from .params import normalize_params, normalize_value
from .response import field_name, has_fields, parse_response
from .temporal import (
    DateType,
    TemporalType,
    TemporalValue,
    is_temporal,
    is_wire_integer,
    parse_date,
    to_epoch_millis,
    to_native,
    to_timestamp,
)

__all__ = [
    "DateType",
    "TemporalType",
    "TemporalValue",
    "clear_string_for_regex",
    "field_name",
    "has_fields",
    "is_temporal",
    "is_wire_integer",
    "normalize_params",
    "normalize_value",
    "obj_to_params",
    "obj_to_string",
    "parse_date",
    "parse_date_cypher",
    "parse_response",
    "to_epoch_millis",
    "to_float_or_none",
    "to_int_or_none",
    "to_native",
    "to_timestamp",
]

"""Query parameter normalization.

Parameters are walked recursively and rebuilt before dispatch so that
the driver receives wire-safe values: integral numbers become built-in
``int`` (sent as Bolt integers), NaN becomes ``null`` and nested
mappings/sequences are copied level by level. Values the driver already
understands natively (temporal values, durations, spatial points,
wire integers) are never re-encoded. The caller's objects are left untouched.
"""

from __future__ import annotations

import math
import numbers
from typing import Any, Dict, List, Mapping, Optional, Union

from neo4j.spatial import Point
from neo4j.time import Duration

from .temporal import TemporalValue, is_temporal, is_wire_integer, to_wire_integer

Params = Union[Dict[str, Any], List[Any]]

# Tuple subclasses the driver encodes as their own Bolt structures.
WIRE_STRUCTURES = (Duration, Point)


def normalize_value(value: Any) -> Any:
    """Return the wire-safe form of a single parameter value."""
    if value is None:
        return None
    if isinstance(value, TemporalValue):
        return value.value
    if is_temporal(value) or is_wire_integer(value) or isinstance(value, (bool, WIRE_STRUCTURES)):
        return value
    if isinstance(value, float):
        return None if math.isnan(value) else value
    if isinstance(value, numbers.Integral):
        return to_wire_integer(value)
    if isinstance(value, (list, tuple)):
        return [normalize_value(item) for item in value]
    if isinstance(value, Mapping):
        return {key: normalize_value(item) for key, item in value.items()}
    return value


def normalize_params(params: Optional[Union[Mapping[str, Any], List[Any]]]) -> Optional[Params]:
    """Build a normalized copy of a query's parameters.

    Returns None when no parameters were given.
    """
    if params is None:
        return None
    if not isinstance(params, (Mapping, list, tuple)):
        raise TypeError(f"Query parameters must be a mapping, got {type(params).__name__}")
    return normalize_value(params)
